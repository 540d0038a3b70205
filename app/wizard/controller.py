"""
Application wizard state machine.

Holds the current step and the draft, and decides which transitions are
allowed. Persistence happens only on submit, through whatever
``ApplicationStore`` the caller passes in.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from app.pipelines.applications import submit_application_pipeline
from app.schemas.application import ApplicationRecord
from app.services.storage.base import ApplicationStore
from app.wizard.draft import STEP_SECTIONS, STEP_TITLES, ApplicationDraft, WizardStep
from app.wizard.errors import StepValidationError, SubmissionError, WizardError
from app.wizard.summary import flatten_draft, summarize_draft
from app.wizard.validation import step_errors, validate_step_form

logger = logging.getLogger(__name__)


class WizardController:
    """
    Four-step application wizard.

    Usage:
        wizard = WizardController()
        wizard.complete_step(personal_form)     # 1 -> 2
        wizard.complete_step(insurance_form)    # 2 -> 3
        wizard.complete_step(medical_form)      # 3 -> 4
        record = await wizard.submit(store, consent=True, hipaa_consent=True)
    """

    def __init__(self, draft: Optional[ApplicationDraft] = None):
        self._step = WizardStep.PERSONAL_INFO
        self.draft = draft or ApplicationDraft()
        self.submission: Optional[ApplicationRecord] = None
        self._submitting = False

    @property
    def current_step(self) -> WizardStep:
        return self._step

    @property
    def is_submitted(self) -> bool:
        return self.submission is not None

    @property
    def active_section(self) -> Optional[str]:
        """Draft section edited on the current step, None on the summary."""
        return STEP_SECTIONS.get(self._step)

    def step_statuses(self) -> List[Dict[str, Any]]:
        """Stepper view: title, completion and the active marker per step."""
        return [
            {
                "step": int(step),
                **STEP_TITLES[step],
                "isActive": step == self._step,
                "isComplete": step < self._step,
            }
            for step in WizardStep
        ]

    # =========================================================================
    # Data entry
    # =========================================================================
    def update_section(self, section: str, data: Mapping[str, Any]) -> None:
        """Merge partial data into a draft section. No validation."""
        self.draft.merge(section, data)

    def complete_step(self, data: Mapping[str, Any]) -> WizardStep:
        """
        Validate the current step's form, save it and advance.

        Nothing is saved when either the form schema or the step
        predicate rejects the data.

        Raises:
            StepValidationError: With field-level messages
            WizardError: On the summary step, which has no form
        """
        section = self.active_section
        if section is None:
            raise WizardError("The summary step has no form to complete")

        cleaned = validate_step_form(self._step, data)

        candidate = copy.deepcopy(self.draft)
        candidate.merge(section, cleaned)
        self._check_step(self._step, candidate)

        self.draft = candidate
        return self._advance()

    # =========================================================================
    # Navigation
    # =========================================================================
    def next_step(self) -> WizardStep:
        """
        Advance by one step if the current step's data is complete.

        Raises:
            StepValidationError: If required fields are missing or malformed
        """
        if self._step == WizardStep.SUMMARY:
            return self._step

        self._check_step(self._step, self.draft)
        return self._advance()

    def prev_step(self) -> WizardStep:
        if self._step > WizardStep.PERSONAL_INFO:
            self._step = WizardStep(self._step - 1)
        return self._step

    def go_to(self, step: int) -> WizardStep:
        """Jump to any step without validation. Draft data is kept."""
        try:
            self._step = WizardStep(step)
        except ValueError:
            raise ValueError(f"No such wizard step: {step}")
        return self._step

    def _check_step(self, step: WizardStep, draft: ApplicationDraft) -> None:
        errors = step_errors(step, draft)
        if errors:
            logger.warning(f"Step {int(step)} refused, missing or invalid: {sorted(errors)}")
            raise StepValidationError(step, errors)

    def _advance(self) -> WizardStep:
        self._step = WizardStep(self._step + 1)
        logger.debug(f"Wizard advanced to step {int(self._step)}")
        return self._step

    # =========================================================================
    # Summary & submission
    # =========================================================================
    def summary(self) -> List[Dict[str, Any]]:
        return summarize_draft(self.draft)

    async def submit(
        self,
        store: ApplicationStore,
        consent: bool,
        hipaa_consent: bool,
    ) -> ApplicationRecord:
        """
        Submit the finished application to a store.

        Raises:
            SubmissionError: Not on the summary step, consent missing,
                already submitted, or a submit still in flight
            StepValidationError: If a form step is incomplete
        """
        if self._submitting:
            raise SubmissionError("This application is already being submitted")
        if self.is_submitted:
            raise SubmissionError(
                f"Application {self.submission.applicationId} was already submitted"
            )
        if self._step != WizardStep.SUMMARY:
            raise SubmissionError("Applications can only be submitted from the summary step")
        if not (consent and hipaa_consent):
            raise SubmissionError(
                "Please accept both consent agreements to submit your application"
            )

        application = flatten_draft(self.draft)

        self._submitting = True
        try:
            self.submission = await submit_application_pipeline(store, application)
        finally:
            self._submitting = False
        logger.info(f"Application submitted: {self.submission.applicationId}")
        return self.submission

    def reset(self) -> None:
        """Start over with an empty draft on step 1."""
        self._step = WizardStep.PERSONAL_INFO
        self.draft = ApplicationDraft()
        self.submission = None
