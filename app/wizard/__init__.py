"""
Insurance application wizard.
"""

from app.wizard.controller import WizardController
from app.wizard.draft import STEP_SECTIONS, STEP_TITLES, ApplicationDraft, WizardStep
from app.wizard.errors import StepValidationError, SubmissionError, WizardError
from app.wizard.summary import flatten_draft, summarize_draft
from app.wizard.validation import (
    STEP_FORMS,
    MedicalInfoForm,
    is_step_complete,
    step_errors,
    validate_step_form,
)

__all__ = [
    "WizardController",
    "WizardStep",
    "ApplicationDraft",
    "STEP_SECTIONS",
    "STEP_TITLES",
    "WizardError",
    "StepValidationError",
    "SubmissionError",
    "flatten_draft",
    "summarize_draft",
    "STEP_FORMS",
    "MedicalInfoForm",
    "is_step_complete",
    "step_errors",
    "validate_step_form",
]
