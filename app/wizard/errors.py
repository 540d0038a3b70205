"""
Wizard errors.
"""

from typing import Dict


class WizardError(Exception):
    """Base class for wizard failures."""


class StepValidationError(WizardError):
    """
    A step's data is missing required fields or is malformed.

    Attributes:
        step: The step that was refused
        errors: Field name -> message, for inline display
    """

    def __init__(self, step: int, errors: Dict[str, str]):
        self.step = step
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Step {step} is incomplete: {fields}")


class SubmissionError(WizardError):
    """The application cannot be submitted in the wizard's current state."""
