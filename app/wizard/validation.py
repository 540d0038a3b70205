"""
Per-step validation rules for the application wizard.

Two layers guard every "Next":

- ``step_errors`` is the generic predicate over the accumulated draft:
  required fields present, enumerations and formatted fields
  (email, phone numbers, ZIP code, SSN) well-formed.
- The step's form schema (``STEP_FORMS``) validates the submitted form
  data field by field, including the medical details that are required
  only after a "yes" answer.
"""

from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Type

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from app.schemas.application import (
    PHONE_MIN_LENGTH,
    SSN_PATTERN,
    ZIP_CODE_PATTERN,
    InsuranceDetails,
    Medication,
    PersonalInfo,
    Relationship,
    required,
    min_length,
)
from app.wizard.draft import STEP_SECTIONS, ApplicationDraft, WizardStep
from app.wizard.errors import StepValidationError


YES_NO = ("yes", "no")
GENDERS = ("male", "female", "other", "prefer-not-to-say")
COVERAGE_TYPES = ("individual", "family")
RELATIONSHIPS = ("spouse", "parent", "child", "sibling", "friend", "other")

SELECT_AN_OPTION = "Please select an option"

REQUIRED_FIELDS: Dict[WizardStep, Dict[str, str]] = {
    WizardStep.PERSONAL_INFO: {
        "firstName": "First name is required",
        "lastName": "Last name is required",
        "dateOfBirth": "Date of birth is required",
        "gender": "Please select your gender",
        "email": "Please enter a valid email address",
        "phone": "Please enter a valid phone number",
        "address": "Address is required",
        "city": "City is required",
        "state": "State is required",
        "zipCode": "Please enter a valid ZIP code",
        "ssn": "Please enter SSN in XXX-XX-XXXX format",
    },
    WizardStep.INSURANCE_DETAILS: {
        "insuranceProvider": "Insurance provider is required",
        "policyNumber": "Policy number is required",
        "coverageType": "Please select coverage type",
        "effectiveDate": "Effective date is required",
    },
    WizardStep.MEDICAL_INFO: {
        "hasChronicConditions": SELECT_AN_OPTION,
        "takingMedications": SELECT_AN_OPTION,
        "hasAllergies": SELECT_AN_OPTION,
        "emergencyContactName": "Emergency contact name is required",
        "emergencyContactPhone": "Emergency contact phone is required",
        "emergencyContactRelationship": "Please select relationship",
    },
}

FIELD_CHOICES: Dict[WizardStep, Dict[str, tuple]] = {
    WizardStep.PERSONAL_INFO: {"gender": GENDERS},
    WizardStep.INSURANCE_DETAILS: {"coverageType": COVERAGE_TYPES},
    WizardStep.MEDICAL_INFO: {
        "hasChronicConditions": YES_NO,
        "takingMedications": YES_NO,
        "hasAllergies": YES_NO,
        "emergencyContactRelationship": RELATIONSHIPS,
    },
}


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _is_phone(value: str) -> bool:
    return len(value) >= PHONE_MIN_LENGTH


FIELD_FORMATS: Dict[WizardStep, Dict[str, Callable[[str], bool]]] = {
    WizardStep.PERSONAL_INFO: {
        "email": _is_email,
        "phone": _is_phone,
        "zipCode": lambda value: ZIP_CODE_PATTERN.match(value) is not None,
        "ssn": lambda value: SSN_PATTERN.match(value) is not None,
    },
    WizardStep.MEDICAL_INFO: {
        "emergencyContactPhone": _is_phone,
    },
}


def step_errors(step: int, draft: ApplicationDraft) -> Dict[str, str]:
    """
    Check the draft section of a step for required, well-formed fields.

    Returns:
        Field name -> message; empty when the step is complete.
        The summary step has no fields and always passes.
    """
    step = WizardStep(step)
    if step not in STEP_SECTIONS:
        return {}

    data = draft.section(STEP_SECTIONS[step])
    errors: Dict[str, str] = {}

    for field_name, message in REQUIRED_FIELDS[step].items():
        if not data.get(field_name):
            errors[field_name] = message

    for field_name, choices in FIELD_CHOICES[step].items():
        value = data.get(field_name)
        if value and value not in choices:
            errors[field_name] = REQUIRED_FIELDS[step][field_name]

    for field_name, is_well_formed in FIELD_FORMATS.get(step, {}).items():
        value = data.get(field_name)
        if value and not (isinstance(value, str) and is_well_formed(value)):
            errors[field_name] = REQUIRED_FIELDS[step][field_name]

    return errors


def is_step_complete(step: int, draft: ApplicationDraft) -> bool:
    return not step_errors(step, draft)


# =============================================================================
# Step form schemas
# =============================================================================
YesNo = Literal["yes", "no"]

# Detail field -> the yes/no question that makes it required
DETAIL_QUESTIONS = {
    "chronicConditionsList": ("hasChronicConditions", "Please list your chronic conditions"),
    "medications": ("takingMedications", "Please add at least one medication"),
    "allergiesList": ("hasAllergies", "Please list your allergies"),
}


class MedicalInfoForm(BaseModel):
    """Step 3 as entered: yes/no answers plus conditional details."""

    physicianName: Optional[str] = None
    physicianPhone: Optional[str] = None
    clinicName: Optional[str] = None
    hasChronicConditions: YesNo
    chronicConditionsList: Optional[str] = Field(None, validate_default=True)
    takingMedications: YesNo
    medications: List[Medication] = Field(default_factory=list, validate_default=True)
    hasAllergies: YesNo
    allergiesList: Optional[str] = Field(None, validate_default=True)
    emergencyContactName: Annotated[str, required("Emergency contact name is required")]
    emergencyContactPhone: Annotated[
        str, min_length(PHONE_MIN_LENGTH, "Emergency contact phone is required")
    ]
    emergencyContactRelationship: Relationship

    @field_validator("chronicConditionsList", "medications", "allergiesList")
    @classmethod
    def _required_after_yes(cls, value: Any, info: ValidationInfo) -> Any:
        question, message = DETAIL_QUESTIONS[info.field_name]
        if info.data.get(question) == "yes" and not value:
            raise PydanticCustomError("required_when_yes", message)
        return value


STEP_FORMS: Dict[WizardStep, Type[BaseModel]] = {
    WizardStep.PERSONAL_INFO: PersonalInfo,
    WizardStep.INSURANCE_DETAILS: InsuranceDetails,
    WizardStep.MEDICAL_INFO: MedicalInfoForm,
}


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Flatten pydantic errors to field name -> first message."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(field_name, error["msg"])
    return errors


def validate_step_form(step: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate submitted form data against a step's form schema.

    Returns:
        The cleaned field values (unset optional fields omitted)

    Raises:
        StepValidationError: With field-level messages
    """
    step = WizardStep(step)
    form = STEP_FORMS[step]
    try:
        parsed = form.model_validate(dict(data))
    except ValidationError as e:
        raise StepValidationError(step, field_errors(e)) from e

    return parsed.model_dump(mode="json", exclude_none=True)
