"""
Turning a finished draft into a submission and a review page.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.schemas.application import ApplicationCreate
from app.wizard.draft import STEP_SECTIONS, ApplicationDraft, WizardStep
from app.wizard.errors import StepValidationError
from app.wizard.validation import field_errors, step_errors

NOT_PROVIDED = "Not provided"

YES_NO_FIELDS = ("hasChronicConditions", "takingMedications", "hasAllergies")


def flatten_draft(
    draft: ApplicationDraft,
    submitted_at: Optional[datetime] = None,
) -> ApplicationCreate:
    """
    Flatten the three draft sections into one submitted application.

    yes/no answers become booleans. The draft is not modified.

    Raises:
        StepValidationError: If any form step is incomplete
    """
    for step in STEP_SECTIONS:
        errors = step_errors(step, draft)
        if errors:
            raise StepValidationError(step, errors)

    data: Dict[str, Any] = {}
    for section in draft.to_dict().values():
        data.update(section)

    for field_name in YES_NO_FIELDS:
        data[field_name] = data.get(field_name) == "yes"

    data["status"] = "submitted"
    data["submittedAt"] = submitted_at or datetime.now(timezone.utc)

    try:
        return ApplicationCreate.model_validate(data)
    except ValidationError as e:
        # Field-level problems the step predicate does not cover, e.g. email
        errors = field_errors(e)
        raise StepValidationError(_first_failing_step(errors, draft), errors) from e


def _first_failing_step(errors: Dict[str, str], draft: ApplicationDraft) -> WizardStep:
    for step, section in STEP_SECTIONS.items():
        data = draft.section(section)
        if any(field_name.split(".")[0] in data for field_name in errors):
            return step
    return WizardStep.PERSONAL_INFO


def _display(value: Any) -> str:
    if value is None or value == "" or value == []:
        return NOT_PROVIDED
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _row(label: str, value: Any) -> Dict[str, str]:
    return {"label": label, "value": _display(value)}


def _join(*parts: Any) -> str:
    return " ".join(str(part) for part in parts if part)


def summarize_draft(draft: ApplicationDraft) -> List[Dict[str, Any]]:
    """
    Build the review page: one entry per section.

    Each entry carries the section title, the step its "Edit" action
    returns to, and label/value rows. The SSN is never shown.
    """
    personal = draft.personal_info
    insurance = draft.insurance_info
    medical = draft.medical_info

    address = ", ".join(
        part for part in (
            personal.get("address"),
            personal.get("city"),
            _join(personal.get("state"), personal.get("zipCode")),
        ) if part
    )

    medications = [
        _join(m.get("name"), m.get("dosage"), m.get("frequency") and f"({m['frequency']})")
        for m in medical.get("medications") or []
    ]

    emergency_contact = _join(
        medical.get("emergencyContactName"),
        medical.get("emergencyContactRelationship")
        and f"({medical['emergencyContactRelationship']})",
    )

    return [
        {
            "title": "Personal Information",
            "editStep": int(WizardStep.PERSONAL_INFO),
            "rows": [
                _row("Name", _join(personal.get("firstName"), personal.get("lastName"))),
                _row("Date of Birth", personal.get("dateOfBirth")),
                _row("Gender", personal.get("gender")),
                _row("Email", personal.get("email")),
                _row("Phone", personal.get("phone")),
                _row("Address", address),
            ],
        },
        {
            "title": "Current Insurance Details",
            "editStep": int(WizardStep.INSURANCE_DETAILS),
            "rows": [
                _row("Insurance Provider", insurance.get("insuranceProvider")),
                _row("Policy Number", insurance.get("policyNumber")),
                _row("Coverage Type", insurance.get("coverageType")),
                _row("Effective Date", insurance.get("effectiveDate")),
                _row("Expiration Date", insurance.get("expirationDate")),
                _row("Monthly Premium", insurance.get("monthlyPremium")),
                _row("Annual Deductible", insurance.get("deductible")),
                _row("Coverage Benefits", insurance.get("benefits")),
            ],
        },
        {
            "title": "Medical Information",
            "editStep": int(WizardStep.MEDICAL_INFO),
            "rows": [
                _row("Primary Care Physician", medical.get("physicianName")),
                _row("Physician Phone", medical.get("physicianPhone")),
                _row("Clinic", medical.get("clinicName")),
                _row("Chronic Conditions", medical.get("hasChronicConditions")),
                _row("Condition Details", medical.get("chronicConditionsList")),
                _row("Current Medications", medical.get("takingMedications")),
                _row("Medication List", medications),
                _row("Known Allergies", medical.get("hasAllergies")),
                _row("Allergy Details", medical.get("allergiesList")),
                _row("Emergency Contact", emergency_contact),
                _row("Emergency Contact Phone", medical.get("emergencyContactPhone")),
            ],
        },
    ]
