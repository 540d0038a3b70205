"""Unit tests for per-step validation rules."""

import pytest

from app.wizard import (
    ApplicationDraft,
    StepValidationError,
    WizardStep,
    is_step_complete,
    step_errors,
    validate_step_form,
)


def draft_with(**sections):
    return ApplicationDraft(**sections)


# ─────────────────────────────────────────────────────────────────
# step_errors
# ─────────────────────────────────────────────────────────────────


class TestStepErrors:
    def test_complete_personal_info(self, personal_info):
        draft = draft_with(personal_info=personal_info)
        assert step_errors(WizardStep.PERSONAL_INFO, draft) == {}
        assert is_step_complete(1, draft)

    @pytest.mark.parametrize("field_name", [
        "firstName", "lastName", "dateOfBirth", "gender", "email", "phone",
        "address", "city", "state", "zipCode", "ssn",
    ])
    def test_each_required_personal_field(self, personal_info, field_name):
        del personal_info[field_name]
        errors = step_errors(1, draft_with(personal_info=personal_info))
        assert list(errors) == [field_name]

    def test_malformed_ssn(self, personal_info):
        personal_info["ssn"] = "123456789"
        errors = step_errors(1, draft_with(personal_info=personal_info))
        assert errors == {"ssn": "Please enter SSN in XXX-XX-XXXX format"}

    @pytest.mark.parametrize("field_name, value, message", [
        ("email", "not-an-email", "Please enter a valid email address"),
        ("email", "jane@", "Please enter a valid email address"),
        ("phone", "12", "Please enter a valid phone number"),
        ("phone", "555123456", "Please enter a valid phone number"),
        ("zipCode", "ABCDE", "Please enter a valid ZIP code"),
        ("zipCode", "6270", "Please enter a valid ZIP code"),
        ("zipCode", "62701-12", "Please enter a valid ZIP code"),
    ])
    def test_malformed_personal_field(self, personal_info, field_name, value, message):
        personal_info[field_name] = value
        errors = step_errors(1, draft_with(personal_info=personal_info))
        assert errors == {field_name: message}

    def test_zip_plus_four_passes(self, personal_info):
        personal_info["zipCode"] = "62701-1234"
        assert is_step_complete(1, draft_with(personal_info=personal_info))

    def test_short_emergency_contact_phone(self, medical_info):
        medical_info["emergencyContactPhone"] = "555"
        errors = step_errors(3, draft_with(medical_info=medical_info))
        assert errors == {"emergencyContactPhone": "Emergency contact phone is required"}

    def test_unknown_coverage_type(self, insurance_info):
        insurance_info["coverageType"] = "group"
        errors = step_errors(2, draft_with(insurance_info=insurance_info))
        assert errors == {"coverageType": "Please select coverage type"}

    def test_optional_insurance_fields(self):
        draft = draft_with(insurance_info={
            "insuranceProvider": "Acme",
            "policyNumber": "P1",
            "coverageType": "individual",
            "effectiveDate": "2025-01-01",
        })
        assert is_step_complete(2, draft)

    def test_medical_answers_must_be_yes_or_no(self, medical_info):
        medical_info["hasAllergies"] = "maybe"
        errors = step_errors(3, draft_with(medical_info=medical_info))
        assert errors == {"hasAllergies": "Please select an option"}

    def test_predicate_ignores_conditional_details(self, medical_info):
        medical_info["hasAllergies"] = "yes"
        assert is_step_complete(3, draft_with(medical_info=medical_info))

    def test_summary_always_passes(self):
        assert step_errors(WizardStep.SUMMARY, ApplicationDraft()) == {}


# ─────────────────────────────────────────────────────────────────
# validate_step_form
# ─────────────────────────────────────────────────────────────────


class TestValidateStepForm:
    def test_personal_form_cleaned(self, personal_info):
        cleaned = validate_step_form(1, personal_info)
        assert cleaned == personal_info

    def test_field_messages(self, personal_info):
        personal_info["zipCode"] = "ABCDE"
        personal_info["firstName"] = ""

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(1, personal_info)

        assert exc_info.value.step == 1
        assert exc_info.value.errors == {
            "firstName": "First name is required",
            "zipCode": "Please enter a valid ZIP code",
        }

    def test_zip_plus_four_accepted(self, personal_info):
        personal_info["zipCode"] = "62701-1234"
        assert validate_step_form(1, personal_info)["zipCode"] == "62701-1234"

    def test_short_emergency_contact_phone_refused(self, medical_info):
        medical_info["emergencyContactPhone"] = "555-1234"

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(3, medical_info)

        assert exc_info.value.errors == {
            "emergencyContactPhone": "Emergency contact phone is required",
        }

    def test_chronic_conditions_required_after_yes(self, medical_info):
        medical_info["hasChronicConditions"] = "yes"

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(3, medical_info)

        assert exc_info.value.errors == {
            "chronicConditionsList": "Please list your chronic conditions",
        }

    def test_medications_required_after_yes(self, medical_info):
        medical_info["medications"] = []

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(3, medical_info)

        assert "medications" in exc_info.value.errors

    def test_allergies_required_after_yes(self, medical_info):
        medical_info["hasAllergies"] = "yes"
        medical_info["allergiesList"] = ""

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(3, medical_info)

        assert exc_info.value.errors == {"allergiesList": "Please list your allergies"}

    def test_details_optional_after_no(self, medical_info):
        medical_info["takingMedications"] = "no"
        medical_info["medications"] = []

        cleaned = validate_step_form(3, medical_info)
        assert cleaned["takingMedications"] == "no"

    def test_medication_entries_validated(self, medical_info):
        medical_info["medications"] = [{"name": "Aspirin", "dosage": "", "frequency": "daily"}]

        with pytest.raises(StepValidationError) as exc_info:
            validate_step_form(3, medical_info)

        assert exc_info.value.errors == {"medications.0.dosage": "Dosage is required"}
