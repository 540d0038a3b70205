"""
Insurance application request/response schemas.

The flattened application record is assembled from three section models,
one per wizard step. Field names are camelCase on the wire.
"""

import re
from datetime import datetime
from typing import Annotated, Callable, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, EmailStr
from pydantic_core import PydanticCustomError


ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
SSN_PATTERN = re.compile(r"^\d{3}-\d{2}-\d{4}$")
PHONE_MIN_LENGTH = 10

Gender = Literal["male", "female", "other", "prefer-not-to-say"]
CoverageType = Literal["individual", "family"]
Relationship = Literal["spouse", "parent", "child", "sibling", "friend", "other"]
ApplicationStatus = Literal["draft", "submitted"]


def _rule(check: Callable[[str], bool], message: str) -> AfterValidator:
    def validate(value: str) -> str:
        if not check(value):
            raise PydanticCustomError("invalid_field", message)
        return value

    return AfterValidator(validate)


def required(message: str) -> AfterValidator:
    """Reject empty strings with a field-specific message."""
    return _rule(bool, message)


def min_length(length: int, message: str) -> AfterValidator:
    return _rule(lambda value: len(value) >= length, message)


def matches(pattern: "re.Pattern[str]", message: str) -> AfterValidator:
    return _rule(lambda value: pattern.match(value) is not None, message)


PhoneNumber = Annotated[
    str, min_length(PHONE_MIN_LENGTH, "Please enter a valid phone number")
]
ZipCode = Annotated[str, matches(ZIP_CODE_PATTERN, "Please enter a valid ZIP code")]
SocialSecurityNumber = Annotated[
    str, matches(SSN_PATTERN, "Please enter SSN in XXX-XX-XXXX format")
]


class Medication(BaseModel):
    """A single current medication."""

    name: Annotated[str, required("Medication name is required")]
    dosage: Annotated[str, required("Dosage is required")]
    frequency: Annotated[str, required("Frequency is required")]


# =============================================================================
# Sections
# =============================================================================
class PersonalInfo(BaseModel):
    """Step 1: personal details."""

    firstName: Annotated[str, required("First name is required")]
    lastName: Annotated[str, required("Last name is required")]
    dateOfBirth: Annotated[str, required("Date of birth is required")]
    gender: Gender
    email: EmailStr
    phone: PhoneNumber
    address: Annotated[str, required("Address is required")]
    city: Annotated[str, required("City is required")]
    state: Annotated[str, required("State is required")]
    zipCode: ZipCode
    ssn: SocialSecurityNumber


class InsuranceDetails(BaseModel):
    """Step 2: current coverage."""

    insuranceProvider: Annotated[str, required("Insurance provider is required")]
    policyNumber: Annotated[str, required("Policy number is required")]
    coverageType: CoverageType
    effectiveDate: Annotated[str, required("Effective date is required")]
    expirationDate: Optional[str] = None
    monthlyPremium: Optional[str] = None
    deductible: Optional[str] = None
    benefits: List[str] = []


class MedicalHistory(BaseModel):
    """Step 3 as stored: yes/no answers flattened to booleans."""

    physicianName: Optional[str] = None
    physicianPhone: Optional[str] = None
    clinicName: Optional[str] = None
    hasChronicConditions: bool
    chronicConditionsList: Optional[str] = None
    takingMedications: bool
    medications: List[Medication] = []
    hasAllergies: bool
    allergiesList: Optional[str] = None
    emergencyContactName: Annotated[str, required("Emergency contact name is required")]
    emergencyContactPhone: Annotated[
        str, min_length(PHONE_MIN_LENGTH, "Emergency contact phone is required")
    ]
    emergencyContactRelationship: Relationship


# =============================================================================
# Records
# =============================================================================
class ApplicationCreate(PersonalInfo, InsuranceDetails, MedicalHistory):
    """Body of POST /insurance-applications."""

    applicationId: Optional[str] = None
    status: ApplicationStatus = "draft"
    submittedAt: Optional[datetime] = None


class ApplicationRecord(ApplicationCreate):
    """A stored application, shared by every storage backend."""

    applicationId: str
    createdAt: datetime


class ApplicationUpdate(BaseModel):
    """
    Body of PATCH /insurance-applications/{id}.

    Every field is optional, but a field that is sent must satisfy the same
    rules as on create; required fields cannot be cleared with null.
    """

    firstName: Annotated[str, required("First name is required")] = None
    lastName: Annotated[str, required("Last name is required")] = None
    dateOfBirth: Annotated[str, required("Date of birth is required")] = None
    gender: Gender = None
    email: EmailStr = None
    phone: PhoneNumber = None
    address: Annotated[str, required("Address is required")] = None
    city: Annotated[str, required("City is required")] = None
    state: Annotated[str, required("State is required")] = None
    zipCode: ZipCode = None
    ssn: SocialSecurityNumber = None

    insuranceProvider: Annotated[str, required("Insurance provider is required")] = None
    policyNumber: Annotated[str, required("Policy number is required")] = None
    coverageType: CoverageType = None
    effectiveDate: Annotated[str, required("Effective date is required")] = None
    expirationDate: Optional[str] = None
    monthlyPremium: Optional[str] = None
    deductible: Optional[str] = None
    benefits: List[str] = None

    physicianName: Optional[str] = None
    physicianPhone: Optional[str] = None
    clinicName: Optional[str] = None
    hasChronicConditions: bool = None
    chronicConditionsList: Optional[str] = None
    takingMedications: bool = None
    medications: List[Medication] = None
    hasAllergies: bool = None
    allergiesList: Optional[str] = None
    emergencyContactName: Annotated[
        str, required("Emergency contact name is required")
    ] = None
    emergencyContactPhone: Annotated[
        str, min_length(PHONE_MIN_LENGTH, "Emergency contact phone is required")
    ] = None
    emergencyContactRelationship: Relationship = None

    status: ApplicationStatus = None
    submittedAt: Optional[datetime] = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)
