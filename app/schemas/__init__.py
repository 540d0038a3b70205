"""
Request/response schemas.
"""

from app.schemas.application import (
    ApplicationCreate,
    ApplicationRecord,
    ApplicationUpdate,
    InsuranceDetails,
    MedicalHistory,
    Medication,
    PersonalInfo,
)
from app.schemas.auth import (
    CaptchaChallengeResponse,
    LoginRequest,
    LoginResponse,
    UserResponse,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationRecord",
    "ApplicationUpdate",
    "InsuranceDetails",
    "MedicalHistory",
    "Medication",
    "PersonalInfo",
    "CaptchaChallengeResponse",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
]
