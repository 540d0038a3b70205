"""
Shared infrastructure for the intake service.

- auth: bearer-token providers and the FastAPI dependency that checks them
- utils: response envelopes and HTTP exceptions with JSON bodies
- config: pydantic-settings base class
"""

from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils import (
    success_response,
    list_response,
    APIException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
)
from common.config import BaseAppSettings

__all__ = [
    # Auth
    "AuthProvider",
    "JWTAuth",
    "create_auth_dependency",
    # Utils
    "success_response",
    "list_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    # Config
    "BaseAppSettings",
]
