"""
Utilities module - response envelopes and HTTP exceptions.
"""

from common.utils.responses import success_response, list_response
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
)

__all__ = [
    "success_response",
    "list_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
]
