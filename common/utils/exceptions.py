"""
HTTP exceptions carrying a JSON error body.

Each exception's ``detail`` is the response body itself:
``{"message": ..., "code": ..., "details": ..., "errors": [...]}`` with
the optional keys left out when empty. The handler in ``api.py`` returns
it unchanged.

Example:
    from common.utils import NotFoundException

    record = await store.read(application_id)
    if record is None:
        raise NotFoundException("Application not found", code="APPLICATION_NOT_FOUND")
"""

from typing import Any, Dict, List, Optional

from fastapi import HTTPException


class APIException(HTTPException):
    """Base class: an HTTP status plus a message and machine-readable code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            message: Shown to the user as-is
            code: Stable identifier clients can branch on
            details: Extra payload, e.g. a replacement captcha challenge
            errors: Field-level problems as {field, message} dicts
            headers: Extra response headers
        """
        body: Dict[str, Any] = {"message": message}
        if code:
            body["code"] = code
        if details is not None:
            body["details"] = details
        if errors:
            body["errors"] = errors

        super().__init__(status_code=status_code, detail=body, headers=headers)

    @property
    def message(self) -> str:
        return self.detail["message"]

    @property
    def code(self) -> Optional[str]:
        return self.detail.get("code")


class UnauthorizedException(APIException):
    """401 - missing, invalid or revoked credentials, or a failed login."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(
            401,
            message,
            code,
            details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundException(APIException):
    """404 - no resource with that identifier."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class ConflictException(APIException):
    """409 - the identifier is already taken."""

    def __init__(
        self,
        message: str = "Conflict",
        code: str = "CONFLICT",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)
