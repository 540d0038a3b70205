"""
FastAPI dependencies for bearer-token authentication.

Example:
    require_auth = create_auth_dependency(get_auth_provider)

    @router.get("/me")
    async def me(username: Annotated[str, Depends(require_auth)]):
        ...
"""

from typing import Callable, Optional

from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException


def extract_bearer_token(authorization: Optional[str], scheme: str = "Bearer") -> str:
    """
    Return the token from an ``Authorization: <scheme> <token>`` value.

    Raises:
        UnauthorizedException: Header missing, wrong scheme, or empty token
    """
    if not authorization:
        raise UnauthorizedException("Missing authorization header")

    found_scheme, _, token = authorization.partition(" ")
    if found_scheme != scheme:
        raise UnauthorizedException(
            f"Invalid authorization scheme. Expected: {scheme}",
            code="INVALID_AUTH_SCHEME",
        )

    token = token.strip()
    if not token:
        raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")
    return token


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Build a dependency that resolves to the authenticated user's ID.

    Args:
        get_auth_provider: Returns the provider at request time
        header_name: Header carrying the token
        scheme: Expected scheme prefix

    Returns:
        An async FastAPI dependency yielding the token's ``sub``
    """

    async def get_current_user_id(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> str:
        token = extract_bearer_token(authorization, scheme)

        try:
            claims = await get_auth_provider().verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        user_id = claims.get("sub")
        if not user_id:
            raise UnauthorizedException("Token missing user ID", code="INVALID_TOKEN")
        return user_id

    return get_current_user_id
