"""
Authentication provider contract.

Routers and pipelines depend on ``AuthProvider`` only, so the token
scheme and the user directory behind it can change independently.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class AuthProvider(ABC):
    """
    Verifies who a user is and issues/checks their bearer tokens.

    A user is identified by username; tokens carry it in ``sub``.
    """

    @abstractmethod
    async def verify_credentials(self, username: str, email: str) -> Dict[str, Any]:
        """
        Match a username/email pair against the known users.

        Returns:
            The user ({username, email})

        Raises:
            ValueError: If no user matches
        """

    @abstractmethod
    async def create_token(self, user_id: str, **claims: Any) -> str:
        """Issue a token whose ``sub`` is ``user_id``, plus any extra claims."""

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Decode a token.

        Returns:
            The token's claims

        Raises:
            ValueError: If the token is malformed, expired or revoked
        """

    @abstractmethod
    async def revoke_token(self, token: str) -> None:
        """Make a token fail verification from now on."""

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """The user a token's ``sub`` refers to, or None if unknown."""
