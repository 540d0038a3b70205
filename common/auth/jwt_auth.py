"""
JWT authentication provider (python-jose).

Tokens are signed with a shared secret and carry the username in ``sub``.
Revocation is an in-memory deny list, so a logout holds for the life of
the process that handled it.

Example:
    directory = UserDirectory()
    auth = JWTAuth(
        secret=settings.JWT_SECRET,
        get_user=directory.find,
        get_user_by_id=directory.get,
    )

    user = await auth.verify_credentials("jane_smith", "jane.smith@example.com")
    token = await auth.create_token(user["username"])
    (await auth.verify_token(token))["sub"]  # "jane_smith"
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from jose import JWTError, jwt

from common.auth.base import AuthProvider


# (username, email) -> user or None
UserLookupCallback = Callable[[str, str], Awaitable[Optional[Dict[str, Any]]]]
# username -> user or None
UserByIdCallback = Callable[[str], Awaitable[Optional[Dict[str, Any]]]]


class JWTAuth(AuthProvider):
    """
    Signs and verifies JWTs; user lookups go through callbacks.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 30,
        get_user: Optional[UserLookupCallback] = None,
        get_user_by_id: Optional[UserByIdCallback] = None,
    ):
        """
        Initialize JWTAuth.

        Args:
            secret: Signing key
            algorithm: Signing algorithm
            access_token_expire_minutes: Token lifetime
            get_user: Finds a user by username and email
            get_user_by_id: Finds a user by username
        """
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

        self._find_user = get_user
        self._load_user = get_user_by_id

        self._revoked: Set[str] = set()

    async def verify_credentials(self, username: str, email: str) -> Dict[str, Any]:
        if self._find_user is None:
            raise NotImplementedError("JWTAuth was created without a get_user callback")

        user = await self._find_user(username, email)
        if not user:
            raise ValueError("Invalid username or email")
        return dict(user)

    async def create_token(self, user_id: str, **claims: Any) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.access_token_expire,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        if token in self._revoked:
            raise ValueError("Token has been revoked")

        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")

    async def revoke_token(self, token: str) -> None:
        self._revoked.add(token)

    async def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        if self._load_user is None:
            raise NotImplementedError("JWTAuth was created without a get_user_by_id callback")
        return await self._load_user(user_id)
