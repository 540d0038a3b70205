"""
Demo user directory for the login gate.

There are no passwords: a user signs in by naming a known username
together with its email address (and solving a captcha).
"""

from typing import Any, Dict, Iterable, List, Optional


DEMO_USERS: List[Dict[str, str]] = [
    {"username": "john_doe", "email": "john.doe@example.com"},
    {"username": "jane_smith", "email": "jane.smith@example.com"},
    {"username": "mike_johnson", "email": "mike.johnson@example.com"},
    {"username": "sarah_wilson", "email": "sarah.wilson@example.com"},
    {"username": "david_brown", "email": "david.brown@example.com"},
]


class UserDirectory:
    """
    Fixed set of users keyed by username.
    """

    def __init__(self, users: Optional[Iterable[Dict[str, str]]] = None):
        self._users: Dict[str, Dict[str, str]] = {
            user["username"]: dict(user)
            for user in (DEMO_USERS if users is None else users)
        }

    async def find(self, username: str, email: str) -> Optional[Dict[str, Any]]:
        """Find a user by exact username and case-insensitive email."""
        user = self._users.get(username)
        if user is None or user["email"].lower() != email.strip().lower():
            return None
        return dict(user)

    async def get(self, username: str) -> Optional[Dict[str, Any]]:
        user = self._users.get(username)
        return dict(user) if user else None
