"""
Pending captcha challenges for the login gate.

Holds issued challenges until they are answered or expire. Each
challenge answers exactly one login attempt.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from app.services.captcha.captcha_service import CaptchaChallenge, CaptchaService

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PendingChallenge:
    challenge: CaptchaChallenge
    expires_at: datetime


class ChallengeStore:
    """
    In-memory map of challenge ID to pending challenge.
    """

    def __init__(
        self,
        captcha_service: CaptchaService,
        ttl_seconds: int = 300,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize ChallengeStore.

        Args:
            captcha_service: Generates and verifies challenges
            ttl_seconds: How long an issued challenge can be answered
            clock: Source of the current time
        """
        self._captcha_service = captcha_service
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._pending: Dict[str, PendingChallenge] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def issue(self) -> Tuple[str, CaptchaChallenge]:
        """
        Generate and remember a new challenge.

        Returns:
            tuple of (challenge_id, challenge)
        """
        self.purge_expired()

        challenge_id = secrets.token_urlsafe(16)
        challenge = self._captcha_service.generate()
        self._pending[challenge_id] = PendingChallenge(
            challenge=challenge,
            expires_at=self._clock() + self._ttl,
        )
        return challenge_id, challenge

    def consume(self, challenge_id: str) -> Optional[CaptchaChallenge]:
        """
        Remove and return a pending challenge.

        Returns:
            The challenge, or None if unknown or expired
        """
        pending = self._pending.pop(challenge_id, None)
        if pending is None:
            return None

        if pending.expires_at <= self._clock():
            logger.info("Captcha challenge expired before it was answered")
            return None

        return pending.challenge

    def check(self, challenge_id: str, answer: Optional[str]) -> bool:
        """Consume a challenge and verify the answer against it."""
        challenge = self.consume(challenge_id)
        if challenge is None:
            return False
        return self._captcha_service.verify(answer, challenge.answer)

    def purge_expired(self) -> int:
        """Drop expired challenges. Returns how many were removed."""
        now = self._clock()
        expired = [cid for cid, p in self._pending.items() if p.expires_at <= now]
        for challenge_id in expired:
            del self._pending[challenge_id]
        return len(expired)
