"""
Auth pipeline functions.

Stateless orchestration for the captcha-gated demo login.
"""

import logging
from typing import Any, Dict

from app.services.captcha import ChallengeStore
from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


def issue_captcha_pipeline(challenge_store: ChallengeStore) -> Dict[str, str]:
    """
    Issue a fresh captcha challenge.

    Returns:
        dict with challengeId and question (never the answer)
    """
    challenge_id, challenge = challenge_store.issue()
    return {"challengeId": challenge_id, "question": challenge.question}


def _login_failed(
    challenge_store: ChallengeStore,
    message: str,
    code: str,
) -> UnauthorizedException:
    return UnauthorizedException(
        message=message,
        code=code,
        details={"captcha": issue_captcha_pipeline(challenge_store)},
    )


async def login_pipeline(
    auth: AuthProvider,
    challenge_store: ChallengeStore,
    username: str,
    email: str,
    challenge_id: str,
    captcha_answer: str,
) -> Dict[str, Any]:
    """
    Orchestrates the demo login flow.

    The challenge is consumed by this attempt whatever the outcome; every
    failure carries a new challenge so the user can retry.

    Args:
        auth: Token issuer and user lookup
        challenge_store: Pending captcha challenges
        username: Demo username, matched exactly
        email: Demo email, matched case-insensitively
        challenge_id: Challenge the answer belongs to
        captcha_answer: User's answer

    Returns:
        dict with user, accessToken and tokenType

    Raises:
        UnauthorizedException: Captcha failed or unknown credentials
    """
    if not challenge_store.check(challenge_id, captcha_answer):
        logger.warning(f"Captcha failed for login attempt: {username}")
        raise _login_failed(
            challenge_store,
            "Incorrect captcha answer. Please try again.",
            "CAPTCHA_FAILED",
        )

    try:
        user = await auth.verify_credentials(username, email)
    except ValueError:
        logger.warning(f"Login failed, unknown credentials: {username}")
        raise _login_failed(
            challenge_store,
            "Invalid username or email. Please check your credentials.",
            "LOGIN_FAILED",
        )

    token = await auth.create_token(user["username"], email=user["email"])
    logger.info(f"User logged in: {user['username']}")

    return {
        "user": {"username": user["username"], "email": user["email"]},
        "accessToken": token,
        "tokenType": "bearer",
    }


async def logout_pipeline(auth: AuthProvider, token: str) -> Dict[str, str]:
    await auth.revoke_token(token)
    return {"message": "Logged out"}
