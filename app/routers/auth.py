"""
FastAPI router for the login gate.

A captcha challenge must be answered with every login attempt.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import (
    get_auth_provider,
    get_bearer_token,
    get_challenge_store,
    require_auth,
)
from app.pipelines import auth as pipelines
from app.schemas.auth import (
    CaptchaChallengeResponse,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from app.services.captcha import ChallengeStore
from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/captcha", response_model=CaptchaChallengeResponse)
async def new_captcha(
    challenge_store: Annotated[ChallengeStore, Depends(get_challenge_store)],
):
    """Issue a captcha challenge to answer on login."""
    return pipelines.issue_captcha_pipeline(challenge_store)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
    challenge_store: Annotated[ChallengeStore, Depends(get_challenge_store)],
):
    """
    Log in with a demo username/email pair and a captcha answer.

    Failures return 401 with a new challenge in ``details.captcha``.
    """
    return await pipelines.login_pipeline(
        auth=auth,
        challenge_store=challenge_store,
        username=body.username,
        email=body.email,
        challenge_id=body.challengeId,
        captcha_answer=body.captchaAnswer,
    )


@router.post("/logout")
async def logout(
    username: Annotated[str, Depends(require_auth)],
    token: Annotated[str, Depends(get_bearer_token)],
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
):
    result = await pipelines.logout_pipeline(auth, token)
    logger.info(f"User logged out: {username}")
    return result


@router.get("/me", response_model=UserResponse)
async def me(
    username: Annotated[str, Depends(require_auth)],
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
):
    user = await auth.get_user_by_id(username)
    if user is None:
        raise UnauthorizedException("User no longer exists", code="USER_NOT_FOUND")
    return user
