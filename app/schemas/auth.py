"""
Authentication request/response schemas.
"""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Login attempt with the answer to a previously issued captcha."""

    username: str = Field(min_length=1)
    email: EmailStr
    challengeId: str = Field(min_length=1)
    captchaAnswer: str = ""


class CaptchaChallengeResponse(BaseModel):
    """A captcha question; the expected answer never leaves the server."""

    challengeId: str
    question: str


class UserResponse(BaseModel):
    """Demo user in responses."""

    username: str
    email: str


class LoginResponse(BaseModel):
    user: UserResponse
    accessToken: str
    tokenType: str = "bearer"
