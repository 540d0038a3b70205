"""
Captcha services for the login gate.
"""

from app.services.captcha.captcha_service import CaptchaChallenge, CaptchaService
from app.services.captcha.challenge_store import ChallengeStore

__all__ = ["CaptchaChallenge", "CaptchaService", "ChallengeStore"]
