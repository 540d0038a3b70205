"""
FastAPI dependencies for the insurance intake API.

Provides dependency injection for all services.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Header

from common.auth import JWTAuth, create_auth_dependency, extract_bearer_token
from common.auth.base import AuthProvider

from app.config import Settings
from app.services.auth.user_directory import UserDirectory
from app.services.captcha import CaptchaService, ChallengeStore
from app.services.storage import (
    ApplicationStore,
    LocalApplicationStore,
    MemoryApplicationStore,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Service instances (initialized at startup)
# ─────────────────────────────────────────────────────────────────

_application_store: Optional[ApplicationStore] = None

_auth_provider: Optional[AuthProvider] = None
_challenge_store: Optional[ChallengeStore] = None


# ─────────────────────────────────────────────────────────────────
# Cached singletons
# ─────────────────────────────────────────────────────────────────

@lru_cache()
def get_captcha_service() -> CaptchaService:
    """Get cached CaptchaService instance."""
    return CaptchaService()


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def build_application_store(settings: Settings) -> ApplicationStore:
    """
    Create the configured storage backend. The caller opens and closes it.

    Raises:
        ValueError: If STORAGE_BACKEND names no known backend
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryApplicationStore()
    if settings.uses_local_storage():
        return LocalApplicationStore(settings.LOCAL_STORE_PATH)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


def init_storage(store: ApplicationStore) -> None:
    """Register an opened application store."""
    global _application_store
    _application_store = store


def init_auth_services(settings: Settings, directory: Optional[UserDirectory] = None) -> None:
    """Initialize the user directory, token issuer and captcha challenges."""
    global _auth_provider, _challenge_store

    directory = directory or UserDirectory()
    _auth_provider = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        get_user=directory.find,
        get_user_by_id=directory.get,
    )
    _challenge_store = ChallengeStore(
        captcha_service=get_captcha_service(),
        ttl_seconds=settings.CAPTCHA_TTL_SECONDS,
    )


def init_all_services(settings: Settings, store: ApplicationStore) -> None:
    """
    Initialize all services at application startup.

    Args:
        settings: Application settings
        store: Opened application store
    """
    init_storage(store)
    init_auth_services(settings)
    logger.info(f"Services initialized with {store.name} storage")


def reset_services() -> None:
    """Forget every registered service (shutdown and tests)."""
    global _application_store, _auth_provider, _challenge_store
    _application_store = None
    _auth_provider = None
    _challenge_store = None


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_application_store() -> ApplicationStore:
    """Get application store instance."""
    if _application_store is None:
        raise RuntimeError("Application store not initialized.")
    return _application_store


def get_auth_provider() -> AuthProvider:
    """Get auth provider instance."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_provider


def get_challenge_store() -> ChallengeStore:
    """Get captcha challenge store instance."""
    if _challenge_store is None:
        raise RuntimeError("Auth services not initialized.")
    return _challenge_store


# ─────────────────────────────────────────────────────────────────
# Auth dependencies
# ─────────────────────────────────────────────────────────────────

# Resolves to the username in the token's "sub" claim
require_auth = create_auth_dependency(get_auth_provider)


async def get_bearer_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """Raw bearer token, for logout."""
    return extract_bearer_token(authorization)
