"""
Insurance intake application settings.

Extends the base settings with intake-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Intake-specific settings."""

    # ==========================================================================
    # Persistence
    # ==========================================================================
    # "memory" keeps records for the life of the process, "local" writes
    # them to a JSON file.
    STORAGE_BACKEND: str = "memory"
    LOCAL_STORE_PATH: str = "data/insurance_applications.json"

    # ==========================================================================
    # Login Gate
    # ==========================================================================
    # How long an issued captcha challenge can be answered
    CAPTCHA_TTL_SECONDS: int = 300

    def uses_local_storage(self) -> bool:
        """Check if applications are persisted to the local JSON file."""
        return self.STORAGE_BACKEND.lower() == "local"


# Global settings instance
settings = Settings()
