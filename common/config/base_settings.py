"""
Environment-driven settings shared by services.

Values come from environment variables or a ``.env`` file (pydantic-settings).
Services subclass ``BaseAppSettings`` and add their own fields.

Example:
    class Settings(BaseAppSettings):
        STORAGE_BACKEND: str = "memory"

    settings = Settings()
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# Accepted outside production only
DEFAULT_JWT_SECRET = "dev-only-insecure-secret"


class BaseAppSettings(BaseSettings):
    """Server, CORS and token settings."""

    # ==========================================================================
    # Tokens
    # ==========================================================================
    JWT_SECRET: Optional[str] = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # ==========================================================================
    # Server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # Comma-separated origins, or "*"
    CORS_ORIGINS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=True,
    )

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Refuse to start with an unusable configuration.

        Raises:
            ValueError: Listing every problem found
        """
        problems = []

        if not self.JWT_SECRET:
            problems.append("JWT_SECRET is required")
        elif self.is_production() and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            problems.append("JWT_SECRET must be changed from the development default in production")

        if self.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            problems.append(f"LOG_LEVEL {self.LOG_LEVEL!r} is not a logging level")

        if problems:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(problems))
