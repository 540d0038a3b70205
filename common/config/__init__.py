"""
Configuration module - pydantic-settings base class shared by services.
"""

from common.config.base_settings import BaseAppSettings, DEFAULT_JWT_SECRET

__all__ = ["BaseAppSettings", "DEFAULT_JWT_SECRET"]
