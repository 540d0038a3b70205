"""
Application storage backends.
"""

from app.services.storage.base import (
    ApplicationStore,
    ApplicationValidationError,
    DuplicateApplicationError,
    StorageError,
    format_application_id,
)
from app.services.storage.memory_store import MemoryApplicationStore
from app.services.storage.local_store import LocalApplicationStore, STORAGE_KEY
from app.services.storage.api_client import ApiApplicationClient

__all__ = [
    "ApplicationStore",
    "ApplicationValidationError",
    "DuplicateApplicationError",
    "StorageError",
    "format_application_id",
    "MemoryApplicationStore",
    "LocalApplicationStore",
    "STORAGE_KEY",
    "ApiApplicationClient",
]
