"""
Application storage contract.

Every backend stores the same ApplicationRecord type and exposes the same
async CRUD operations, so the wizard and the REST routers can be pointed
at any of them. Stores have an explicit open/close lifecycle and can be
used as async context managers.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate


# Fields a caller can never change after creation
IMMUTABLE_FIELDS = ("applicationId", "createdAt")


class StorageError(Exception):
    """A backend failed to read or write application records."""


class DuplicateApplicationError(StorageError):
    """A caller-supplied application ID is already taken."""

    def __init__(self, application_id: Optional[str]):
        self.application_id = application_id
        super().__init__(f"Application {application_id} already exists")


class ApplicationValidationError(StorageError):
    """A backend rejected the record's fields."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


def format_application_id(year: int, suffix: int) -> str:
    """INS-<year>-<suffix>, suffix zero-padded to at least three digits."""
    return f"INS-{year}-{suffix:03d}"


def build_record(
    application: ApplicationCreate,
    application_id: str,
    created_at: datetime,
) -> ApplicationRecord:
    """Stamp an incoming application with its identifier and creation time."""
    data = application.model_dump()
    data["applicationId"] = application_id
    data["createdAt"] = created_at
    return ApplicationRecord.model_validate(data)


def apply_changes(record: ApplicationRecord, changes: ApplicationUpdate) -> ApplicationRecord:
    """
    Merge the supplied fields of an update into a record.

    Fields the caller did not send keep their stored values.
    """
    updates = {
        key: value
        for key, value in changes.changes().items()
        if key not in IMMUTABLE_FIELDS
    }
    return ApplicationRecord.model_validate({**record.model_dump(), **updates})


class ApplicationStore(ABC):
    """
    Abstract application store.

    Implementations: MemoryApplicationStore (backs the REST API),
    LocalApplicationStore (JSON file) and ApiApplicationClient (REST client).
    """

    name: str = "abstract"

    async def open(self) -> None:
        """Acquire any resources the backend needs."""

    async def close(self) -> None:
        """Release resources acquired by open()."""

    async def __aenter__(self) -> "ApplicationStore":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @abstractmethod
    async def create(self, application: ApplicationCreate) -> ApplicationRecord:
        """
        Store a new application.

        Assigns an identifier when the caller did not supply one and
        stamps the creation time.

        Raises:
            DuplicateApplicationError: If the supplied identifier is taken
        """
        pass

    @abstractmethod
    async def read(self, application_id: str) -> Optional[ApplicationRecord]:
        """Return the record, or None if it does not exist."""
        pass

    @abstractmethod
    async def update(
        self,
        application_id: str,
        changes: ApplicationUpdate,
    ) -> Optional[ApplicationRecord]:
        """
        Change only the supplied fields of a record.

        Returns:
            The updated record, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, application_id: str) -> bool:
        """Remove a record. Returns True if one existed."""
        pass

    @abstractmethod
    async def list(self) -> List[ApplicationRecord]:
        """Return every stored record, oldest first."""
        pass
