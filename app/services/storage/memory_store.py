"""
In-memory application store.

Backs the REST API. Records live for the life of the process.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate
from app.services.storage.base import (
    ApplicationStore,
    DuplicateApplicationError,
    apply_changes,
    build_record,
    format_application_id,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryApplicationStore(ApplicationStore):
    """
    Dict-backed store with counter-based identifiers.

    Generated IDs are INS-<year>-001, INS-<year>-002, ... in creation order.
    Callers always get copies, so mutating a returned record never
    changes what is stored.
    """

    name = "memory"

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._records: Dict[str, ApplicationRecord] = {}
        self._counter = 0

    async def open(self) -> None:
        logger.info("Memory application store ready")

    async def close(self) -> None:
        self._records.clear()
        self._counter = 0

    def _next_id(self, year: int) -> str:
        # Skip over IDs that callers supplied explicitly
        while True:
            self._counter += 1
            application_id = format_application_id(year, self._counter)
            if application_id not in self._records:
                return application_id

    async def create(self, application: ApplicationCreate) -> ApplicationRecord:
        now = self._clock()

        if application.applicationId:
            if application.applicationId in self._records:
                raise DuplicateApplicationError(application.applicationId)
            application_id = application.applicationId
        else:
            application_id = self._next_id(now.year)

        record = build_record(application, application_id, now)
        self._records[application_id] = record

        logger.info(f"Application created: {application_id}")
        return record.model_copy(deep=True)

    async def read(self, application_id: str) -> Optional[ApplicationRecord]:
        record = self._records.get(application_id)
        return record.model_copy(deep=True) if record is not None else None

    async def update(
        self,
        application_id: str,
        changes: ApplicationUpdate,
    ) -> Optional[ApplicationRecord]:
        existing = self._records.get(application_id)
        if existing is None:
            return None

        updated = apply_changes(existing, changes)
        self._records[application_id] = updated

        logger.info(f"Application updated: {application_id}")
        return updated.model_copy(deep=True)

    async def delete(self, application_id: str) -> bool:
        removed = self._records.pop(application_id, None) is not None
        if removed:
            logger.info(f"Application deleted: {application_id}")
        return removed

    async def list(self) -> List[ApplicationRecord]:
        return [record.model_copy(deep=True) for record in self._records.values()]
