"""
Local JSON-file application store.

Persists an array of application records under a fixed key in a JSON
file, for running the intake without a backend. Every operation reads
the file, so several processes pointed at the same path see each
other's writes. File access runs in a worker thread so the event loop
is never blocked, and a lock serializes read-modify-write cycles within
one process.
"""

import asyncio
import json
import logging
import os
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate
from app.services.storage.base import (
    ApplicationStore,
    DuplicateApplicationError,
    StorageError,
    apply_changes,
    build_record,
    format_application_id,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "insurance_applications"

# Random suffixes are drawn from 0..999
SUFFIX_SPACE = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocalApplicationStore(ApplicationStore):
    """
    File-backed store with random identifiers.

    Identifiers are INS-<year>-<random 000-999>. A drawn suffix that is
    already stored is re-drawn, so identifiers stay unique.
    """

    name = "local"

    # Random draws before falling back to scanning for a free suffix
    MAX_RANDOM_DRAWS = 20

    def __init__(
        self,
        path: Union[str, Path],
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize LocalApplicationStore.

        Args:
            path: JSON file holding the records
            rng: Random source for identifier suffixes
            clock: Source of the current time
        """
        self._path = Path(path)
        self._rng = rng or random.Random()
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            await asyncio.to_thread(self._write, [])
        # Fail fast on a corrupt file
        records = await asyncio.to_thread(self._read)
        logger.info(f"Local application store opened: {self._path} ({len(records)} records)")

    # ─────────────────────────────────────────────────────────────────
    # File access
    # ─────────────────────────────────────────────────────────────────

    def _read(self) -> List[ApplicationRecord]:
        if not self._path.exists():
            return []

        try:
            with self._path.open("r", encoding="utf-8") as f:
                document: Dict[str, Any] = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e

        try:
            return [
                ApplicationRecord.model_validate(item)
                for item in document.get(STORAGE_KEY, [])
            ]
        except (AttributeError, ValidationError) as e:
            raise StorageError(f"Malformed application data in {self._path}: {e}") from e

    def _write(self, records: List[ApplicationRecord]) -> None:
        document = {STORAGE_KEY: [r.model_dump(mode="json") for r in records]}
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    # ─────────────────────────────────────────────────────────────────
    # Identifiers
    # ─────────────────────────────────────────────────────────────────

    def _generate_id(self, year: int, taken: set) -> str:
        for _ in range(self.MAX_RANDOM_DRAWS):
            candidate = format_application_id(year, self._rng.randrange(SUFFIX_SPACE))
            if candidate not in taken:
                return candidate

        for suffix in range(SUFFIX_SPACE):
            candidate = format_application_id(year, suffix)
            if candidate not in taken:
                return candidate

        raise StorageError(f"No free application IDs left for {year}")

    # ─────────────────────────────────────────────────────────────────
    # CRUD
    # ─────────────────────────────────────────────────────────────────

    async def create(self, application: ApplicationCreate) -> ApplicationRecord:
        now = self._clock()
        async with self._lock:
            records = await asyncio.to_thread(self._read)
            taken = {r.applicationId for r in records}

            if application.applicationId:
                if application.applicationId in taken:
                    raise DuplicateApplicationError(application.applicationId)
                application_id = application.applicationId
            else:
                application_id = self._generate_id(now.year, taken)

            record = build_record(application, application_id, now)
            records.append(record)
            await asyncio.to_thread(self._write, records)

        logger.info(f"Application saved locally: {application_id}")
        return record

    async def read(self, application_id: str) -> Optional[ApplicationRecord]:
        for record in await asyncio.to_thread(self._read):
            if record.applicationId == application_id:
                return record
        return None

    async def update(
        self,
        application_id: str,
        changes: ApplicationUpdate,
    ) -> Optional[ApplicationRecord]:
        async with self._lock:
            records = await asyncio.to_thread(self._read)
            for index, record in enumerate(records):
                if record.applicationId == application_id:
                    updated = apply_changes(record, changes)
                    records[index] = updated
                    await asyncio.to_thread(self._write, records)
                    logger.info(f"Local application updated: {application_id}")
                    return updated
        return None

    async def delete(self, application_id: str) -> bool:
        async with self._lock:
            records = await asyncio.to_thread(self._read)
            remaining = [r for r in records if r.applicationId != application_id]
            if len(remaining) == len(records):
                return False

            await asyncio.to_thread(self._write, remaining)
        logger.info(f"Local application deleted: {application_id}")
        return True

    async def list(self) -> List[ApplicationRecord]:
        return await asyncio.to_thread(self._read)
