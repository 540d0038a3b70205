"""Unit tests for the local JSON-file application store."""

import asyncio
import json
import random

import pytest

from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.services.storage import (
    STORAGE_KEY,
    DuplicateApplicationError,
    LocalApplicationStore,
    StorageError,
    format_application_id,
)


@pytest.fixture
def application(application_payload):
    return ApplicationCreate.model_validate(application_payload)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "applications.json"


@pytest.fixture
def store(store_path, fixed_clock):
    return LocalApplicationStore(store_path, rng=random.Random(7), clock=fixed_clock)


class TestOpen:
    @pytest.mark.asyncio
    async def test_creates_file(self, store, store_path):
        await store.open()

        assert json.loads(store_path.read_text()) == {STORAGE_KEY: []}

    @pytest.mark.asyncio
    async def test_corrupt_file(self, store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json")

        with pytest.raises(StorageError):
            await store.open()


class TestCreate:
    @pytest.mark.asyncio
    async def test_random_id_format(self, store, application):
        await store.open()

        record = await store.create(application)

        assert record.applicationId.startswith("INS-2025-")
        assert len(record.applicationId.split("-")[-1]) == 3

    @pytest.mark.asyncio
    async def test_persists_under_storage_key(self, store, store_path, application):
        await store.open()
        record = await store.create(application)

        document = json.loads(store_path.read_text())
        assert document[STORAGE_KEY][0]["applicationId"] == record.applicationId
        assert document[STORAGE_KEY][0]["takingMedications"] is True

    @pytest.mark.asyncio
    async def test_visible_to_another_instance(self, store, store_path, application):
        await store.open()
        record = await store.create(application)

        other = LocalApplicationStore(store_path)
        assert await other.read(record.applicationId) == record

    @pytest.mark.asyncio
    async def test_redraws_colliding_suffix(self, store_path, application, fixed_clock):
        rng = random.Random()
        rng.randrange = lambda n, draws=iter([5, 5, 9]): next(draws)
        store = LocalApplicationStore(store_path, rng=rng, clock=fixed_clock)
        await store.open()

        first = await store.create(application)
        second = await store.create(application)

        assert first.applicationId == "INS-2025-005"
        assert second.applicationId == "INS-2025-009"

    def test_exhausted_suffixes(self, store):
        taken = {format_application_id(2025, n) for n in range(1000)}

        with pytest.raises(StorageError):
            store._generate_id(2025, taken)

    def test_scan_finds_last_free_suffix(self, store):
        taken = {format_application_id(2025, n) for n in range(1000) if n != 123}
        assert store._generate_id(2025, taken) == "INS-2025-123"

    @pytest.mark.asyncio
    async def test_duplicate_supplied_id(self, store, application):
        await store.open()
        supplied = application.model_copy(update={"applicationId": "INS-2025-042"})
        await store.create(supplied)

        with pytest.raises(DuplicateApplicationError):
            await store.create(supplied)


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_update_and_delete(self, store, application):
        await store.open()
        record = await store.create(application)

        updated = await store.update(record.applicationId, ApplicationUpdate(status="submitted"))
        assert updated.status == "submitted"
        assert updated.createdAt == record.createdAt
        assert (await store.read(record.applicationId)).status == "submitted"

        assert await store.delete(record.applicationId) is True
        assert await store.read(record.applicationId) is None
        assert await store.delete(record.applicationId) is False

    @pytest.mark.asyncio
    async def test_update_missing(self, store):
        await store.open()
        assert await store.update("INS-2025-404", ApplicationUpdate(city="X")) is None

    @pytest.mark.asyncio
    async def test_list(self, store, application):
        await store.open()
        await store.create(application)
        await store.create(application)

        assert len(await store.list()) == 2


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_creates_all_persist(self, store, application):
        await store.open()

        records = await asyncio.gather(*(store.create(application) for _ in range(5)))

        stored = await store.list()
        assert len(stored) == 5
        assert len({r.applicationId for r in records}) == 5
        assert {r.applicationId for r in stored} == {r.applicationId for r in records}

    @pytest.mark.asyncio
    async def test_concurrent_update_and_delete(self, store, application):
        await store.open()
        first = await store.create(application)
        second = await store.create(application)

        await asyncio.gather(
            store.update(first.applicationId, ApplicationUpdate(city="Shelbyville")),
            store.delete(second.applicationId),
        )

        stored = await store.list()
        assert [r.applicationId for r in stored] == [first.applicationId]
        assert stored[0].city == "Shelbyville"
