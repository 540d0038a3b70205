"""Unit tests for the REST client application store."""

import json

import httpx
import pytest

from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.services.storage import (
    ApiApplicationClient,
    ApplicationValidationError,
    DuplicateApplicationError,
    StorageError,
)


@pytest.fixture
def application(application_payload):
    return ApplicationCreate.model_validate(application_payload)


@pytest.fixture
def stored(application_payload):
    return {
        **application_payload,
        "applicationId": "INS-2025-001",
        "status": "draft",
        "createdAt": "2025-03-14T09:30:00Z",
    }


def client_for(handler, **kwargs):
    return ApiApplicationClient(
        "http://intake.test/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_posts_and_parses_record(self, application, stored):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=stored)

        async with client_for(handler) as client:
            record = await client.create(application)

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/insurance-applications"
        assert "applicationId" not in seen["body"]
        assert record.applicationId == "INS-2025-001"

    @pytest.mark.asyncio
    async def test_validation_error(self, application):
        def handler(request):
            return httpx.Response(400, json={
                "message": "Validation error",
                "errors": [{"field": "ssn", "message": "Please enter SSN in XXX-XX-XXXX format"}],
            })

        async with client_for(handler) as client:
            with pytest.raises(ApplicationValidationError) as exc_info:
                await client.create(application)

        assert exc_info.value.errors[0]["field"] == "ssn"

    @pytest.mark.asyncio
    async def test_conflict(self, application):
        supplied = application.model_copy(update={"applicationId": "INS-2025-001"})

        async with client_for(lambda request: httpx.Response(409, json={"message": "exists"})) as client:
            with pytest.raises(DuplicateApplicationError) as exc_info:
                await client.create(supplied)

        assert exc_info.value.application_id == "INS-2025-001"

    @pytest.mark.asyncio
    async def test_server_error(self, application):
        async with client_for(lambda request: httpx.Response(500, json={"message": "Internal server error"})) as client:
            with pytest.raises(StorageError):
                await client.create(application)


class TestReadUpdateDelete:
    @pytest.mark.asyncio
    async def test_read(self, stored):
        async with client_for(lambda request: httpx.Response(200, json=stored)) as client:
            record = await client.read("INS-2025-001")

        assert record.firstName == "Jane"

    @pytest.mark.asyncio
    async def test_read_not_found(self):
        async with client_for(lambda request: httpx.Response(404, json={"message": "Application not found"})) as client:
            assert await client.read("INS-2025-404") is None

    @pytest.mark.asyncio
    async def test_update_sends_only_set_fields(self, stored):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={**stored, "city": "Chicago"})

        async with client_for(handler) as client:
            record = await client.update("INS-2025-001", ApplicationUpdate(city="Chicago"))

        assert seen == {"method": "PATCH", "body": {"city": "Chicago"}}
        assert record.city == "Chicago"

    @pytest.mark.asyncio
    async def test_delete(self):
        async with client_for(lambda request: httpx.Response(204)) as client:
            assert await client.delete("INS-2025-001") is True

        async with client_for(lambda request: httpx.Response(404, json={"message": "Application not found"})) as client:
            assert await client.delete("INS-2025-001") is False

    @pytest.mark.asyncio
    async def test_list(self, stored):
        async with client_for(lambda request: httpx.Response(200, json={"success": True, "data": [stored], "count": 1})) as client:
            records = await client.list()

        assert [r.applicationId for r in records] == ["INS-2025-001"]


class TestTransport:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        seen = {}

        def handler(request):
            seen["authorization"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"data": []})

        async with client_for(handler, access_token="abc") as client:
            await client.list()

        assert seen["authorization"] == "Bearer abc"

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as client:
            with pytest.raises(StorageError):
                await client.read("INS-2025-001")

    @pytest.mark.asyncio
    async def test_not_open(self):
        client = client_for(lambda request: httpx.Response(200))
        with pytest.raises(StorageError):
            await client.read("INS-2025-001")
