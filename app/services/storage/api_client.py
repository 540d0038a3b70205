"""
REST client application store.

Talks to the /api/insurance-applications CRUD surface of this service and
maps HTTP statuses back onto the ApplicationStore contract.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate
from app.services.storage.base import (
    ApplicationStore,
    ApplicationValidationError,
    DuplicateApplicationError,
    StorageError,
)

logger = logging.getLogger(__name__)

APPLICATIONS_PATH = "/api/insurance-applications"


class ApiApplicationClient(ApplicationStore):
    """
    ApplicationStore backed by the intake REST API.
    """

    name = "api"

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize ApiApplicationClient.

        Args:
            base_url: Root URL of the intake service
            access_token: Optional bearer token sent with every request
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def open(self) -> None:
        if self._client is not None:
            return

        headers = {"Accept": "application/json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if self._client is None:
            raise StorageError("ApiApplicationClient is not open")

        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Application API request failed: {method} {path}: {e}")
            raise StorageError(f"Application API unreachable: {e}") from e

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _raise_for_error(self, response: httpx.Response, application_id: Optional[str] = None) -> None:
        body = self._error_body(response)
        message = body.get("message", f"HTTP {response.status_code}")

        if response.status_code == 400:
            raise ApplicationValidationError(message, body.get("errors"))
        if response.status_code == 409:
            raise DuplicateApplicationError(application_id)

        raise StorageError(f"Application API error {response.status_code}: {message}")

    @staticmethod
    def _parse_record(payload: Any) -> ApplicationRecord:
        try:
            return ApplicationRecord.model_validate(payload)
        except ValidationError as e:
            raise StorageError(f"Unexpected application payload: {e}") from e

    async def create(self, application: ApplicationCreate) -> ApplicationRecord:
        response = await self._request(
            "POST",
            APPLICATIONS_PATH,
            json=application.model_dump(mode="json", exclude_none=True),
        )
        if response.status_code != 201:
            self._raise_for_error(response, application.applicationId)

        record = self._parse_record(response.json())
        logger.info(f"Application submitted to API: {record.applicationId}")
        return record

    async def read(self, application_id: str) -> Optional[ApplicationRecord]:
        response = await self._request("GET", f"{APPLICATIONS_PATH}/{application_id}")
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            self._raise_for_error(response, application_id)
        return self._parse_record(response.json())

    async def update(
        self,
        application_id: str,
        changes: ApplicationUpdate,
    ) -> Optional[ApplicationRecord]:
        response = await self._request(
            "PATCH",
            f"{APPLICATIONS_PATH}/{application_id}",
            json=changes.model_dump(mode="json", exclude_unset=True),
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            self._raise_for_error(response, application_id)
        return self._parse_record(response.json())

    async def delete(self, application_id: str) -> bool:
        response = await self._request("DELETE", f"{APPLICATIONS_PATH}/{application_id}")
        if response.status_code == 204:
            return True
        if response.status_code == 404:
            return False
        self._raise_for_error(response, application_id)

    async def list(self) -> List[ApplicationRecord]:
        response = await self._request("GET", APPLICATIONS_PATH)
        if response.status_code != 200:
            self._raise_for_error(response)
        return [self._parse_record(item) for item in response.json().get("data", [])]
