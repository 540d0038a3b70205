"""
Insurance application pipeline functions.

Stateless orchestration over an ApplicationStore, shared by the REST
routes and the wizard's submit.
"""

import logging
from typing import List

from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate
from app.services.storage.base import ApplicationStore, DuplicateApplicationError
from common.utils.exceptions import ConflictException, NotFoundException

logger = logging.getLogger(__name__)


def _not_found(application_id: str) -> NotFoundException:
    logger.info(f"Application not found: {application_id}")
    return NotFoundException("Application not found", code="APPLICATION_NOT_FOUND")


async def create_application_pipeline(
    store: ApplicationStore,
    application: ApplicationCreate,
) -> ApplicationRecord:
    """
    Orchestrates storing a new application.

    Raises:
        ConflictException: If the supplied applicationId is already stored
    """
    try:
        return await store.create(application)
    except DuplicateApplicationError as e:
        raise ConflictException(
            str(e),
            code="DUPLICATE_APPLICATION",
            details={"applicationId": e.application_id},
        )


async def get_application_pipeline(
    store: ApplicationStore,
    application_id: str,
) -> ApplicationRecord:
    record = await store.read(application_id)
    if record is None:
        raise _not_found(application_id)
    return record


async def update_application_pipeline(
    store: ApplicationStore,
    application_id: str,
    changes: ApplicationUpdate,
) -> ApplicationRecord:
    """
    Orchestrates a partial update. Only fields present in ``changes`` move.

    Raises:
        NotFoundException: If no application has this ID
    """
    record = await store.update(application_id, changes)
    if record is None:
        raise _not_found(application_id)
    return record


async def delete_application_pipeline(
    store: ApplicationStore,
    application_id: str,
) -> None:
    if not await store.delete(application_id):
        raise _not_found(application_id)


async def list_applications_pipeline(store: ApplicationStore) -> List[ApplicationRecord]:
    return await store.list()


async def submit_application_pipeline(
    store: ApplicationStore,
    application: ApplicationCreate,
) -> ApplicationRecord:
    """
    Orchestrates the wizard's final submission.

    Args:
        store: Where the application is persisted
        application: Flattened draft, status "submitted"

    Returns:
        The stored record with its assigned applicationId
    """
    record = await store.create(application)
    logger.info(f"Submitted application stored in {store.name}: {record.applicationId}")
    return record
