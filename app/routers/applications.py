"""
FastAPI router for insurance application endpoints.

CRUD over whichever ApplicationStore the service was started with.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.dependencies import get_application_store
from app.pipelines import applications as pipelines
from app.schemas.application import ApplicationCreate, ApplicationRecord, ApplicationUpdate
from app.services.storage import ApplicationStore
from common.utils import list_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insurance-applications", tags=["insurance-applications"])

Store = Annotated[ApplicationStore, Depends(get_application_store)]


@router.get("")
async def list_applications(store: Store):
    """All stored applications."""
    records = await pipelines.list_applications_pipeline(store)
    return list_response([record.model_dump(mode="json") for record in records])


@router.get("/{application_id}", response_model=ApplicationRecord)
async def get_application(application_id: str, store: Store):
    return await pipelines.get_application_pipeline(store, application_id)


@router.post("", response_model=ApplicationRecord, status_code=status.HTTP_201_CREATED)
async def create_application(body: ApplicationCreate, store: Store):
    """
    Store a new application.

    An applicationId is assigned when the body has none; a supplied one that
    is already taken is rejected with 409.
    """
    return await pipelines.create_application_pipeline(store, body)


@router.patch("/{application_id}", response_model=ApplicationRecord)
async def update_application(application_id: str, body: ApplicationUpdate, store: Store):
    """Change only the fields present in the body."""
    return await pipelines.update_application_pipeline(store, application_id, body)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(application_id: str, store: Store):
    await pipelines.delete_application_pipeline(store, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
