"""
Application API endpoints.

`user_id` is an optional query parameter on every route; 0 means "no owner".
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db
from core.schemas import MessageResponse

from . import schemas, service

router = APIRouter()

DEFAULT_USER_ID = 0


@router.get("/applications", response_model=list[schemas.ApplicationResponse])
async def list_applications(
    user_id: int = Query(default=DEFAULT_USER_ID),
    database: Database = Depends(get_db),
) -> list[schemas.ApplicationResponse]:
    return await service.list_applications(database, user_id=user_id)


@router.post("/applications", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def create_application(
    payload: schemas.CreateApplicationRequest,
    user_id: int = Query(default=DEFAULT_USER_ID),
    database: Database = Depends(get_db),
) -> dict:
    return await service.add_application(database, payload, user_id=user_id)


@router.delete("/applications/{application_id}", response_model=MessageResponse)
async def delete_application(
    application_id: int,
    user_id: int = Query(default=DEFAULT_USER_ID),
    database: Database = Depends(get_db),
) -> dict:
    return await service.remove_application(database, application_id, user_id=user_id)
