"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.post("/store-user", response_model=schemas.StoreUserResponse)
async def store_user(
    payload: schemas.StoreUserRequest,
    database: Database = Depends(get_db),
) -> schemas.StoreUserResponse:
    return await service.store_user(database, payload)
