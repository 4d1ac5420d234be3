"""
User business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database, StoreError

from . import repository, schemas

logger = logging.getLogger(__name__)


async def store_user(database: Database, payload: schemas.StoreUserRequest) -> schemas.StoreUserResponse:
    try:
        user_id = await repository.upsert_user(
            database,
            name=payload.name,
            email=payload.email,
            photo=payload.photo,
        )
    except StoreError as exc:
        logger.error("user_store_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store user",
        ) from exc
    logger.info("user_stored user_id=%s", user_id)
    return schemas.StoreUserResponse(message="User stored", user_id=user_id)
