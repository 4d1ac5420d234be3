"""
Application business logic.

Listing is partial-success: a row that cannot be mapped, or an application
whose documents cannot be read, is logged and left out of the response
instead of failing the whole request.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database, StoreError
from documents import service as documents_service

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_application_response(row: dict) -> schemas.ApplicationResponse:
    return schemas.ApplicationResponse(
        id=row["id"],
        name=row["name"],
        user_id=row.get("user_id") or 0,
    )


async def list_applications(database: Database, *, user_id: int) -> list[schemas.ApplicationResponse]:
    try:
        rows = await repository.list_applications(database, user_id=user_id)
    except StoreError as exc:
        logger.error("application_list_failed user_id=%s error=%s", user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch applications",
        ) from exc

    applications: list[schemas.ApplicationResponse] = []
    for row in rows:
        try:
            application = _to_application_response(row)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("application_row_skipped user_id=%s error=%s", user_id, exc)
            continue

        # One query per application.
        try:
            application.documents = await documents_service.documents_for_application(database, application.id)
        except StoreError as exc:
            logger.warning("application_documents_failed application_id=%s error=%s", application.id, exc)
            continue

        applications.append(application)
    return applications


async def add_application(
    database: Database,
    payload: schemas.CreateApplicationRequest,
    *,
    user_id: int,
) -> dict:
    try:
        await repository.create_application(database, name=payload.name, user_id=user_id)
    except StoreError as exc:
        logger.error("application_create_failed user_id=%s error=%s", user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add application",
        ) from exc
    logger.info("application_created user_id=%s", user_id)
    return {"message": "Application added"}


async def _is_owner(database: Database, application_id: int, *, user_id: int) -> bool:
    try:
        row = await repository.get_owned_application(database, application_id, user_id=user_id)
    except StoreError as exc:
        # Reported to the caller exactly like a failed ownership check.
        logger.warning(
            "application_owner_lookup_failed application_id=%s user_id=%s error=%s",
            application_id,
            user_id,
            exc,
        )
        return False
    if row is None:
        return False
    return int(row.get("id") or 0) != 0


async def remove_application(database: Database, application_id: int, *, user_id: int) -> dict:
    if not await _is_owner(database, application_id, user_id=user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to remove this application",
        )

    try:
        result = await repository.delete_application(database, application_id)
    except StoreError as exc:
        logger.error("application_delete_failed application_id=%s error=%s", application_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove application",
        ) from exc
    logger.info("application_deleted application_id=%s user_id=%s result=%s", application_id, user_id, result)
    return {"message": "Application removed"}
