"""
Document business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database, StoreError

from . import repository, schemas

logger = logging.getLogger(__name__)


def to_document_response(row: dict) -> schemas.DocumentResponse:
    return schemas.DocumentResponse(
        id=row["id"],
        name=row["name"],
        application_id=row["application_id"],
    )


async def documents_for_application(database: Database, application_id: int) -> list[schemas.DocumentResponse]:
    """
    Documents attached to one application. Rows that fail to map are logged
    and skipped; a failed query raises StoreError to the caller.
    """
    rows = await repository.list_documents_for_application(database, application_id)
    documents: list[schemas.DocumentResponse] = []
    for row in rows:
        try:
            documents.append(to_document_response(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("document_row_skipped application_id=%s error=%s", application_id, exc)
    return documents


async def add_document(
    database: Database,
    payload: schemas.CreateDocumentRequest,
    *,
    application_id: int,
) -> dict:
    try:
        await repository.create_document(database, application_id=application_id, name=payload.name)
    except StoreError as exc:
        logger.error("document_create_failed application_id=%s error=%s", application_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add document",
        ) from exc
    logger.info("document_created application_id=%s", application_id)
    return {"message": "Document added"}


async def remove_document(database: Database, document_id: int) -> dict:
    try:
        result = await repository.delete_document(database, document_id)
    except StoreError as exc:
        logger.error("document_delete_failed document_id=%s error=%s", document_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove document",
        ) from exc
    logger.info("document_deleted document_id=%s result=%s", document_id, result)
    return {"message": "Document removed"}
