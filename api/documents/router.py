"""
Document API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db
from core.schemas import MessageResponse

from . import schemas, service

router = APIRouter()


@router.post("/documents", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def create_document(
    payload: schemas.CreateDocumentRequest,
    application_id: int = Query(...),
    database: Database = Depends(get_db),
) -> dict:
    return await service.add_document(database, payload, application_id=application_id)


@router.delete("/documents/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: int,
    database: Database = Depends(get_db),
) -> dict:
    """
    Unconditional delete; succeeds even when no row matched.
    """
    return await service.remove_document(database, document_id)
