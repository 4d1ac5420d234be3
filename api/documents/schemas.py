"""
Pydantic schemas for document endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateDocumentRequest(BaseModel):
    name: str = Field(..., min_length=1)


class DocumentResponse(BaseModel):
    id: int
    name: str
    application_id: int
