"""
Pydantic schemas for application endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from documents.schemas import DocumentResponse


class CreateApplicationRequest(BaseModel):
    name: str = Field(..., min_length=1)


class ApplicationResponse(BaseModel):
    id: int
    name: str
    user_id: int = 0
    # Always a list, possibly empty; never null.
    documents: list[DocumentResponse] = Field(default_factory=list)
