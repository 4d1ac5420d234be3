"""
Pydantic schemas for the user upsert endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StoreUserRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    photo: str = Field(..., min_length=1)


class StoreUserResponse(BaseModel):
    message: str
    user_id: int
