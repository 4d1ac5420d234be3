"""
Response shapes shared by several feature packages.
"""

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
