"""
Application persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database


async def list_applications(database: Database, *, user_id: int) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT id, name, user_id
        FROM applications
        WHERE user_id = $1
        """,
        user_id,
    )


async def create_application(database: Database, *, name: str, user_id: int) -> None:
    await database.execute(
        """
        INSERT INTO applications (name, user_id)
        VALUES ($1, $2)
        """,
        name,
        user_id,
    )


async def get_owned_application(database: Database, application_id: int, *, user_id: int) -> dict[str, Any] | None:
    return await database.fetch_one(
        """
        SELECT id
        FROM applications
        WHERE id = $1
          AND user_id = $2
        """,
        application_id,
        user_id,
    )


async def delete_application(database: Database, application_id: int) -> str:
    # Ownership is checked beforehand; the delete itself is by id only.
    return await database.execute(
        """
        DELETE FROM applications
        WHERE id = $1
        """,
        application_id,
    )
