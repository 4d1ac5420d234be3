"""
Document persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database


async def list_documents_for_application(database: Database, application_id: int) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT id, name, application_id
        FROM documents
        WHERE application_id = $1
        """,
        application_id,
    )


async def create_document(database: Database, *, application_id: int, name: str) -> None:
    # Whether application_id must exist is up to the schema, not this query.
    await database.execute(
        """
        INSERT INTO documents (application_id, name)
        VALUES ($1, $2)
        """,
        application_id,
        name,
    )


async def delete_document(database: Database, document_id: int) -> str:
    return await database.execute(
        """
        DELETE FROM documents
        WHERE id = $1
        """,
        document_id,
    )
