"""
User persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database, StoreError


async def upsert_user(database: Database, *, name: str, email: str, photo: str) -> int:
    """
    Insert a user, or overwrite name/photo of the row that already has this
    email. The id comes back from the same statement, so a concurrent writer
    to the same email cannot slip in between the write and the lookup.
    """
    row = await database.fetch_one(
        """
        INSERT INTO users (name, email, photo)
        VALUES ($1, $2, $3)
        ON CONFLICT (email) DO UPDATE
        SET name = EXCLUDED.name,
            photo = EXCLUDED.photo
        RETURNING id
        """,
        name,
        email,
        photo,
    )
    if row is None:
        raise StoreError("Failed to upsert user.")
    return int(row["id"])
