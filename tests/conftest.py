"""
Shared fixtures.

`FakeDatabase` stands in for `core.db.Database`. It understands exactly the
statements the repositories issue and keeps rows in plain lists, so tests can
inspect and corrupt the stored state directly.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.db import StoreError
from main import create_app


def _normalize(sql: str) -> str:
    return " ".join(sql.split())


class FakeDatabase:
    def __init__(self, *, enforce_foreign_keys: bool = False) -> None:
        self.enforce_foreign_keys = enforce_foreign_keys
        self.applications: list[dict[str, Any]] = []
        self.documents: list[dict[str, Any]] = []
        self.users: list[dict[str, Any]] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.connected = False
        self._failures: list[tuple[str, tuple[Any, ...] | None]] = []
        self._next_id = {"applications": 1, "documents": 1, "users": 1}

    # test helpers

    def fail(self, fragment: str, args: tuple[Any, ...] | None = None) -> None:
        """Raise StoreError for statements containing `fragment` (and matching `args`)."""
        self._failures.append((fragment, args))

    def add_application(self, name: str, user_id: int = 0) -> int:
        return self._insert("applications", {"name": name, "user_id": user_id})

    def add_document(self, application_id: int, name: str) -> int:
        return self._insert("documents", {"application_id": application_id, "name": name})

    def _insert(self, table: str, values: dict[str, Any]) -> int:
        new_id = self._next_id[table]
        self._next_id[table] += 1
        getattr(self, table).append({"id": new_id, **values})
        return new_id

    # Database interface

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    async def ping(self) -> None:
        await self.fetch_one("SELECT 1 AS ok")

    async def apply_schema(self) -> None:
        return None

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        rows = self._run(sql, args)
        return rows[0] if rows else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return self._run(sql, args)

    async def execute(self, sql: str, *args: Any) -> str:
        rows = self._run(sql, args)
        return f"OK {len(rows)}"

    def _run(self, sql: str, args: tuple[Any, ...]) -> list[dict[str, Any]]:
        statement = _normalize(sql)
        self.calls.append((statement, args))
        for fragment, fail_args in self._failures:
            if fragment in statement and (fail_args is None or fail_args == args):
                raise StoreError(f"simulated failure: {fragment}")

        if statement == "SELECT 1 AS ok":
            return [{"ok": 1}]
        if statement.startswith("SELECT id, name, user_id FROM applications WHERE user_id = $1"):
            return [dict(row) for row in self.applications if row["user_id"] == args[0]]
        if statement.startswith("SELECT id, name, application_id FROM documents WHERE application_id = $1"):
            return [dict(row) for row in self.documents if row["application_id"] == args[0]]
        if statement.startswith("SELECT id FROM applications WHERE id = $1 AND user_id = $2"):
            return [
                {"id": row["id"]}
                for row in self.applications
                if row["id"] == args[0] and row["user_id"] == args[1]
            ]
        if statement.startswith("INSERT INTO applications (name, user_id)"):
            self.add_application(args[0], args[1])
            return [{}]
        if statement.startswith("INSERT INTO documents (application_id, name)"):
            if self.enforce_foreign_keys and not any(row["id"] == args[0] for row in self.applications):
                raise StoreError("insert or update on table \"documents\" violates foreign key constraint")
            self.add_document(args[0], args[1])
            return [{}]
        if statement.startswith("DELETE FROM applications WHERE id = $1"):
            return self._delete("applications", args[0])
        if statement.startswith("DELETE FROM documents WHERE id = $1"):
            return self._delete("documents", args[0])
        if statement.startswith("INSERT INTO users (name, email, photo)") and "ON CONFLICT (email)" in statement:
            name, email, photo = args
            for row in self.users:
                if row["email"] == email:
                    row.update(name=name, photo=photo)
                    return [{"id": row["id"]}]
            return [{"id": self._insert("users", {"name": name, "email": email, "photo": photo})}]
        raise AssertionError(f"FakeDatabase does not understand: {statement}")

    def _delete(self, table: str, row_id: int) -> list[dict[str, Any]]:
        rows = getattr(self, table)
        removed = [row for row in rows if row["id"] == row_id]
        setattr(self, table, [row for row in rows if row["id"] != row_id])
        return removed


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase):
    app = create_app(database=fake_db)
    with TestClient(app) as test_client:
        yield test_client
