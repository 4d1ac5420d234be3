"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. `main.create_app()` builds one instance,
opens it in the lifespan hook and keeps it on `app.state.db`; route handlers
receive it through the `get_db` dependency so tests can swap in a double.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import config

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

logger = logging.getLogger(__name__)

# Everything that means "the store could not answer" collapses into StoreError.
_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class StoreError(RuntimeError):
    pass


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        dsn = _sanitize_database_url(self._dsn) if self._dsn else database_url()
        try:
            pool = await asyncpg.create_pool(
                dsn=dsn,
                min_size=self._min_size or config.pool_min_size(),
                max_size=self._max_size or config.pool_max_size(),
                command_timeout=self._command_timeout or config.command_timeout_s(),
            )
        except _DRIVER_ERRORS as exc:
            raise StoreError(f"Database is unreachable: {exc}") from exc

        # The pool is only kept once it has answered a ping.
        try:
            await pool.fetchrow("SELECT 1 AS ok")
        except _DRIVER_ERRORS as exc:
            await pool.close()
            raise StoreError(f"Database is unreachable: {exc}") from exc
        self._pool = pool
        logger.info("db_connected host=%s", urlsplit(dsn).hostname)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    async def ping(self) -> None:
        await self.fetch_one("SELECT 1 AS ok")

    async def apply_schema(self) -> None:
        await self.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
        logger.info("db_schema_applied path=%s", SCHEMA_PATH.name)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool.fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool.fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag,
        e.g. "DELETE 0". Zero affected rows is not an error.
        """
        try:
            return await self.pool.execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc


def get_db(request: Request) -> Database:
    return request.app.state.db
