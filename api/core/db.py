"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. The application builds it on startup,
keeps it on `app.state` and closes it on shutdown (see `api/main.py`); nothing
here is a process-wide global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver, network and timeout errors are re-raised as `StorageFailure` so callers
only deal with the service error taxonomy.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

from .errors import StartupFailure, StorageFailure

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self.dsn,
                min_size=self.min_size,
                max_size=max(self.min_size, self.max_size),
                command_timeout=self.command_timeout,
            )
        except _DRIVER_ERRORS as exc:
            raise StartupFailure(f"Could not connect to the database: {exc}") from exc
        logger.info("db_pool_ready min_size=%s max_size=%s", self.min_size, self.max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StorageFailure(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StorageFailure(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self.pool().execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StorageFailure(str(exc)) from exc
