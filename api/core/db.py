"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI creates it once on startup,
stores it on `app.state.pool` and closes it on shutdown (see `api/main.py`).
Request handlers get it through the `get_pool` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg
from fastapi import Request

from .config import PoolConfig

logger = logging.getLogger(__name__)

# Failures that can come out of a query on a borrowed connection.
DRIVER_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)

PING_TIMEOUT = 2.0


class PoolTimeout(RuntimeError):
    """No connection became free within the acquisition window."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:g}s waiting for a database connection.")
        self.timeout = timeout


class Pool:
    """
    Bounded set of live connections shared by every request task.

    Wraps an asyncpg pool (or anything with the same `acquire`/`release`/`close`
    coroutines). A borrowed connection belongs to exactly one caller until the
    `borrow()` block exits.
    """

    def __init__(self, raw: Any, *, acquire_timeout: float) -> None:
        self._raw = raw
        self.acquire_timeout = acquire_timeout

    @asynccontextmanager
    async def borrow(self, *, timeout: float | None = None) -> AsyncIterator[Any]:
        wait = self.acquire_timeout if timeout is None else timeout
        try:
            conn = await self._raw.acquire(timeout=wait)
        except asyncio.TimeoutError as exc:
            logger.warning("db_pool_timeout timeout=%s", wait)
            raise PoolTimeout(wait) from exc
        try:
            yield conn
        finally:
            await self._raw.release(conn)

    async def ping(self, *, timeout: float = PING_TIMEOUT) -> bool:
        try:
            async with self.borrow(timeout=timeout) as conn:
                row = await fetch_one(conn, "SELECT 1 AS ok")
        except (PoolTimeout, *DRIVER_ERRORS):
            logger.warning("db_ping_failed", exc_info=True)
            return False
        return row is not None

    async def close(self) -> None:
        await self._raw.close()
        logger.info("db_pool_closed")


async def acquire_pool(config: PoolConfig) -> Pool:
    """
    Open the process-wide pool. Errors propagate: a bad DSN or an unreachable
    database must keep the service from starting.
    """
    raw = await asyncpg.create_pool(
        dsn=config.dsn,
        min_size=config.min_size,
        max_size=config.max_size,
        command_timeout=config.command_timeout,
    )
    logger.info(
        "db_pool_created max_size=%s acquire_timeout=%s",
        config.max_size,
        config.acquire_timeout,
    )
    return Pool(raw, acquire_timeout=config.acquire_timeout)


def get_pool(request: Request) -> Pool:
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. It is created in the app lifespan.")
    return pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(conn: Any, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query on a borrowed connection and return a single row as a dict (or None).
    """
    row = await conn.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None
