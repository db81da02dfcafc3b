"""
In-memory stand-ins for an asyncpg pool and the `users` table.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import asyncpg


class FakeDatabase:
    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self._next_id = 1
        self.fail_with: BaseException | None = None
        self.drop_inserts = False

    def run(self, sql: str, args: tuple) -> dict | None:
        if self.fail_with is not None:
            raise self.fail_with

        statement = " ".join(sql.split())
        if statement.startswith("SELECT 1"):
            return {"ok": 1}
        if statement.startswith("INSERT INTO users"):
            return None if self.drop_inserts else self._insert(*args)
        if statement.startswith("SELECT id, name, email, age, created_at, updated_at FROM users WHERE id = $1"):
            row = self.users.get(args[0])
            return dict(row) if row is not None else None
        raise AssertionError(f"unexpected statement: {statement}")

    def _insert(self, name: str, email: str, age: int | None) -> dict:
        if any(row["email"] == email for row in self.users.values()):
            raise asyncpg.UniqueViolationError(
                'duplicate key value violates unique constraint "users_email_key"'
            )
        now = datetime.now(timezone.utc)
        row = {
            "id": self._next_id,
            "name": name,
            "email": email,
            "age": age,
            "created_at": now,
            "updated_at": now,
        }
        self._next_id += 1
        self.users[row["id"]] = row
        return dict(row)


class FakeConnection:
    def __init__(self, database: FakeDatabase) -> None:
        self._database = database

    async def fetchrow(self, sql: str, *args):
        await asyncio.sleep(0)
        return self._database.run(sql, args)


class FakePool:
    """Mirrors asyncpg.Pool's acquire/release/close with a bounded slot count."""

    def __init__(self, database: FakeDatabase, *, max_size: int = 5) -> None:
        self.database = database
        self.max_size = max_size
        self.in_use = 0
        self.peak = 0
        self.closed = False
        self._slots: asyncio.Semaphore | None = None

    async def acquire(self, *, timeout: float | None = None) -> FakeConnection:
        if self._slots is None:
            self._slots = asyncio.Semaphore(self.max_size)
        await asyncio.wait_for(self._slots.acquire(), timeout)
        self.in_use += 1
        self.peak = max(self.peak, self.in_use)
        return FakeConnection(self.database)

    async def release(self, conn: FakeConnection) -> None:
        self.in_use -= 1
        self._slots.release()

    async def close(self) -> None:
        self.closed = True
