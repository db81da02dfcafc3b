"""
User persistence helpers. Every function runs on a connection the caller borrowed.
"""

from __future__ import annotations

from typing import Any

from core import db


class NoRowReturned(Exception):
    """A statement with RETURNING came back empty."""


async def insert_user(conn: Any, *, name: str, email: str, age: int | None) -> dict:
    row = await db.fetch_one(
        conn,
        """
        INSERT INTO users (name, email, age)
        VALUES ($1, $2, $3)
        RETURNING id, name, email, age, created_at, updated_at
        """,
        name,
        email,
        age,
    )
    if row is None:
        raise NoRowReturned("INSERT INTO users returned no row.")
    return row


async def get_user_by_id(conn: Any, user_id: int) -> dict | None:
    return await db.fetch_one(
        conn,
        """
        SELECT id, name, email, age, created_at, updated_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
