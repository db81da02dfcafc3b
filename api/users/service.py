"""
User mediation: borrow a connection, run one statement, map the outcome.

Every call borrows exactly one pooled connection and hands it back before
returning, whether the statement succeeded or not. No retries.
"""

from __future__ import annotations

import logging

from core import db

from . import errors, repository, schemas

logger = logging.getLogger(__name__)

_STORAGE_FAILURES = (*db.DRIVER_ERRORS, repository.NoRowReturned)


def _to_user(row: dict) -> schemas.User:
    return schemas.User(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        age=row["age"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


async def create_user(pool: db.Pool, payload: schemas.CreateUser) -> schemas.User:
    try:
        async with pool.borrow() as conn:
            row = await repository.insert_user(
                conn,
                name=payload.name,
                email=payload.email,
                age=payload.age,
            )
    except db.PoolTimeout as exc:
        raise errors.Unavailable(str(exc)) from exc
    except _STORAGE_FAILURES as exc:
        logger.warning("user_create_failed error=%r", exc)
        raise errors.StorageError(f"Failed to create user: {exc}") from exc

    user = _to_user(row)
    logger.info("user_created id=%s", user.id)
    return user


async def get_user(pool: db.Pool, user_id: int) -> schemas.User:
    try:
        async with pool.borrow() as conn:
            row = await repository.get_user_by_id(conn, user_id)
    except db.PoolTimeout as exc:
        raise errors.Unavailable(str(exc)) from exc
    except _STORAGE_FAILURES as exc:
        logger.warning("user_lookup_failed id=%s error=%r", user_id, exc)
        raise errors.StorageError(f"Failed to get user: {exc}") from exc

    if row is None:
        logger.info("user_lookup_miss id=%s", user_id)
        raise errors.NotFound(f"User {user_id} not found.")
    return _to_user(row)
