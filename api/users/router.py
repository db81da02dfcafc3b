"""
FastAPI router for user endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from core import db

from . import schemas, service

router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=schemas.User)
async def create_user(
    payload: schemas.CreateUser,
    pool: db.Pool = Depends(db.get_pool),
) -> schemas.User:
    return await service.create_user(pool, payload)


@router.get("/users/{user_id}", response_model=schemas.User)
async def get_user(
    user_id: int = Path(..., ge=schemas.INT4_MIN, le=schemas.INT4_MAX),
    pool: db.Pool = Depends(db.get_pool),
) -> schemas.User:
    return await service.get_user(pool, user_id)
