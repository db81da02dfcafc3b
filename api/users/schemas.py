"""
User API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# Bounds of the Postgres INTEGER columns (id, age).
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


class CreateUser(BaseModel):
    # id and timestamps are assigned by the database.
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    age: int | None = Field(default=None, strict=True, ge=INT4_MIN, le=INT4_MAX)


class UpdateUser(BaseModel):
    """
    Partial update intent. Not consumed by any route yet.
    """

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    age: int | None = Field(default=None, strict=True, ge=INT4_MIN, le=INT4_MAX)


class User(BaseModel):
    id: int
    name: str
    email: str
    age: int | None = None
    created_at: datetime
    updated_at: datetime
