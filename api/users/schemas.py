"""
User record schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Storage column is BIGINT.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class User(BaseModel):
    """
    The stored entity. Same shape on the wire and in the `users` table.

    `id` is 0 until the store assigns one.
    """

    id: int = 0
    name: str = ""
    email: str = ""
    age: int = 0


class UserPayload(BaseModel):
    """
    Incoming body for create and update. Every field is optional; unknown keys
    (including `id`) are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str | None = None
    email: str | None = None
    age: int | None = Field(default=None, ge=INT64_MIN, le=INT64_MAX)
