"""
User persistence.

`UserRepository` is the storage contract the service layer talks to.
`PostgresUserRepository` implements it with raw SQL over `core.db.Database`.
Path ids arrive as strings; `parse_id` is the single place they become keys.
"""

from __future__ import annotations

import abc

from core.db import Database
from core.errors import MalformedInput, NotFound, StorageFailure

from .schemas import INT64_MAX, User

USERS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id    BIGSERIAL PRIMARY KEY,
    name  TEXT   NOT NULL DEFAULT '',
    email TEXT   NOT NULL DEFAULT '',
    age   BIGINT NOT NULL DEFAULT 0
)
"""


class UserRepository(abc.ABC):
    @staticmethod
    def parse_id(raw_id: str | int) -> int:
        raw = str(raw_id).strip()
        if not (raw.isascii() and raw.isdigit()):
            raise MalformedInput(f"User id must be a non-negative integer, got {raw_id!r}.")
        value = int(raw)
        if value > INT64_MAX:
            raise MalformedInput(f"User id out of range: {raw_id!r}.")
        return value

    @abc.abstractmethod
    async def insert(self, user: User) -> int:
        """
        Store a new record and return the assigned id. `user.id` is ignored.
        """

    @abc.abstractmethod
    async def list_all(self) -> list[User]:
        ...

    @abc.abstractmethod
    async def find_by_id(self, user_id: str | int) -> User:
        ...

    @abc.abstractmethod
    async def replace(self, user: User) -> None:
        """
        Overwrite every column of the row matching `user.id`.
        """

    @abc.abstractmethod
    async def delete_by_id(self, user_id: str | int) -> None:
        ...


def _row_to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        name=str(row["name"] or ""),
        email=str(row["email"] or ""),
        age=int(row["age"] or 0),
    )


async def ensure_schema(database: Database) -> None:
    await database.execute(USERS_TABLE_DDL)


class PostgresUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self.database = database

    async def insert(self, user: User) -> int:
        row = await self.database.fetch_one(
            """
            INSERT INTO users (name, email, age)
            VALUES ($1, $2, $3)
            RETURNING id
            """,
            user.name,
            user.email,
            user.age,
        )
        if row is None:
            raise StorageFailure("Failed to insert user.")
        return int(row["id"])

    async def list_all(self) -> list[User]:
        rows = await self.database.fetch_all(
            """
            SELECT id, name, email, age
            FROM users
            """
        )
        return [_row_to_user(row) for row in rows]

    async def find_by_id(self, user_id: str | int) -> User:
        key = self.parse_id(user_id)
        row = await self.database.fetch_one(
            """
            SELECT id, name, email, age
            FROM users
            WHERE id = $1
            """,
            key,
        )
        if row is None:
            raise NotFound(f"User {key} not found.")
        return _row_to_user(row)

    async def replace(self, user: User) -> None:
        row = await self.database.fetch_one(
            """
            UPDATE users
            SET name = $2,
                email = $3,
                age = $4
            WHERE id = $1
            RETURNING id
            """,
            user.id,
            user.name,
            user.email,
            user.age,
        )
        if row is None:
            raise StorageFailure(f"User {user.id} disappeared before update.")

    async def delete_by_id(self, user_id: str | int) -> None:
        key = self.parse_id(user_id)
        await self.database.execute(
            """
            DELETE FROM users
            WHERE id = $1
            """,
            key,
        )
