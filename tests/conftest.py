import itertools

import pytest
from fastapi.testclient import TestClient

from core.errors import NotFound, StorageFailure
from main import app
from users.dependencies import get_user_repository
from users.repository import UserRepository
from users.schemas import User


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository; ids come from a counter and are never reused."""

    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self._ids = itertools.count(1)

    async def insert(self, user: User) -> int:
        user_id = next(self._ids)
        self.rows[user_id] = user.model_copy(update={"id": user_id})
        return user_id

    async def list_all(self) -> list[User]:
        return list(self.rows.values())

    async def find_by_id(self, user_id) -> User:
        key = self.parse_id(user_id)
        if key not in self.rows:
            raise NotFound(f"User {key} not found.")
        return self.rows[key]

    async def replace(self, user: User) -> None:
        if user.id not in self.rows:
            raise StorageFailure(f"User {user.id} disappeared before update.")
        self.rows[user.id] = user

    async def delete_by_id(self, user_id) -> None:
        self.rows.pop(self.parse_id(user_id), None)


class BrokenUserRepository(InMemoryUserRepository):
    """Reads work, every mutation and listing fails like a dropped connection."""

    async def insert(self, user: User) -> int:
        raise StorageFailure("connection reset")

    async def list_all(self) -> list[User]:
        raise StorageFailure("connection reset")

    async def replace(self, user: User) -> None:
        raise StorageFailure("connection reset")

    async def delete_by_id(self, user_id) -> None:
        raise StorageFailure("connection reset")


@pytest.fixture(name="repository")
def repository_fixture():
    return InMemoryUserRepository()


def _client_for(repository: UserRepository):
    # No `with` block: the lifespan (real Postgres pool) must not start.
    app.dependency_overrides[get_user_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(name="client")
def client_fixture(repository: InMemoryUserRepository):
    yield from _client_for(repository)


@pytest.fixture(name="broken_repository")
def broken_repository_fixture():
    repository = BrokenUserRepository()
    repository.rows[1] = User(id=1, name="Ann", email="ann@x.com", age=30)
    return repository


@pytest.fixture(name="broken_client")
def broken_client_fixture(broken_repository: BrokenUserRepository):
    yield from _client_for(broken_repository)
