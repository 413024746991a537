"""
User CRUD business logic.

Each operation takes the repository explicitly, runs at most one mutation and
turns every storage/codec error into one `HTTPException`. Error details are
plain-text messages; `main.py` renders them without a JSON envelope.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import MalformedInput, NotFound, StorageFailure

from . import codec
from .repository import UserRepository
from .schemas import User

USER_NOT_FOUND = "User not found"
INVALID_INPUT = "Invalid input"
INVALID_USER_ID = "Invalid user id"

logger = logging.getLogger(__name__)


def _storage_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _decode_or_400(body: bytes, into: User | None = None) -> User:
    try:
        return codec.decode_user(body, into=into)
    except MalformedInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_INPUT) from exc


async def _find_or_404(repository: UserRepository, user_id: str, *, storage_detail: str) -> User:
    try:
        return await repository.find_by_id(user_id)
    except MalformedInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_USER_ID) from exc
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND) from exc
    except StorageFailure as exc:
        logger.exception("user_lookup_failed user_id=%s", user_id)
        raise _storage_error(storage_detail) from exc


async def create_user(repository: UserRepository, body: bytes) -> User:
    user = _decode_or_400(body)
    try:
        user_id = await repository.insert(user)
    except StorageFailure as exc:
        logger.exception("user_create_failed")
        raise _storage_error("Error creating user") from exc

    logger.info("user_created user_id=%s", user_id)
    return user.model_copy(update={"id": user_id})


async def list_users(repository: UserRepository) -> list[User]:
    try:
        return await repository.list_all()
    except StorageFailure as exc:
        logger.exception("user_list_failed")
        raise _storage_error("Error fetching users") from exc


async def get_user(repository: UserRepository, user_id: str) -> User:
    return await _find_or_404(repository, user_id, storage_detail="Error fetching user")


async def update_user(repository: UserRepository, user_id: str, body: bytes) -> User:
    """
    Merge-by-field update: the stored record is loaded first and the body is
    decoded onto it, so fields missing from the body keep their stored value.
    """
    existing = await _find_or_404(repository, user_id, storage_detail="Error updating user")
    updated = _decode_or_400(body, into=existing)

    try:
        await repository.replace(updated)
    except StorageFailure as exc:
        logger.exception("user_update_failed user_id=%s", existing.id)
        raise _storage_error("Error updating user") from exc

    logger.info("user_updated user_id=%s", updated.id)
    return updated


async def delete_user(repository: UserRepository, user_id: str) -> None:
    existing = await _find_or_404(repository, user_id, storage_detail="Error deleting user")

    try:
        await repository.delete_by_id(existing.id)
    except StorageFailure as exc:
        logger.exception("user_delete_failed user_id=%s", existing.id)
        raise _storage_error("Error deleting user") from exc

    logger.info("user_deleted user_id=%s", existing.id)
