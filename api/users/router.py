"""
User CRUD endpoints.

Bodies are read raw so `codec` decides what counts as malformed input
(FastAPI's own body validation would answer 422 with a JSON envelope).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from . import codec, service
from .dependencies import get_user_repository
from .repository import UserRepository

router = APIRouter()


@router.post("/users")
async def create_user(
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    user = await service.create_user(repository, await request.body())
    return codec.json_response(codec.encode_user(user), status_code=status.HTTP_201_CREATED)


@router.get("/users")
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    users = await service.list_users(repository)
    return codec.json_response(codec.encode_user_list(users))


@router.get("/users/{user_id}")
async def get_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    user = await service.get_user(repository, user_id)
    return codec.json_response(codec.encode_user(user))


@router.put("/users/{user_id}")
async def update_user(
    user_id: str,
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    user = await service.update_user(repository, user_id, await request.body())
    return codec.json_response(codec.encode_user(user))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    await service.delete_user(repository, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
