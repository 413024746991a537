"""
JSON encoding/decoding of user records.
"""

from __future__ import annotations

from fastapi import Response
from pydantic import TypeAdapter, ValidationError

from core.errors import MalformedInput

from .schemas import User, UserPayload

_USER_LIST = TypeAdapter(list[User])


def decode_user(raw: bytes, into: User | None = None) -> User:
    """
    Parse a JSON body and merge it onto `into` (a zero-valued record if None).

    Fields present in the body overwrite; absent or null fields keep the value
    already on `into`. The id is never taken from the body.
    """
    try:
        payload = UserPayload.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedInput(f"Invalid user payload: {exc.error_count()} error(s)") from exc

    base = into if into is not None else User()
    return base.model_copy(update=payload.model_dump(exclude_unset=True, exclude_none=True))


def encode_user(user: User) -> bytes:
    return user.model_dump_json().encode("utf-8")


def encode_user_list(users: list[User]) -> bytes:
    return _USER_LIST.dump_json(users)


def json_response(content: bytes, *, status_code: int = 200) -> Response:
    return Response(content=content, status_code=status_code, media_type="application/json")
