"""
Dependencies for the users routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import UserRepository


def get_user_repository(request: Request) -> UserRepository:
    repository = getattr(request.app.state, "user_repository", None)
    if repository is None:
        raise RuntimeError("User repository is not configured. Is the app lifespan running?")
    return repository
