from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import settings
from core.db import Database
from core.logging_config import setup_logging
from users import repository as users_repository
from users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level())

    # One pool per process, owned by app.state rather than a module global.
    database = Database(
        settings.database_url(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout(),
    )
    await database.connect()
    try:
        if settings.auto_create_schema():
            await users_repository.ensure_schema(database)
        app.state.user_repository = users_repository.PostgresUserRepository(database)
        yield
    finally:
        await database.close()


app = FastAPI(lifespan=lifespan)

app.include_router(users_router.router, tags=["users"])


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(_: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # Status code is the only machine-readable signal; body is a short message.
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "user records api"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.http_host(), port=settings.http_port())
