from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from core import config, db
from core.log import configure_logging
from users import errors as user_errors
from users import router as users_router

logger = logging.getLogger(__name__)

PoolFactory = Callable[[config.PoolConfig], Awaitable[db.Pool]]


def create_app(
    *,
    pool_factory: PoolFactory = db.acquire_pool,
    config_loader: Callable[[], config.PoolConfig] = config.pool_config,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One pool per process; a missing DATABASE_URL or unreachable DB aborts startup.
        app.state.pool = await pool_factory(config_loader())
        try:
            yield
        finally:
            await app.state.pool.close()
            app.state.pool = None

    app = FastAPI(title="users-api", lifespan=lifespan)
    app.include_router(users_router.router, tags=["users"])

    @app.exception_handler(user_errors.UserServiceError)
    async def user_service_error(_: Request, exc: user_errors.UserServiceError) -> PlainTextResponse:
        return PlainTextResponse(exc.detail, status_code=exc.status_code)

    @app.get("/health")
    async def health(pool: db.Pool = Depends(db.get_pool)) -> dict:
        database = "connected" if await pool.ping() else "disconnected"
        return {"status": "ok", "database": database}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    configure_logging()
    logger.info("Starting users api on http://%s:%s", config.LISTEN_HOST, config.LISTEN_PORT)
    uvicorn.run(
        app,
        host=config.LISTEN_HOST,
        port=config.LISTEN_PORT,
        log_level=config.log_level().lower(),
    )


if __name__ == "__main__":
    run()
