from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cinegoose import __version__
from cinegoose.core import db, schema
from cinegoose.core.config import Settings, load_settings
from cinegoose.core.d1 import D1Error
from cinegoose.core.driver import SQLDriver, open_driver
from cinegoose.geese import router as geese_router
from cinegoose.movies import router as movies_router
from cinegoose.quotes import router as quotes_router

ROOT_MESSAGE = "International Goose Movie Database 🪿 🎬"

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, driver: SQLDriver | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # One driver per process.
        db.init_driver(driver or open_driver(settings))
        try:
            if settings.create_schema:
                await schema.ensure_schema()
            yield
        finally:
            await db.close_driver()

    app = FastAPI(
        title="Cinegoose API",
        version=__version__,
        description="A movie collection API featuring famous geese and their memorable quotes",
        lifespan=lifespan,
    )

    @app.exception_handler(D1Error)
    async def d1_error_handler(_: Request, exc: D1Error) -> JSONResponse:
        logger.error("d1_request_failed reason=%s status=%s", exc.reason, exc.status)
        return JSONResponse(
            status_code=502,
            content={"detail": f"Database request failed ({exc.reason})."},
        )

    app.include_router(movies_router.router, tags=["movies"])
    app.include_router(geese_router.router, tags=["geese"])
    app.include_router(quotes_router.router, tags=["quotes"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", response_description="Welcome message with goose and movie emojis")
    def root() -> dict:
        return {"message": ROOT_MESSAGE}

    return app
