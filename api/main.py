from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from applications import router as applications_router
from core import config
from core.db import Database
from core.errors import install_error_handlers
from documents import router as documents_router
from users import router as users_router

logger = logging.getLogger("api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=config.log_level())


def create_app(database: Database | None = None) -> FastAPI:
    db = database if database is not None else Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Open the pool once per process.
        await db.connect()
        try:
            if config.init_schema():
                await db.apply_schema()
            app.state.db = db
            yield
        finally:
            await db.close()

    app = FastAPI(title="Applications API", lifespan=lifespan)
    app.state.db = db

    # Any origin may call the API; no cookies are involved.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    app.include_router(applications_router.router, tags=["applications"])
    app.include_router(documents_router.router, tags=["documents"])
    app.include_router(users_router.router, tags=["users"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "applications api"}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("starting host=%s port=%s", config.host(), config.port())
    uvicorn.run(app, host=config.host(), port=config.port())
