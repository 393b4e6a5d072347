"""FastAPI application factory for the ClawForge web API."""

from __future__ import annotations

from fastapi import FastAPI

from clawforge import __version__
from clawforge.config import ClawForgeConfig
from clawforge.storage.db import get_db


async def create_app(
    config: ClawForgeConfig | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or ClawForgeConfig.load()

    app = FastAPI(
        title="ClawForge",
        version=__version__,
        docs_url="/api/docs",
    )

    app.state.config = config
    app.state.db = await get_db(config.db_path)

    from clawforge.web.api.audits import router as audits_router
    from clawforge.web.api.records import router as records_router

    app.include_router(audits_router, prefix="/api")
    app.include_router(records_router, prefix="/api")

    @app.on_event("shutdown")
    async def shutdown() -> None:
        if hasattr(app.state, "db"):
            await app.state.db.close()

    return app
