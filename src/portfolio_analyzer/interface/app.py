"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from portfolio_analyzer.interface.dependencies import shutdown, startup
from portfolio_analyzer.interface.error_handlers import register_error_handlers
from portfolio_analyzer.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Portfolio Analyzer",
        version="1.0.0",
        description=(
            "Takes a public GitHub username or profile URL and returns a "
            "0-100 portfolio score across documentation, code quality, "
            "activity, impact and organization, plus prioritised "
            "recommendations and a language skill breakdown."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
