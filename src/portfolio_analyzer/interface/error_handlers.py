"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portfolio_analyzer.domain.exceptions import (
    GitHubAccessDeniedError,
    GitHubRateLimitError,
    InvalidProfileInputError,
    MalformedResponseError,
    PortfolioAnalyzerError,
    ProfileNotFoundError,
    UpstreamNetworkError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[PortfolioAnalyzerError], int]] = [
    (InvalidProfileInputError, 422),
    (ProfileNotFoundError, 404),
    (GitHubAccessDeniedError, 403),
    (GitHubRateLimitError, 429),
    (UpstreamNetworkError, 502),
    (MalformedResponseError, 502),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    def _make_handler(status_code: int):  # type: ignore[no-untyped-def]
        async def handler(request: Request, exc: Exception) -> JSONResponse:
            upstream = getattr(exc, "status_code", None)
            if upstream is not None:
                logger.warning(
                    "%s (GitHub HTTP %s) on %s: %s",
                    type(exc).__name__, upstream, request.url.path, exc,
                )
            else:
                logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
            return _error_json(status_code, str(exc))

        return handler

    for exc_type, code in _EXCEPTION_STATUS:
        app.add_exception_handler(exc_type, _make_handler(code))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
