"""Shared FastAPI exception handlers."""
from __future__ import annotations

import logging
from html import escape
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT, HTTP_500_INTERNAL_SERVER_ERROR

from file_browser.core.exceptions import DomainError
from file_browser.core.logging import LOGGER_NAME


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api")


def _error_fragment(status_code: int, detail: str) -> HTMLResponse:
    return HTMLResponse(
        f'<h1 class="error">Error: {escape(detail)}</h1>',
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach global exception handlers to the FastAPI app."""

    logger = logging.getLogger(LOGGER_NAME)

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> Response:
        if exc.status_code >= 500:
            logger.error(
                "Request failed (%s %s): %s",
                request.method,
                request.url.path,
                exc.detail,
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.warning(
                "Request failed (%s %s): %s",
                request.method,
                request.url.path,
                exc.detail,
            )
        if not _wants_json(request):
            return _error_fragment(exc.status_code, exc.detail)
        payload: dict[str, Any] = {"detail": exc.detail, "error": exc.error_code}
        if exc.extra:
            payload["meta"] = exc.extra
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
        logger.warning("Validation error (%s %s): %s", request.method, request.url.path, exc.errors())
        if not _wants_json(request):
            return _error_fragment(HTTP_422_UNPROCESSABLE_CONTENT, "Invalid request")
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_CONTENT,
            content={"detail": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if not _wants_json(request):
            return _error_fragment(HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
