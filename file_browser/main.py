"""FastAPI application factory."""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import MutableHeaders
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

from file_browser import __version__
from file_browser.api.error_handlers import register_exception_handlers
from file_browser.api.router import api_router
from file_browser.core.config import Settings, get_settings
from file_browser.core.logging import configure_logging
from file_browser.core.request_context import REQUEST_ID_HEADER, accept_request_id, request_context
from file_browser.services import ServiceRegistry
from file_browser.web.routes import router as web_router

STATIC_DIR = Path(__file__).resolve().parent / "web" / "static"


class RequestIdMiddleware:
    def __init__(self, app, logger: logging.Logger):
        self.app = app
        self.logger = logger

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id
            await send(message)

        with request_context(request_id):
            try:
                await self.app(scope, receive, send_wrapper)
            finally:
                duration_ms = int((time.perf_counter() - start) * 1000)
                self.logger.debug(
                    "%s %s -> %s in %dms",
                    scope.get("method", ""),
                    scope.get("path", ""),
                    status_code,
                    duration_ms,
                )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for ``settings`` (app.json and environment by default)."""

    settings = settings or get_settings()
    logger = configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage startup and shutdown of background services."""

        registry: ServiceRegistry = app.state.services
        await registry.startup()
        try:
            yield
        finally:
            await registry.shutdown()

    app = FastAPI(
        title="File Browser",
        description="Session-scoped browser for a host directory",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = ServiceRegistry(settings)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        same_site="lax",
    )
    app.add_middleware(RequestIdMiddleware, logger=logger)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.mount(
        settings.files_url_prefix,
        StaticFiles(directory=str(settings.root), check_dir=False),
        name="files",
    )

    app.include_router(web_router)
    app.include_router(api_router)
    register_exception_handlers(app)
    return app
