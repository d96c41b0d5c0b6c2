"""Root API router that aggregates all endpoint modules."""
from fastapi import APIRouter

from file_browser.api.routes import browser, health

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router, tags=["health"])
api_router.include_router(browser.router, prefix="/browser", tags=["browser"])
