"""FastAPI dependency providers."""
import asyncio
from dataclasses import dataclass

from fastapi import Depends, Request

from file_browser.models import CommandResult
from file_browser.services.browser_engine import BrowserEngine
from file_browser.services.health_service import HealthService
from file_browser.services.registry import ServiceRegistry
from file_browser.services.session_store import SessionStore

SESSION_KEY = "sid"


@dataclass(slots=True)
class BrowserContext:
    """The caller's session id plus the services that act on it."""

    engine: BrowserEngine
    store: SessionStore
    session_id: str

    async def run(self, command: object) -> CommandResult:
        """Execute ``command`` against this session; filesystem work runs off the event loop."""
        async with self.store.checkout(self.session_id) as session:
            return await asyncio.to_thread(self.engine.execute, session, command)

    async def snapshot(self) -> dict:
        async with self.store.checkout(self.session_id) as session:
            showcase = session.get_showcase()
            return {
                "current_directory": str(self.engine.current_directory(session)),
                "move_mode": session.move_mode,
                "interaction_mode": session.interaction_mode,
                "showcase": str(showcase) if showcase is not None else None,
            }


def get_service_registry(request: Request) -> ServiceRegistry:
    """Return the service registry stored on the FastAPI application state."""

    registry = request.app.state.services
    if not isinstance(registry, ServiceRegistry):
        raise RuntimeError("Service registry not initialised")
    return registry


def get_session_id(request: Request) -> str:
    """Return the caller's session id, issuing one on first contact."""

    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = SessionStore.new_session_id()
        request.session[SESSION_KEY] = session_id
    return session_id


def get_browser_context(
    session_id: str = Depends(get_session_id),
    registry: ServiceRegistry = Depends(get_service_registry),
) -> BrowserContext:
    return BrowserContext(
        engine=registry.browser_engine,
        store=registry.session_store,
        session_id=session_id,
    )


def get_health_service(registry: ServiceRegistry = Depends(get_service_registry)) -> HealthService:
    return registry.health_service
