"""Health check service."""
import os
from datetime import datetime, timezone
from pathlib import Path

from file_browser.services.session_store import SessionStore


class HealthService:
    """Reports whether the browser root can be listed."""

    def __init__(self, root: Path, session_store: SessionStore) -> None:
        self._root = root
        self._session_store = session_store

    def check(self) -> dict:
        readable = self._root.is_dir() and os.access(self._root, os.R_OK | os.X_OK)
        return {
            "status": "healthy" if readable else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "root_directory": str(self._root),
            "root_readable": readable,
            "active_sessions": len(self._session_store),
        }
