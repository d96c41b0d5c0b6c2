"""Keyed store of per-client browser sessions."""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, Dict, Optional
from uuid import uuid4

from file_browser.core.request_context import request_context
from file_browser.models import InteractionMode

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class BrowserSession:
    """Navigation state of one client: directory, move mode and showcase."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self._directory: Optional[Path] = None
        self._move_mode = False
        self._showcase: Optional[Path] = None

    @property
    def current_directory(self) -> Optional[Path]:
        return self._directory

    def get_or_init_directory(self, default: Path) -> Path:
        if self._directory is None:
            self._directory = Path(default)
        return self._directory

    def set_directory(self, path: Path) -> None:
        self._directory = Path(path)

    @property
    def move_mode(self) -> bool:
        return self._move_mode

    @property
    def interaction_mode(self) -> InteractionMode:
        return InteractionMode.from_flag(self._move_mode)

    def toggle_move_mode(self) -> bool:
        self._move_mode = not self._move_mode
        return self._move_mode

    def set_showcase(self, path: Optional[Path]) -> None:
        self._showcase = Path(path) if path is not None else None

    def get_showcase(self) -> Optional[Path]:
        return self._showcase


class _SessionSlot:
    """A session record plus its lock and last-access time."""

    def __init__(self, session: BrowserSession, now: float) -> None:
        self.session = session
        self.lock = asyncio.Lock()
        self.last_seen = now
        # Callers between lookup and release of the lock.
        self.holders = 0


class SessionStore:
    """Owns every BrowserSession, keyed by an opaque session id.

    Records never share state; callers work on one session at a time through
    ``checkout``. Sessions idle for longer than ``idle_timeout`` seconds are
    dropped by ``purge_idle`` (0 keeps them forever).
    """

    def __init__(self, *, idle_timeout: float = 0, clock: Clock = time.monotonic) -> None:
        self._slots: Dict[str, _SessionSlot] = {}
        self._slots_lock = asyncio.Lock()
        self._idle_timeout = idle_timeout
        self._clock = clock

    @staticmethod
    def new_session_id() -> str:
        return uuid4().hex

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._slots

    @asynccontextmanager
    async def checkout(self, session_id: str) -> AsyncIterator[BrowserSession]:
        """Yield the session for ``session_id``, creating it on first use."""
        slot = await self._get_slot(session_id)
        try:
            async with slot.lock:
                slot.last_seen = self._clock()
                yield slot.session
        finally:
            slot.holders -= 1

    async def discard(self, session_id: str) -> None:
        async with self._slots_lock:
            self._slots.pop(session_id, None)

    async def purge_idle(self) -> int:
        if self._idle_timeout <= 0:
            return 0
        cutoff = self._clock() - self._idle_timeout
        async with self._slots_lock:
            expired = [
                key
                for key, slot in self._slots.items()
                if slot.last_seen < cutoff and not slot.holders
            ]
            for key in expired:
                del self._slots[key]
        if expired:
            logger.info("Dropped %d idle session(s)", len(expired))
        return len(expired)

    async def run_sweeper(self, interval: float) -> None:
        """Purge idle sessions every ``interval`` seconds until cancelled."""
        with request_context("bg:sessions"):
            while True:
                await asyncio.sleep(interval)
                await self.purge_idle()

    async def _get_slot(self, session_id: str) -> _SessionSlot:
        """Look up or create the slot and register the caller before the store lock drops."""
        async with self._slots_lock:
            slot = self._slots.get(session_id)
            if slot is None:
                slot = _SessionSlot(BrowserSession(session_id), self._clock())
                self._slots[session_id] = slot
                logger.debug("Created session %s", session_id)
            slot.last_seen = self._clock()
            slot.holders += 1
            return slot
