"""Request id propagation for log records."""
from __future__ import annotations

import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_REQUEST_ID = "system"

_MAX_REQUEST_ID_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]+$")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str:
    return _request_id.get() or DEFAULT_REQUEST_ID


def accept_request_id(candidate: str | None) -> str:
    """Return ``candidate`` when it is a usable id, otherwise a fresh one."""
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LENGTH and _REQUEST_ID_PATTERN.match(candidate):
        return candidate
    return uuid4().hex


@contextmanager
def request_context(request_id: str) -> Iterator[str]:
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)
