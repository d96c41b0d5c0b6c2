"""Pydantic schemas exposed by the application API."""
from .browser import (
    CommandResponse,
    EntryActionSchema,
    EntrySchema,
    FolderRequest,
    HealthResponse,
    ListingResponse,
    LocationRequest,
    PreviewResponse,
    SessionStateResponse,
    SimpleMessage,
)

__all__ = [
    "CommandResponse",
    "EntryActionSchema",
    "EntrySchema",
    "FolderRequest",
    "HealthResponse",
    "ListingResponse",
    "LocationRequest",
    "PreviewResponse",
    "SessionStateResponse",
    "SimpleMessage",
]
