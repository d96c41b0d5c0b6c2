"""Schemas for the browser JSON API."""
from typing import List, Optional

from pydantic import BaseModel, Field

from file_browser.models import EntryKind, InteractionMode, PreviewKind


class SimpleMessage(BaseModel):
    """Generic success/error wrapper."""

    success: bool
    message: str


class LocationRequest(BaseModel):
    """Percent-encoded path token sent by the client."""

    destination: str = Field(..., description="Percent-encoded destination token")


class FolderRequest(BaseModel):
    """Payload for folder creation."""

    folder_name: str = Field(..., description="Name of the folder to create")


class EntryActionSchema(BaseModel):
    command: str
    token: str


class EntrySchema(BaseModel):
    """Single folder or media file in a listing."""

    name: str
    path: str
    kind: EntryKind
    is_parent: bool = False
    modified: Optional[str] = None
    size: Optional[str] = None
    size_bytes: Optional[int] = None
    preview_kind: Optional[PreviewKind] = None
    action: Optional[EntryActionSchema] = None


class ListingResponse(BaseModel):
    """Directory listing for the session's current directory."""

    current_path: str
    move_mode: bool
    interaction_mode: InteractionMode
    directories: List[EntrySchema]
    files: List[EntrySchema]
    directory_count: int
    file_count: int


class SessionStateResponse(BaseModel):
    current_directory: str
    move_mode: bool
    interaction_mode: InteractionMode
    showcase: Optional[str] = None


class PreviewResponse(BaseModel):
    """Where and how to present the previewed file."""

    kind: PreviewKind
    path: str
    served_url: Optional[str] = None
    size_hint: Optional[int] = None


class CommandResponse(SimpleMessage):
    """Acknowledgement of a command; ``refresh`` asks the client to refetch the listing."""

    refresh: bool = False
    events: List[str] = Field(default_factory=list)
    preview: Optional[PreviewResponse] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    root_directory: str
    root_readable: bool
    active_sessions: int
