"""Domain models used by the browser core."""
from .browser import (
    MEDIA_EXTENSIONS,
    VIDEO_EXTENSIONS,
    DirectoryEntry,
    EntryAction,
    EntryKind,
    InteractionMode,
    Listing,
    PreviewKind,
    PreviewTarget,
    media_kind_for,
)
from .commands import (
    FETCH_RENAME_EVENT,
    REFETCH_EVENT,
    CommandResult,
    CreateFolder,
    ListDirectory,
    Navigate,
    Preview,
    RelocateShowcase,
    RenameShowcase,
    ToggleMoveMode,
)

__all__ = [
    "MEDIA_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "DirectoryEntry",
    "EntryAction",
    "EntryKind",
    "InteractionMode",
    "Listing",
    "PreviewKind",
    "PreviewTarget",
    "media_kind_for",
    "FETCH_RENAME_EVENT",
    "REFETCH_EVENT",
    "CommandResult",
    "CreateFolder",
    "ListDirectory",
    "Navigate",
    "Preview",
    "RelocateShowcase",
    "RenameShowcase",
    "ToggleMoveMode",
]
