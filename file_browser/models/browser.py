"""Domain models describing directory listings and previews."""
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

MEDIA_EXTENSIONS = frozenset({"mp4", "mov", "png", "jpg", "jpeg"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mov"})


class EntryKind(str, Enum):
    """Classification of a listed path."""

    DIRECTORY = "directory"
    MEDIA = "media"
    OTHER = "other"


class PreviewKind(str, Enum):
    """How a media file is presented."""

    IMAGE = "image"
    VIDEO = "video"


def _extension(path: Path) -> str:
    return path.suffix[1:].lower()


def media_kind_for(path: Path) -> Optional[PreviewKind]:
    """Return the preview kind for a whitelisted media file, None otherwise."""

    extension = _extension(path)
    if extension not in MEDIA_EXTENSIONS:
        return None
    if extension in VIDEO_EXTENSIONS:
        return PreviewKind.VIDEO
    return PreviewKind.IMAGE


class InteractionMode(str, Enum):
    """How clicks on directory entries are interpreted."""

    BROWSE = "browse"
    MOVE = "move"

    @classmethod
    def from_flag(cls, move_mode: bool) -> "InteractionMode":
        return cls.MOVE if move_mode else cls.BROWSE


class DirectoryEntry(BaseModel):
    """One row of a listing, rebuilt on every scan."""

    path: Path
    kind: EntryKind
    display_name: str
    is_parent: bool = False
    modified_time: Optional[datetime] = None
    size_bytes: Optional[int] = None
    preview_kind: Optional[PreviewKind] = None


class Listing(BaseModel):
    """Ordered directory and media sub-listings of one directory."""

    directory: Path
    move_mode: bool = False
    directories: List[DirectoryEntry] = Field(default_factory=list)
    files: List[DirectoryEntry] = Field(default_factory=list)

    @property
    def interaction_mode(self) -> InteractionMode:
        return InteractionMode.from_flag(self.move_mode)


class EntryAction(BaseModel):
    """Command a click on an entry issues, with its encoded token."""

    command: str
    token: str


class PreviewTarget(BaseModel):
    """What the presentation layer needs to show the showcase file."""

    kind: PreviewKind
    path: Path
    served_url: Optional[str] = None
    size_hint: Optional[int] = None
