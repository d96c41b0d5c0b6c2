"""Commands accepted by the browser engine and their results."""
from dataclasses import dataclass, field
from typing import List, Optional

from file_browser.models.browser import Listing, PreviewTarget

REFETCH_EVENT = "refetch"
FETCH_RENAME_EVENT = "fetchrename"


@dataclass(frozen=True)
class ListDirectory:
    pass


@dataclass(frozen=True)
class Navigate:
    destination: str


@dataclass(frozen=True)
class ToggleMoveMode:
    pass


@dataclass(frozen=True)
class Preview:
    token: str


@dataclass(frozen=True)
class CreateFolder:
    folder_name: str


@dataclass(frozen=True)
class RenameShowcase:
    new_name: str


@dataclass(frozen=True)
class RelocateShowcase:
    destination: str


@dataclass
class CommandResult:
    """Outcome of a successful command.

    ``events`` are the client-side triggers the transport should emit after
    the response settles; ``refetch`` asks the client to reload the listing.
    """

    message: str = ""
    events: List[str] = field(default_factory=list)
    listing: Optional[Listing] = None
    preview: Optional[PreviewTarget] = None

    @property
    def refresh(self) -> bool:
        return REFETCH_EVENT in self.events
