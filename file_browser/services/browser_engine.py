"""Command dispatch for the session-scoped file browser."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional
from urllib.parse import quote

from file_browser.core.exceptions import DirectoryUnreadableError, EmptyInputError, NoShowcaseError
from file_browser.models import (
    FETCH_RENAME_EVENT,
    REFETCH_EVENT,
    CommandResult,
    CreateFolder,
    DirectoryEntry,
    EntryAction,
    EntryKind,
    InteractionMode,
    ListDirectory,
    Navigate,
    Preview,
    PreviewKind,
    PreviewTarget,
    RelocateShowcase,
    RenameShowcase,
    ToggleMoveMode,
    VIDEO_EXTENSIONS,
)
from file_browser.services.entry_scanner import EntryScanner
from file_browser.services.path_resolver import PARENT_TOKEN, PathResolver, encode_token
from file_browser.services.session_store import BrowserSession
from file_browser.services.utils.errors import normalize_os_error

logger = logging.getLogger(__name__)

NAVIGATE = "navigate"
PREVIEW = "preview"
RELOCATE = "relocate"

VIDEO_SIZE_HINT = 400


def entry_action(entry: DirectoryEntry, mode: InteractionMode) -> Optional[EntryAction]:
    """Return the command a click on ``entry`` issues in ``mode``.

    The parent entry always navigates up, media files always preview, and
    other folders navigate in browse mode or receive the showcase in move mode.
    """
    if entry.is_parent:
        return EntryAction(command=NAVIGATE, token=PARENT_TOKEN)
    if entry.kind is EntryKind.DIRECTORY:
        token = encode_token(entry.path.name)
        if mode is InteractionMode.MOVE:
            return EntryAction(command=RELOCATE, token=token)
        return EntryAction(command=NAVIGATE, token=token)
    if entry.kind is EntryKind.MEDIA:
        return EntryAction(command=PREVIEW, token=encode_token(entry.path))
    return None


class BrowserEngine:
    """Applies browser commands to a session and the host filesystem.

    The engine holds no per-session state; callers pass the session in and
    serialise access to it. Every method does blocking filesystem I/O.
    """

    def __init__(
        self,
        *,
        root: Path,
        resolver: PathResolver,
        scanner: EntryScanner,
        files_url_prefix: str = "/files",
    ) -> None:
        self._root = Path(root)
        self._resolver = resolver
        self._scanner = scanner
        self._files_url_prefix = files_url_prefix.rstrip("/")
        self._handlers: Dict[type, Callable[[BrowserSession, object], CommandResult]] = {
            ListDirectory: self._list_directory,
            Navigate: self._navigate,
            ToggleMoveMode: self._toggle_move_mode,
            Preview: self._preview,
            CreateFolder: self._create_folder,
            RenameShowcase: self._rename_showcase,
            RelocateShowcase: self._relocate_showcase,
        }

    @property
    def root(self) -> Path:
        return self._root

    def execute(self, session: BrowserSession, command: object) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {command!r}")
        return handler(session, command)

    def current_directory(self, session: BrowserSession) -> Path:
        return session.get_or_init_directory(self._root)

    # -------------------------
    # commands
    # -------------------------
    def _list_directory(self, session: BrowserSession, _command: ListDirectory) -> CommandResult:
        directory = self.current_directory(session)
        listing = self._scanner.scan(directory, session.move_mode)
        return CommandResult(listing=listing)

    def _navigate(self, session: BrowserSession, command: Navigate) -> CommandResult:
        base = self.current_directory(session)
        new_dir = self._resolver.resolve(base, command.destination)
        if not new_dir.is_dir():
            raise DirectoryUnreadableError(
                f"Not a directory: {new_dir}",
                extra={"path": str(new_dir)},
            )
        session.set_directory(new_dir)
        logger.info("Session %s moved to %s", session.session_id, new_dir)
        return CommandResult(message=str(new_dir), events=[REFETCH_EVENT])

    def _toggle_move_mode(self, session: BrowserSession, _command: ToggleMoveMode) -> CommandResult:
        enabled = session.toggle_move_mode()
        logger.debug("Session %s move mode %s", session.session_id, enabled)
        return CommandResult(
            message="Move mode on" if enabled else "Move mode off",
            events=[REFETCH_EVENT],
        )

    def _preview(self, session: BrowserSession, command: Preview) -> CommandResult:
        path = Path(self._resolver.decode(command.token))
        if not path.is_absolute():
            path = self.current_directory(session) / path
        self._resolver.ensure_within_root(path)
        session.set_showcase(path)
        return CommandResult(
            message=path.name,
            events=[FETCH_RENAME_EVENT],
            preview=self.preview_target(path),
        )

    def _create_folder(self, session: BrowserSession, command: CreateFolder) -> CommandResult:
        new_dir = self.current_directory(session) / command.folder_name
        self._resolver.ensure_within_root(new_dir)
        if new_dir.exists():
            return CommandResult(
                message=f"Folder '{command.folder_name}' already exists",
                events=[REFETCH_EVENT],
            )
        try:
            new_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise normalize_os_error(exc, operation="create_folder", path=new_dir) from exc
        logger.info("Created folder %s", new_dir)
        return CommandResult(message=f"Folder '{command.folder_name}' created", events=[REFETCH_EVENT])

    def _rename_showcase(self, session: BrowserSession, command: RenameShowcase) -> CommandResult:
        new_name = self._resolver.decode(command.new_name)
        if not new_name:
            raise EmptyInputError("New name cannot be empty")
        showcase = session.get_showcase()
        if showcase is None:
            raise NoShowcaseError()
        target = self.current_directory(session) / new_name
        self._resolver.ensure_within_root(target)
        try:
            showcase.rename(target)
        except OSError as exc:
            raise normalize_os_error(exc, operation="rename", path=showcase) from exc
        session.set_showcase(target)
        logger.info("Renamed %s to %s", showcase, target)
        return CommandResult(message=f"Renamed to '{target.name}'", events=[REFETCH_EVENT])

    def _relocate_showcase(self, session: BrowserSession, command: RelocateShowcase) -> CommandResult:
        showcase = session.get_showcase()
        if showcase is None:
            raise NoShowcaseError()
        target_dir = self._resolver.resolve(self.current_directory(session), command.destination)
        target = target_dir / showcase.name
        try:
            showcase.rename(target)
        except OSError as exc:
            raise normalize_os_error(exc, operation="move", path=showcase) from exc
        session.set_showcase(None)
        logger.info("Moved %s to %s", showcase, target)
        return CommandResult(message=str(target), events=[REFETCH_EVENT])

    # -------------------------
    # presentation helpers
    # -------------------------
    def preview_target(self, path: Path) -> PreviewTarget:
        extension = path.suffix[1:].lower()
        kind = PreviewKind.VIDEO if extension in VIDEO_EXTENSIONS else PreviewKind.IMAGE
        return PreviewTarget(
            kind=kind,
            path=path,
            served_url=self.served_url(path),
            size_hint=VIDEO_SIZE_HINT if kind is PreviewKind.VIDEO else None,
        )

    def served_url(self, path: Path) -> Optional[str]:
        try:
            relative = path.relative_to(self._root)
        except ValueError:
            return None
        return f"{self._files_url_prefix}/{quote(relative.as_posix())}"
