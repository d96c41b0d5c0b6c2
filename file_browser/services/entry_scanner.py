"""Read one directory and turn it into an ordered listing."""
from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from file_browser.core.exceptions import DirectoryUnreadableError, EntryMetadataUnavailableError
from file_browser.models import DirectoryEntry, EntryKind, Listing, media_kind_for
from file_browser.services.path_resolver import PARENT_TOKEN

logger = logging.getLogger(__name__)


def parent_entry(directory: Path) -> DirectoryEntry:
    return DirectoryEntry(
        path=directory.parent,
        kind=EntryKind.DIRECTORY,
        display_name=PARENT_TOKEN,
        is_parent=True,
    )


class EntryScanner:
    """Builds listings: hidden entries dropped, folders newest first, media smallest first.

    Stateless; safe to share between sessions and threads. Symlinks are
    classified by the link itself, so they show up as neither folders nor
    files.
    """

    def scan(self, directory: Path, move_mode: bool = False) -> Listing:
        try:
            with os.scandir(directory) as iterator:
                children = list(iterator)
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", directory, exc)
            raise DirectoryUnreadableError(
                f"Directory cannot be read: {directory}",
                extra={"path": str(directory)},
            ) from exc

        folders: list[tuple[int, DirectoryEntry]] = []
        media: list[DirectoryEntry] = []
        for child in children:
            if child.name.startswith("."):
                continue
            try:
                stat = child.stat(follow_symlinks=False)
                is_dir = child.is_dir(follow_symlinks=False)
                is_file = child.is_file(follow_symlinks=False)
            except OSError as exc:
                logger.warning("Metadata unavailable for %s: %s", child.path, exc)
                raise EntryMetadataUnavailableError(
                    f"Metadata unavailable for {child.path}",
                    extra={"path": child.path},
                ) from exc

            path = Path(child.path)
            if is_dir:
                entry = DirectoryEntry(
                    path=path,
                    kind=EntryKind.DIRECTORY,
                    display_name=child.name,
                    modified_time=datetime.fromtimestamp(stat.st_mtime),
                )
                folders.append((stat.st_mtime_ns, entry))
                continue
            preview_kind = media_kind_for(path) if is_file else None
            if preview_kind is None:
                continue
            media.append(
                DirectoryEntry(
                    path=path,
                    kind=EntryKind.MEDIA,
                    display_name=child.name,
                    size_bytes=stat.st_size,
                    preview_kind=preview_kind,
                )
            )

        # list.sort stays stable with reverse=True, so equal mtimes keep enumeration order.
        folders.sort(key=lambda item: item[0], reverse=True)
        media.sort(key=lambda entry: entry.size_bytes)

        directories = [parent_entry(directory)]
        directories.extend(entry for _, entry in folders)
        logger.debug(
            "Scanned %s: %d folder(s), %d media file(s)",
            directory,
            len(directories) - 1,
            len(media),
        )
        return Listing(
            directory=directory,
            move_mode=move_mode,
            directories=directories,
            files=media,
        )
