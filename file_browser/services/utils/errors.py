"""Filesystem error normalization helpers."""
from __future__ import annotations

import errno
from pathlib import Path

from file_browser.core.exceptions import FilesystemErrorKind, FilesystemOpError


def normalize_os_error(exc: OSError, *, operation: str, path: Path | str) -> FilesystemOpError:
    if isinstance(exc, FileNotFoundError):
        kind = FilesystemErrorKind.NOT_FOUND
    elif isinstance(exc, PermissionError):
        kind = FilesystemErrorKind.PERMISSION_DENIED
    elif isinstance(exc, FileExistsError) or exc.errno == errno.ENOTEMPTY:
        kind = FilesystemErrorKind.ALREADY_EXISTS
    else:
        kind = FilesystemErrorKind.OTHER
    reason = exc.strerror or str(exc) or exc.__class__.__name__
    return FilesystemOpError(
        kind,
        f"{operation} failed for {path}: {reason}",
        extra={"operation": operation, "path": str(path)},
    )
