"""Exception hierarchy shared by the browser core and the HTTP layer."""
from __future__ import annotations

from enum import Enum
from typing import Any


class AppError(Exception):
    """Base exception for application specific errors."""

    status_code = 500
    error_code = "app_error"
    default_detail = "An unexpected error occurred."

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail
        self.extra = extra or {}


class DomainError(AppError):
    """Normalized domain error surfaced to API handlers."""


class BadRequestError(DomainError):
    status_code = 400
    error_code = "bad_request"
    default_detail = "Invalid request."


class ForbiddenError(DomainError):
    status_code = 403
    error_code = "forbidden"
    default_detail = "Forbidden."


class NotFoundError(DomainError):
    status_code = 404
    error_code = "not_found"
    default_detail = "Resource not found."


class ConflictError(DomainError):
    status_code = 409
    error_code = "conflict"
    default_detail = "Request conflict."


class InternalError(DomainError):
    status_code = 500
    error_code = "internal_error"
    default_detail = "Internal server error."


# Path resolution

class InvalidEncodingError(BadRequestError):
    error_code = "invalid_encoding"
    default_detail = "Path token is not valid percent-encoded UTF-8."


class PathOutsideRootError(ForbiddenError):
    error_code = "path_outside_root"
    default_detail = "Path leaves the browser root."


# Directory scanning

class DirectoryUnreadableError(NotFoundError):
    error_code = "directory_unreadable"
    default_detail = "Directory cannot be read."


class EntryMetadataUnavailableError(InternalError):
    error_code = "entry_metadata_unavailable"
    default_detail = "Metadata for a directory entry could not be read."


# Filesystem mutations

class FilesystemErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    OTHER = "other"


_KIND_STATUS = {
    FilesystemErrorKind.NOT_FOUND: 404,
    FilesystemErrorKind.PERMISSION_DENIED: 403,
    FilesystemErrorKind.ALREADY_EXISTS: 409,
    FilesystemErrorKind.OTHER: 500,
}


class FilesystemOpError(DomainError):
    """A create or rename on the host filesystem failed."""

    error_code = "filesystem_error"
    default_detail = "Filesystem operation failed."

    def __init__(
        self,
        kind: FilesystemErrorKind,
        detail: str | None = None,
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = _KIND_STATUS[kind]
        payload = {"kind": kind.value}
        if extra:
            payload.update(extra)
        super().__init__(detail, extra=payload)


# Command preconditions

class NoShowcaseError(NotFoundError):
    error_code = "no_showcase"
    default_detail = "No file is being previewed."


class EmptyInputError(NotFoundError):
    error_code = "empty_input"
    default_detail = "A name is required."
