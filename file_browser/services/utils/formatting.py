"""Formatting helpers shared by the API and the HTML views."""
from __future__ import annotations

from datetime import datetime
from typing import Optional


def format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return ""
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    index = 0
    size = float(size_bytes)

    while size >= 1024 and index < len(units) - 1:
        size /= 1024.0
        index += 1

    return f"{size:.1f} {units[index]}"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M:%S")
