"""Turn browser path tokens into absolute paths."""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from file_browser.core.exceptions import InvalidEncodingError, PathOutsideRootError

logger = logging.getLogger(__name__)

PARENT_TOKEN = ".."
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_token(value: str | Path) -> str:
    """Percent-encode a token for the client; the inverse of PathResolver.decode."""
    return quote(str(value), safe="")


class PathResolver:
    """Resolve percent-encoded tokens relative to a base directory.

    Tokens are decoded here and nowhere else. ``".."`` saturates at the
    filesystem root; anything else is joined onto the base without
    normalisation. With ``confine_to_root`` the result must stay inside
    ``root``.
    """

    def __init__(self, root: Optional[Path] = None, *, confine_to_root: bool = False) -> None:
        if confine_to_root and root is None:
            raise ValueError("confine_to_root requires a root directory")
        self._root = Path(root) if root is not None else None
        self._confine_to_root = confine_to_root

    @property
    def root(self) -> Optional[Path]:
        return self._root

    @staticmethod
    def decode(token: str) -> str:
        if _MALFORMED_ESCAPE.search(token):
            raise InvalidEncodingError(extra={"token": token})
        try:
            return unquote(token, errors="strict")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(extra={"token": token}) from exc

    def resolve(self, base: Path, token: str) -> Path:
        decoded = self.decode(token)
        if decoded == PARENT_TOKEN:
            # Path("/").parent is Path("/"), so the root maps onto itself.
            result = base.parent
        else:
            result = base / decoded
        self.ensure_within_root(result)
        return result

    def ensure_within_root(self, path: Path) -> None:
        if not self._confine_to_root:
            return
        root = os.path.realpath(self._root)
        target = os.path.realpath(path)
        if os.path.commonpath([root, target]) != root:
            logger.warning("Rejected path outside root: %s", path)
            raise PathOutsideRootError(extra={"path": str(path)})
