"""Shared fixtures for the browser tests."""
import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from file_browser.core.config import Settings
from file_browser.main import create_app
from file_browser.services.browser_engine import BrowserEngine
from file_browser.services.entry_scanner import EntryScanner
from file_browser.services.path_resolver import PathResolver
from file_browser.services.session_store import BrowserSession


def write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


def set_mtime(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


@pytest.fixture
def root(tmp_path):
    """Browser root with a few folders and media files."""
    base = tmp_path / "home" / "user"
    (base / "Pictures" / "Archive").mkdir(parents=True)
    (base / "Documents").mkdir()
    (base / ".cache").mkdir()
    write_file(base / "Pictures" / "a.png", 120)
    write_file(base / "big.mp4", 500)
    write_file(base / "small.jpg", 10)
    write_file(base / "notes.txt", 40)
    write_file(base / ".hidden.png", 5)
    set_mtime(base / "Documents", 1_000_000)
    set_mtime(base / "Pictures", 2_000_000)
    return base


@pytest.fixture
def resolver(root):
    return PathResolver(root)


@pytest.fixture
def engine(root, resolver):
    return BrowserEngine(root=root, resolver=resolver, scanner=EntryScanner())


@pytest.fixture
def session():
    return BrowserSession("test-session")


@pytest.fixture
def settings(root):
    return Settings(
        root_directory=root,
        session_secret="test-secret",
        session_idle_timeout=0,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
