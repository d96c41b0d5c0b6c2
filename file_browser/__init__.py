"""Session-scoped web file browser."""

__version__ = "0.3.0"
