"""Browser services and their registry."""
from .registry import ServiceRegistry

__all__ = ["ServiceRegistry"]
