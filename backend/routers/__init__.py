"""FastAPI routers for modular endpoint organization."""

from . import entries, health

__all__ = [
    "entries",
    "health",
]
