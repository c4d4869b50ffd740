"""Shared dependencies for FastAPI endpoints."""

import logging

from fastapi import Request
from infrastructure.entry_store import EntryStore

logger = logging.getLogger("Dependencies")


def get_entry_store(request: Request) -> EntryStore:
    """
    Dependency to get the entry store instance from app state.

    The instance is created by the app factory, one per application.
    """
    return request.app.state.entry_store
