"""Entry routes for CRUD operations, search and statistics."""

import logging
from datetime import date, datetime, time, timezone
from typing import List, Optional

import schemas
from core.dependencies import get_entry_store
from core.settings import Settings
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from infrastructure.entry_store import EntryStore
from slowapi import Limiter

logger = logging.getLogger("EntryRouter")


def _start_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min, tzinfo=timezone.utc) if day else None


def _end_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.max, tzinfo=timezone.utc) if day else None


async def list_entries(request: Request, store: EntryStore = Depends(get_entry_store)):
    """List all entries in insertion order."""
    return store.list()


async def get_statistics(request: Request, store: EntryStore = Depends(get_entry_store)):
    """Get entry totals and the most used tags and categories."""
    return store.statistics()


async def search_entries(
    request: Request,
    q: Optional[str] = Query(default=None, max_length=1000, description="Whitespace-separated keywords"),
    tag: Optional[str] = Query(default=None, max_length=100),
    category: Optional[str] = Query(default=None, max_length=200),
    start: Optional[date] = Query(default=None, description="Earliest day (UTC), inclusive"),
    end: Optional[date] = Query(default=None, description="Latest day (UTC), inclusive"),
    store: EntryStore = Depends(get_entry_store),
):
    """
    Search entries by keyword, tag, category and date range.

    Returns:
        Matching entries, newest first
    """
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return store.search(
        query=q,
        tag=tag,
        category=category,
        start=_start_of_day(start),
        end=_end_of_day(end),
    )


async def get_entry(request: Request, entry_id: str, store: EntryStore = Depends(get_entry_store)):
    """Get a specific entry by ID."""
    return store.get_by_id(entry_id)


async def create_entry(request: Request, entry: schemas.EntryCreate, store: EntryStore = Depends(get_entry_store)):
    """Create a new entry. The id and timestamp are assigned by the server."""
    created = store.add(entry.model_dump(exclude_unset=True))
    logger.info(f"Created entry {created.id}")
    return created


async def update_entry(
    request: Request,
    entry_id: str,
    entry_update: schemas.EntryUpdate,
    store: EntryStore = Depends(get_entry_store),
):
    """
    Update message, tags and/or category of an entry.

    Fields missing from the body are left unchanged; a null or empty category clears it.
    """
    return store.update(entry_id, entry_update.model_dump(exclude_unset=True))


async def delete_entry(request: Request, entry_id: str, store: EntryStore = Depends(get_entry_store)):
    """Delete an entry permanently."""
    store.delete(entry_id)
    logger.info(f"Deleted entry {entry_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def create_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """
    Build the entries router for one application.

    Reads are limited by settings.rate_limit and writes by settings.write_rate_limit,
    both counted by the app's own limiter.
    """
    read = limiter.limit(settings.rate_limit)
    write = limiter.limit(settings.write_rate_limit)
    entry_response = {"response_model": schemas.Entry, "response_model_exclude_none": True}

    router = APIRouter()
    router.add_api_route(
        "", read(list_entries), methods=["GET"], response_model=List[schemas.Entry], response_model_exclude_none=True
    )
    router.add_api_route("/stats", read(get_statistics), methods=["GET"], response_model=schemas.EntryStatistics)
    router.add_api_route(
        "/search",
        read(search_entries),
        methods=["GET"],
        response_model=List[schemas.Entry],
        response_model_exclude_none=True,
    )
    router.add_api_route("/{entry_id}", read(get_entry), methods=["GET"], **entry_response)
    router.add_api_route(
        "", write(create_entry), methods=["POST"], status_code=status.HTTP_201_CREATED, **entry_response
    )
    router.add_api_route("/{entry_id}", write(update_entry), methods=["PUT", "PATCH"], **entry_response)
    router.add_api_route(
        "/{entry_id}", write(delete_entry), methods=["DELETE"], status_code=status.HTTP_204_NO_CONTENT
    )
    return router
