"""Factory for creating the configured backing store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..logging import get_logger
from .base import BackingStore
from .memory import create_memory_store
from .rest import create_rest_store
from .seed_data import seed_records

if TYPE_CHECKING:
    from ..config import Settings

logger = get_logger(__name__)


def create_store(settings: Settings) -> BackingStore:
    """Create a backing store from settings.

    Raises:
        ValueError: If the backend is unknown or the rest backend has no api_url
    """
    backend = settings.resolved_store_backend

    if backend == "memory":
        if settings.seed_demo_data:
            books, authors = seed_records()
            logger.info("Seeding in-memory store", books=len(books), authors=len(authors))
            return create_memory_store(books=books, authors=authors)
        return create_memory_store()
    elif backend == "rest":
        if not settings.api_url:
            raise ValueError("The rest store backend requires BOOKSHELF_API_URL (or API_URL)")
        logger.info("Using REST backing store", api_url=settings.api_url)
        return create_rest_store(settings.api_url)
    else:
        raise ValueError(f"Unknown store backend: {backend}")
