"""Backing stores for the library service."""

from .base import (
    BackingStore,
    Collection,
    RecordNotFoundError,
    StoreConnectionError,
    StoreError,
)
from .factory import create_store
from .memory import InMemoryCollection, create_memory_store
from .rest import RestCollection, create_rest_store

__all__ = [
    "BackingStore",
    "Collection",
    "InMemoryCollection",
    "RecordNotFoundError",
    "RestCollection",
    "StoreConnectionError",
    "StoreError",
    "create_memory_store",
    "create_rest_store",
    "create_store",
]
