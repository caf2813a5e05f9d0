"""Core backing-store interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

Record = dict[str, Any]


class StoreError(Exception):
    """Base exception for backing-store operations."""

    pass


class StoreConnectionError(StoreError):
    """The backing store could not be reached (refused, DNS, connect timeout)."""

    pass


class RecordNotFoundError(StoreError):
    """A write targeted a record the store does not hold."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}/{record_id} not found")
        self.collection = collection
        self.record_id = record_id


class Collection(ABC):
    """One resource collection (books or authors) in a backing store.

    ``list`` filters follow the json-server query conventions the upstream
    API uses: ``field=value`` keeps records whose field equals the value and
    ``field_ne=value`` drops them.
    """

    name: str

    @abstractmethod
    async def list(self, **filters: Any) -> list[Record]:
        """Return every record matching all filters."""
        pass

    @abstractmethod
    async def get(self, record_id: str) -> Record | None:
        """Return the record with this id, or None if absent."""
        pass

    @abstractmethod
    async def create(self, data: Record) -> Record:
        """Store a new record and return it with its generated id."""
        pass

    @abstractmethod
    async def update(self, record_id: str, data: Record) -> Record:
        """Replace a record's fields and return the stored record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        pass

    @abstractmethod
    async def delete(self, record_id: str) -> Record | None:
        """Remove a record.

        Returns the removed record when the store reports it, else None.

        Raises:
            RecordNotFoundError: If the store rejects the id as unknown
        """
        pass


@dataclass
class BackingStore:
    """The pair of collections a library service reads and writes."""

    books: Collection
    authors: Collection
    backend: str

    async def close(self) -> None:
        """Release any resources held by the collections."""
        return None
