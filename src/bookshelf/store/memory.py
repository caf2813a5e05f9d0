"""In-process collection store for development, tests and the embedded mode."""

import uuid
from copy import deepcopy
from typing import Any

from ..logging import get_logger
from .base import BackingStore, Collection, Record, RecordNotFoundError

logger = get_logger(__name__)

_NE_SUFFIX = "_ne"


def _matches(record: Record, filters: dict[str, Any]) -> bool:
    """Apply json-server style equality and ``_ne`` filters to one record."""
    for key, expected in filters.items():
        if expected is None:
            continue
        if key.endswith(_NE_SUFFIX):
            field = key[: -len(_NE_SUFFIX)]
            if str(record.get(field)) == str(expected):
                return False
        elif str(record.get(key)) != str(expected):
            return False
    return True


class InMemoryCollection(Collection):
    """A list of records living as long as the process.

    Records are copied on the way in and out so callers never hold a
    reference into the collection.
    """

    def __init__(self, name: str, records: list[Record] | None = None):
        self.name = name
        self._records: list[Record] = [deepcopy(r) for r in records or []]

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if str(record.get("id")) == str(record_id):
                return index
        return None

    async def list(self, **filters: Any) -> list[Record]:
        return [deepcopy(r) for r in self._records if _matches(r, filters)]

    async def get(self, record_id: str) -> Record | None:
        index = self._index_of(record_id)
        if index is None:
            return None
        return deepcopy(self._records[index])

    async def create(self, data: Record) -> Record:
        record = {**deepcopy(data), "id": str(uuid.uuid4())}
        self._records.append(record)
        logger.debug("Record stored", collection=self.name, record_id=record["id"])
        return deepcopy(record)

    async def update(self, record_id: str, data: Record) -> Record:
        index = self._index_of(record_id)
        if index is None:
            raise RecordNotFoundError(self.name, record_id)
        record = {**deepcopy(data), "id": self._records[index]["id"]}
        self._records[index] = record
        return deepcopy(record)

    async def delete(self, record_id: str) -> Record | None:
        index = self._index_of(record_id)
        if index is None:
            return None
        return self._records.pop(index)


def create_memory_store(
    books: list[Record] | None = None, authors: list[Record] | None = None
) -> BackingStore:
    """Build a backing store over fresh in-memory collections."""
    return BackingStore(
        books=InMemoryCollection("books", books),
        authors=InMemoryCollection("authors", authors),
        backend="memory",
    )
