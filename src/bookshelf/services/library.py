"""
Library service: validation and delegation for books and authors.

Every mutation runs the same linear pipeline against the injected backing
store: existence check, uniqueness check, referential check, merge, commit.
The steps are sequential and not atomic; a concurrent writer can slip in
between a check and the write that follows it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import (
    InfrastructureError,
    NotFoundError,
    ServiceUnavailableError,
    UserInputError,
)
from ..logging import get_logger
from ..models import (
    AuthorPatch,
    AuthorRecord,
    BookPatch,
    BookRecord,
    NewAuthor,
    NewBook,
    merge_record,
)
from ..store.base import (
    BackingStore,
    Collection,
    RecordNotFoundError,
    StoreConnectionError,
    StoreError,
)

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Fields a patch may omit but never set to null, keyed to their wire names
_REQUIRED_BOOK_FIELDS = {
    "title": "title",
    "publisher": "publisher",
    "gender": "gender",
    "author_id": "authorId",
}
_REQUIRED_AUTHOR_FIELDS = {"name": "name"}


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate backing-store failures into infrastructure errors."""
    try:
        yield
    except StoreConnectionError as e:
        raise ServiceUnavailableError(e) from e
    except StoreError as e:
        raise InfrastructureError(str(e), e) from e


def _parse(model: type[RecordT], data: Any) -> RecordT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Malformed record from backing store", model=model.__name__, error=str(e))
        raise InfrastructureError(
            f"Malformed {model.__name__} returned by the backing store", e
        ) from e


def _require_text(field: str, value: str | None) -> None:
    if value is None or not value.strip():
        raise UserInputError(field, "blank", f"{field} must not be empty")


def _reject_null_required(patch: BaseModel, required: dict[str, str]) -> None:
    for attr in patch.model_fields_set:
        if attr in required and getattr(patch, attr) is None:
            field = required[attr]
            raise UserInputError(field, "null", f"{field} cannot be set to null")


class LibraryService:
    """CRUD over books and authors with the cross-entity consistency checks."""

    def __init__(self, store: BackingStore, strict_delete: bool = False):
        self.store = store
        self.strict_delete = strict_delete

    @classmethod
    def for_store(cls, store: BackingStore, strict_delete: bool | None = None) -> LibraryService:
        """Build a service, defaulting the delete contract from the store backend.

        A REST upstream gets strict deletes; the in-memory store stays lenient.
        """
        if strict_delete is None:
            strict_delete = store.backend == "rest"
        return cls(store, strict_delete=strict_delete)

    # Queries

    async def list_books(self) -> list[BookRecord]:
        with store_errors():
            rows = await self.store.books.list()
        return [_parse(BookRecord, row) for row in rows]

    async def get_book(self, book_id: str) -> BookRecord | None:
        with store_errors():
            row = await self.store.books.get(book_id)
        return _parse(BookRecord, row) if row else None

    async def list_books_by_author(self, author_id: str) -> list[BookRecord]:
        with store_errors():
            rows = await self.store.books.list(author_id=author_id)
        return [_parse(BookRecord, row) for row in rows]

    async def list_books_by_author_name(self, author_name: str) -> list[BookRecord]:
        """Books written by the author with exactly this name; empty if there is none."""
        author = await self.find_author_by_name(author_name)
        if author is None:
            return []
        return await self.list_books_by_author(author.id)

    async def list_authors(self) -> list[AuthorRecord]:
        with store_errors():
            rows = await self.store.authors.list()
        return [_parse(AuthorRecord, row) for row in rows]

    async def get_author(self, author_id: str) -> AuthorRecord | None:
        with store_errors():
            row = await self.store.authors.get(author_id)
        return _parse(AuthorRecord, row) if row else None

    async def get_authors(self, author_ids: list[str]) -> list[AuthorRecord | None]:
        """Point-lookup several authors concurrently, preserving order."""
        return list(await asyncio.gather(*(self.get_author(i) for i in author_ids)))

    async def find_author_by_name(self, name: str) -> AuthorRecord | None:
        with store_errors():
            rows = await self.store.authors.list(name=name)
        return _parse(AuthorRecord, rows[0]) if rows else None

    # Consistency checks

    async def _ensure_unique_title(self, title: str, exclude_id: str | None = None) -> None:
        with store_errors():
            clashes = await self.store.books.list(title=title, id_ne=exclude_id)
        if clashes:
            logger.info("Rejected duplicate book title", title=title, exclude_id=exclude_id)
            raise UserInputError(
                "title", "duplicate", f"A book titled '{title}' already exists"
            )

    async def _ensure_unique_name(self, name: str, exclude_id: str | None = None) -> None:
        with store_errors():
            clashes = await self.store.authors.list(name=name, id_ne=exclude_id)
        if clashes:
            logger.info("Rejected duplicate author name", name=name, exclude_id=exclude_id)
            raise UserInputError(
                "name", "duplicate", f"An author named '{name}' already exists"
            )

    async def _ensure_author_exists(self, author_id: str) -> None:
        if await self.get_author(author_id) is None:
            raise UserInputError(
                "authorId", "not_found", f"No author exists with ID: {author_id}"
            )

    async def _resolve_author_reference(
        self, author_id: str | None, author_name: str | None
    ) -> str:
        if author_id is not None and author_name is not None:
            raise UserInputError(
                "authorId", "ambiguous", "Provide either authorId or authorName, not both"
            )
        if author_name is not None:
            author = await self.find_author_by_name(author_name)
            if author is None:
                raise UserInputError(
                    "authorName", "not_found", f"No author exists with name: {author_name}"
                )
            return author.id
        if author_id is None:
            raise UserInputError("authorId", "missing", "authorId or authorName is required")
        await self._ensure_author_exists(author_id)
        return author_id

    # Author mutations

    async def add_author(self, author: NewAuthor) -> AuthorRecord:
        _require_text("name", author.name)
        await self._ensure_unique_name(author.name)

        with store_errors():
            row = await self.store.authors.create(author.model_dump(mode="json"))
        created = _parse(AuthorRecord, row)
        logger.info("Author created", author_id=created.id, name=created.name)
        return created

    async def update_author(self, author_id: str, patch: AuthorPatch) -> AuthorRecord:
        existing = await self.get_author(author_id)
        if existing is None:
            raise NotFoundError("author", author_id)

        _reject_null_required(patch, _REQUIRED_AUTHOR_FIELDS)
        if "name" in patch.model_fields_set:
            _require_text("name", patch.name)
            await self._ensure_unique_name(patch.name, exclude_id=existing.id)

        payload = merge_record(existing, patch)
        with store_errors():
            try:
                row = await self.store.authors.update(existing.id, payload)
            except RecordNotFoundError as e:
                raise NotFoundError("author", author_id) from e
        updated = _parse(AuthorRecord, row)
        logger.info(
            "Author updated", author_id=updated.id, fields=sorted(patch.model_fields_set)
        )
        return updated

    async def delete_author(self, author_id: str) -> AuthorRecord | None:
        return await self._delete(
            "author", author_id, self.store.authors, self.get_author, AuthorRecord
        )

    # Book mutations

    async def add_book(self, book: NewBook, author_name: str | None = None) -> BookRecord:
        """Create a book referencing an existing author by id or by exact name."""
        _require_text("title", book.title)
        await self._ensure_unique_title(book.title)
        author_id = await self._resolve_author_reference(book.author_id, author_name)

        payload = book.model_dump(mode="json")
        payload["author_id"] = author_id
        with store_errors():
            row = await self.store.books.create(payload)
        created = _parse(BookRecord, row)
        logger.info(
            "Book created", book_id=created.id, title=created.title, author_id=author_id
        )
        return created

    async def update_book(self, book_id: str, patch: BookPatch) -> BookRecord:
        existing = await self.get_book(book_id)
        if existing is None:
            raise NotFoundError("book", book_id)

        _reject_null_required(patch, _REQUIRED_BOOK_FIELDS)
        if "title" in patch.model_fields_set:
            _require_text("title", patch.title)
            await self._ensure_unique_title(patch.title, exclude_id=existing.id)
        if "author_id" in patch.model_fields_set:
            await self._ensure_author_exists(patch.author_id)

        payload = merge_record(existing, patch)
        with store_errors():
            try:
                row = await self.store.books.update(existing.id, payload)
            except RecordNotFoundError as e:
                raise NotFoundError("book", book_id) from e
        updated = _parse(BookRecord, row)
        logger.info("Book updated", book_id=updated.id, fields=sorted(patch.model_fields_set))
        return updated

    async def delete_book(self, book_id: str) -> BookRecord | None:
        return await self._delete("book", book_id, self.store.books, self.get_book, BookRecord)

    async def _delete(
        self,
        entity: str,
        record_id: str,
        collection: Collection,
        lookup: Callable[[str], Awaitable[RecordT | None]],
        model: type[RecordT],
    ) -> RecordT | None:
        """Delete a record under the configured contract.

        Strict: an unknown id is a not-found user-input error.
        Lenient: an unknown id yields None.
        """
        existing: RecordT | None = None
        if self.strict_delete:
            existing = await lookup(record_id)
            if existing is None:
                raise NotFoundError(entity, record_id)

        with store_errors():
            try:
                removed = await collection.delete(record_id)
            except RecordNotFoundError as e:
                if self.strict_delete:
                    raise NotFoundError(entity, record_id) from e
                removed = None

        if removed:
            existing = _parse(model, removed)
        if existing is not None:
            logger.info(f"{entity.capitalize()} deleted", record_id=record_id)
        return existing
