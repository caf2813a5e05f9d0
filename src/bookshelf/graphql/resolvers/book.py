from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...logging import get_logger
from ...models import BookPatch, BookRecord, NewBook
from ..context import get_loaders, get_service
from ..errors import graphql_errors
from .author import author_from_record

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)


def book_from_record(record: BookRecord) -> Book:
    """Convert a domain book record to the GraphQL type."""
    from ..types.book import Book as BookType

    return BookType(
        id=strawberry.ID(record.id),
        title=record.title,
        description=record.description,
        isbn=record.isbn,
        publisher=record.publisher,
        gender=record.gender,
        year=record.year,
        author_id=record.author_id,
    )


# Query resolvers
async def resolve_all_books(info: strawberry.Info) -> list[Book]:
    service = get_service(info)
    with graphql_errors():
        records = await service.list_books()
    return [book_from_record(r) for r in records]


async def resolve_book_by_id(info: strawberry.Info, id: str) -> Book | None:
    service = get_service(info)
    with graphql_errors():
        record = await service.get_book(id)
    if record is None:
        logger.info("Book not found", book_id=id)
        return None
    return book_from_record(record)


async def resolve_books_by_author_name(info: strawberry.Info, author_name: str) -> list[Book]:
    service = get_service(info)
    with graphql_errors():
        records = await service.list_books_by_author_name(author_name)
    return [book_from_record(r) for r in records]


# Field resolvers
async def resolve_book_author(book: Book, info: strawberry.Info) -> Author | None:
    """Resolve the author reference through the request's author loader."""
    if not book.author_id:
        return None

    loaders = get_loaders(info)
    with graphql_errors():
        record = await loaders.author_loader.load(book.author_id)
    if record is None:
        logger.warning(
            "Book references a missing author", book_id=str(book.id), author_id=book.author_id
        )
        return None
    return author_from_record(record)


# Mutation resolvers
async def add_book(
    info: strawberry.Info, fields: dict[str, Any], author_name: str | None = None
) -> Book:
    service = get_service(info)
    with graphql_errors():
        record = await service.add_book(NewBook(**fields), author_name=author_name)
    return book_from_record(record)


async def update_book(info: strawberry.Info, id: str, fields: dict[str, Any]) -> Book:
    """Apply a partial update; ``fields`` holds only the arguments the caller sent."""
    service = get_service(info)
    with graphql_errors():
        record = await service.update_book(id, BookPatch(**fields))
    return book_from_record(record)


async def delete_book(info: strawberry.Info, id: str) -> Book | None:
    service = get_service(info)
    with graphql_errors():
        record = await service.delete_book(id)
    return book_from_record(record) if record else None
