from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...logging import get_logger
from ...models import AuthorPatch, AuthorRecord, NewAuthor
from ..context import get_service
from ..errors import graphql_errors

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)


def author_from_record(record: AuthorRecord) -> Author:
    """Convert a domain author record to the GraphQL type."""
    from ..types.author import Author as AuthorType

    return AuthorType(
        id=strawberry.ID(record.id),
        name=record.name,
        nationality=record.nationality,
    )


# Query resolvers
async def resolve_all_authors(info: strawberry.Info) -> list[Author]:
    service = get_service(info)
    with graphql_errors():
        records = await service.list_authors()
    return [author_from_record(r) for r in records]


async def resolve_author_by_id(info: strawberry.Info, id: str) -> Author | None:
    service = get_service(info)
    with graphql_errors():
        record = await service.get_author(id)
    if record is None:
        logger.info("Author not found", author_id=id)
        return None
    return author_from_record(record)


# Field resolvers
async def resolve_author_books(author: Author, info: strawberry.Info) -> list[Book]:
    """Books whose author reference points at this author (one lookup per author)."""
    from .book import book_from_record

    service = get_service(info)
    with graphql_errors():
        records = await service.list_books_by_author(str(author.id))
    return [book_from_record(r) for r in records]


# Mutation resolvers
async def add_author(info: strawberry.Info, name: str, nationality: str | None) -> Author:
    service = get_service(info)
    with graphql_errors():
        record = await service.add_author(NewAuthor(name=name, nationality=nationality))
    return author_from_record(record)


async def update_author(info: strawberry.Info, id: str, fields: dict[str, Any]) -> Author:
    """Apply a partial update; ``fields`` holds only the arguments the caller sent."""
    service = get_service(info)
    with graphql_errors():
        record = await service.update_author(id, AuthorPatch(**fields))
    return author_from_record(record)


async def delete_author(info: strawberry.Info, id: str) -> Author | None:
    service = get_service(info)
    with graphql_errors():
        record = await service.delete_author(id)
    return author_from_record(record) if record else None
