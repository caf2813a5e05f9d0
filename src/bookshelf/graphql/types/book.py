"""
Book GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ...models import Gender as GenderValue

if TYPE_CHECKING:
    from .author import Author

Gender = strawberry.enum(GenderValue, name="Gender", description="Literary genre of a book.")


@strawberry.type
class Book:
    """Book type for GraphQL API."""

    id: strawberry.ID
    title: str
    description: str | None
    isbn: str | None
    publisher: str | None
    gender: Gender | None
    year: int | None
    author_id: strawberry.Private[str | None]

    @strawberry.field
    async def author(
        self, info: strawberry.Info
    ) -> Annotated["Author", strawberry.lazy(".author")] | None:
        """Get the author of this book."""
        from ..resolvers.book import resolve_book_author

        return await resolve_book_author(self, info)
