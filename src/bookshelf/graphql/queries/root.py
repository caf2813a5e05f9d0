"""
Root GraphQL query definitions
"""

import strawberry

from ..types.author import Author
from ..types.book import Book


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="getAllAuthors")
    async def get_all_authors(self, info: strawberry.Info) -> list[Author]:
        """Get every author."""
        from ..resolvers.author import resolve_all_authors

        return await resolve_all_authors(info)

    @strawberry.field(name="getAuthor")
    async def get_author(self, info: strawberry.Info, id: strawberry.ID) -> Author | None:
        """Get an author by ID."""
        from ..resolvers.author import resolve_author_by_id

        return await resolve_author_by_id(info, str(id))

    @strawberry.field(name="getAllBooks")
    async def get_all_books(self, info: strawberry.Info) -> list[Book]:
        """Get every book."""
        from ..resolvers.book import resolve_all_books

        return await resolve_all_books(info)

    @strawberry.field(name="getBook")
    async def get_book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Get a book by ID."""
        from ..resolvers.book import resolve_book_by_id

        return await resolve_book_by_id(info, str(id))

    @strawberry.field(name="getAllBooksByAuthorName")
    async def get_all_books_by_author_name(
        self, info: strawberry.Info, author_name: str
    ) -> list[Book]:
        """Get the books of the author with exactly this name."""
        from ..resolvers.book import resolve_books_by_author_name

        return await resolve_books_by_author_name(info, author_name)
