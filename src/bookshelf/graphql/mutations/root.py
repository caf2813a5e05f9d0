"""
Root GraphQL mutation definitions

Update mutations default their optional arguments to ``UNSET`` so that an
omitted argument is told apart from one explicitly sent as null, 0 or "".
"""

from typing import Any

import strawberry

from ..types.author import Author
from ..types.book import Book, Gender


def provided(**arguments: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually sent."""
    return {key: value for key, value in arguments.items() if value is not strawberry.UNSET}


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Author mutations
    @strawberry.mutation(name="addAuthor")
    async def add_author(
        self, info: strawberry.Info, name: str, nationality: str | None = None
    ) -> Author:
        """Create a new author with a unique name."""
        from ..resolvers.author import add_author

        return await add_author(info, name, nationality)

    @strawberry.mutation(name="updateAuthor")
    async def update_author(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        nationality: str | None = strawberry.UNSET,
    ) -> Author:
        """Update only the given fields of an author."""
        from ..resolvers.author import update_author

        return await update_author(info, str(id), provided(name=name, nationality=nationality))

    @strawberry.mutation(name="deleteAuthor")
    async def delete_author(self, info: strawberry.Info, id: strawberry.ID) -> Author | None:
        """Delete an author."""
        from ..resolvers.author import delete_author

        return await delete_author(info, str(id))

    # Book mutations
    @strawberry.mutation(name="addBook")
    async def add_book(
        self,
        info: strawberry.Info,
        title: str,
        publisher: str,
        gender: Gender,
        description: str | None = None,
        isbn: str | None = None,
        year: int | None = None,
        author_id: strawberry.ID | None = None,
        author_name: str | None = None,
    ) -> Book:
        """Create a new book with a unique title, referencing an existing author.

        The author is given either by ``authorId`` or by exact ``authorName``.
        """
        from ..resolvers.book import add_book

        fields = {
            "title": title,
            "description": description,
            "isbn": isbn,
            "publisher": publisher,
            "gender": gender,
            "year": year,
            "author_id": str(author_id) if author_id is not None else None,
        }
        return await add_book(info, fields, author_name=author_name)

    @strawberry.mutation(name="updateBook")
    async def update_book(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        title: str | None = strawberry.UNSET,
        description: str | None = strawberry.UNSET,
        isbn: str | None = strawberry.UNSET,
        publisher: str | None = strawberry.UNSET,
        gender: Gender | None = strawberry.UNSET,
        year: int | None = strawberry.UNSET,
        author_id: strawberry.ID | None = strawberry.UNSET,
    ) -> Book:
        """Update only the given fields of a book."""
        from ..resolvers.book import update_book

        fields = provided(
            title=title,
            description=description,
            isbn=isbn,
            publisher=publisher,
            gender=gender,
            year=year,
            author_id=author_id,
        )
        return await update_book(info, str(id), fields)

    @strawberry.mutation(name="deleteBook")
    async def delete_book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Delete a book."""
        from ..resolvers.book import delete_book

        return await delete_book(info, str(id))
