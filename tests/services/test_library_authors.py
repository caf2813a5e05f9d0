"""
Unit tests for the author workflow of the library service
"""

import pytest

from bookshelf.errors import NotFoundError, UserInputError
from bookshelf.models import AuthorPatch, NewAuthor


class TestAuthors:
    @pytest.mark.asyncio
    async def test_add_author(self, library):
        author = await library.add_author(NewAuthor(name="Anne Carson", nationality="Canadian"))

        assert author.name == "Anne Carson"
        assert await library.find_author_by_name("Anne Carson") == author

    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected(self, library, memory_store):
        before = await memory_store.authors.list()

        with pytest.raises(UserInputError) as exc_info:
            await library.add_author(NewAuthor(name="Italo Calvino"))

        assert exc_info.value.field == "name"
        assert await memory_store.authors.list() == before

    @pytest.mark.asyncio
    async def test_blank_name_is_rejected(self, library):
        with pytest.raises(UserInputError):
            await library.add_author(NewAuthor(name=""))

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, library):
        updated = await library.update_author("a3", AuthorPatch(nationality="Cuban-Italian"))
        assert updated.name == "Italo Calvino"
        assert updated.nationality == "Cuban-Italian"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name_is_rejected(self, library):
        with pytest.raises(UserInputError) as exc_info:
            await library.update_author("a3", AuthorPatch(name="Octavia E. Butler"))
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_rename_to_own_name_is_allowed(self, library):
        updated = await library.update_author("a3", AuthorPatch(name="Italo Calvino"))
        assert updated.id == "a3"

    @pytest.mark.asyncio
    async def test_null_name_is_rejected(self, library):
        with pytest.raises(UserInputError) as exc_info:
            await library.update_author("a3", AuthorPatch(name=None))
        assert exc_info.value.reason == "null"

    @pytest.mark.asyncio
    async def test_update_unknown_author_is_not_found(self, library):
        with pytest.raises(NotFoundError):
            await library.update_author("missing", AuthorPatch(name="x"))

    @pytest.mark.asyncio
    async def test_lenient_delete_unknown_returns_none(self, library):
        assert await library.delete_author("missing") is None

    @pytest.mark.asyncio
    async def test_strict_delete_unknown_is_not_found(self, strict_library):
        with pytest.raises(NotFoundError) as exc_info:
            await strict_library.delete_author("missing")
        assert exc_info.value.entity == "author"

    @pytest.mark.asyncio
    async def test_delete_author(self, library):
        removed = await library.delete_author("a3")
        assert removed.name == "Italo Calvino"
        assert await library.get_author("a3") is None

    @pytest.mark.asyncio
    async def test_delete_only_touches_its_own_collection(self, strict_library, memory_store):
        book_ids = [b["id"] for b in await memory_store.books.list()]

        removed = await strict_library.delete_author("a2")

        assert removed.id == "a2"
        assert [b["id"] for b in await memory_store.books.list()] == book_ids
        with pytest.raises(NotFoundError) as exc_info:
            await strict_library.delete_book("a3")
        assert exc_info.value.entity == "book"
        assert await strict_library.get_author("a3") is not None
