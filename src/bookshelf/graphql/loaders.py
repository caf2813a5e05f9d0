from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    from ..models import AuthorRecord
    from ..services.library import LibraryService


class Loaders:
    """Request-scoped loaders for nested fields.

    ``Book.author`` goes through ``author_loader`` so a list of books
    sharing an author fetches that author once per request.
    """

    def __init__(self, service: LibraryService):
        self.author_loader: DataLoader[str, AuthorRecord | None] = DataLoader(
            load_fn=service.get_authors
        )
