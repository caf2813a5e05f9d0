from .library import LibraryService

__all__ = ["LibraryService"]
