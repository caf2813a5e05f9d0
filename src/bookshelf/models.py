"""
Domain records for books and authors.

Records are validated from the plain dicts the backing stores exchange.
Patch models rely on pydantic's ``model_fields_set`` to tell a field that
was never supplied apart from one supplied as ``None``, ``0`` or ``""``.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Gender(str, Enum):
    """Literary genre of a book (exposed as ``gender`` on the wire)."""

    DYSTOPIAN = "DYSTOPIAN"
    FICTION = "FICTION"
    ROMANCE = "ROMANCE"
    HORROR = "HORROR"
    FANTASY = "FANTASY"
    MYSTERY = "MYSTERY"
    ADVENTURE = "ADVENTURE"
    SATIRE = "SATIRE"
    WAR = "WAR"
    TRAGEDY = "TRAGEDY"


def _coerce_id(value: Any) -> Any:
    # REST backends commonly hand out integer ids
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class AuthorRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    nationality: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _coerce_id(value)


class BookRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str | None = None
    isbn: str | None = None
    publisher: str | None = None
    gender: Gender | None = None
    year: int | None = None
    author_id: str | None = None

    @field_validator("id", "author_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: Any) -> Any:
        return _coerce_id(value)


class NewAuthor(BaseModel):
    name: str
    nationality: str | None = None


class AuthorPatch(BaseModel):
    """Partial author update; only fields in ``model_fields_set`` are applied."""

    name: str | None = None
    nationality: str | None = None


class NewBook(BaseModel):
    title: str
    description: str | None = None
    isbn: str | None = None
    publisher: str
    gender: Gender
    year: int | None = None
    # Optional here: add_book may resolve the author by name instead
    author_id: str | None = None


class BookPatch(BaseModel):
    """Partial book update; only fields in ``model_fields_set`` are applied."""

    title: str | None = None
    description: str | None = None
    isbn: str | None = None
    publisher: str | None = None
    gender: Gender | None = None
    year: int | None = None
    author_id: str | None = None


def merge_record(existing: BaseModel, patch: BaseModel) -> dict[str, Any]:
    """Overlay the explicitly supplied patch fields onto an existing record.

    Returns the merged payload without the record id, ready for a store update.
    """
    payload = existing.model_dump(mode="json", exclude={"id"})
    payload.update(patch.model_dump(mode="json", exclude_unset=True))
    return payload
