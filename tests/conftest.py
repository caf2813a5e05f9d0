"""
Shared pytest fixtures and configuration for all tests.
"""

import json
import os
from collections.abc import Generator
from typing import Any

import httpx
import pytest

from bookshelf.graphql.context import build_context
from bookshelf.graphql.schema import schema
from bookshelf.services.library import LibraryService
from bookshelf.store import create_memory_store, create_rest_store

API_URL = "http://books-api.test"

AUTHORS = [
    {"id": "a1", "name": "Ursula K. Le Guin", "nationality": "American"},
    {"id": "a2", "name": "Octavia E. Butler", "nationality": "American"},
    {"id": "a3", "name": "Italo Calvino", "nationality": "Italian"},
]

BOOKS = [
    {
        "id": "b1",
        "title": "A Wizard of Earthsea",
        "description": "A young mage learns the cost of power.",
        "isbn": "978-0547773742",
        "publisher": "Parnassus Press",
        "gender": "FANTASY",
        "year": 1968,
        "author_id": "a1",
    },
    {
        "id": "b2",
        "title": "The Dispossessed",
        "description": None,
        "isbn": "978-0061054884",
        "publisher": "Harper & Row",
        "gender": "FICTION",
        "year": 1974,
        "author_id": "a1",
    },
    {
        "id": "b3",
        "title": "Kindred",
        "description": "A writer is pulled back in time to antebellum Maryland.",
        "isbn": "978-0807083697",
        "publisher": "Doubleday",
        "gender": "FICTION",
        "year": 1979,
        "author_id": "a2",
    },
]


class FakeJsonServer:
    """Minimal json-server lookalike served through httpx.MockTransport.

    Hands out integer ids like json-server does and records every request.
    """

    def __init__(
        self,
        books: list[dict[str, Any]] | None = None,
        authors: list[dict[str, Any]] | None = None,
    ):
        self.data: dict[str, list[dict[str, Any]]] = {
            "books": [dict(b) for b in books or []],
            "authors": [dict(a) for a in authors or []],
        }
        self.next_id = 100
        self.requests: list[httpx.Request] = []
        self.delete_returns_record = True

    def _find(self, collection: str, record_id: str) -> dict[str, Any] | None:
        for record in self.data[collection]:
            if str(record["id"]) == record_id:
                return record
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = [p for p in request.url.path.split("/") if p]
        if not parts or parts[0] not in self.data:
            return httpx.Response(404, json={})
        collection = parts[0]

        if len(parts) == 1:
            if request.method == "GET":
                rows = self.data[collection]
                for key, value in request.url.params.multi_items():
                    if key.endswith("_ne"):
                        field = key[:-3]
                        rows = [r for r in rows if str(r.get(field)) != value]
                    else:
                        rows = [r for r in rows if str(r.get(key)) == value]
                return httpx.Response(200, json=rows)
            if request.method == "POST":
                body = json.loads(request.content)
                record = {**body, "id": self.next_id}
                self.next_id += 1
                self.data[collection].append(record)
                return httpx.Response(201, json=record)
            return httpx.Response(405)

        record = self._find(collection, parts[1])
        if record is None:
            return httpx.Response(404, json={})
        if request.method == "GET":
            return httpx.Response(200, json=record)
        if request.method == "PUT":
            body = json.loads(request.content)
            record.clear()
            record.update({**body, "id": int(parts[1]) if parts[1].isdigit() else parts[1]})
            return httpx.Response(200, json=record)
        if request.method == "DELETE":
            self.data[collection].remove(record)
            return httpx.Response(200, json=record if self.delete_returns_record else {})
        return httpx.Response(405)

    def calls(self, method: str | None = None) -> list[str]:
        """Method and path of every request seen, optionally for one method."""
        return [
            f"{r.method} {r.url.path}"
            for r in self.requests
            if method is None or r.method == method
        ]


@pytest.fixture
def memory_store():
    """In-memory store holding three authors and three books."""
    return create_memory_store(books=BOOKS, authors=AUTHORS)


@pytest.fixture
def library(memory_store) -> LibraryService:
    """Lenient library service over the memory store."""
    return LibraryService(memory_store, strict_delete=False)


@pytest.fixture
def strict_library(memory_store) -> LibraryService:
    """Strict-delete library service over the memory store."""
    return LibraryService(memory_store, strict_delete=True)


@pytest.fixture
def fake_api() -> FakeJsonServer:
    return FakeJsonServer(books=BOOKS, authors=AUTHORS)


@pytest.fixture
def rest_store(fake_api: FakeJsonServer):
    return create_rest_store(API_URL, transport=httpx.MockTransport(fake_api.handle))


@pytest.fixture
def rest_library(rest_store) -> LibraryService:
    return LibraryService.for_store(rest_store)


@pytest.fixture
def execute():
    """Run a GraphQL document against the schema with a given library service."""

    async def _execute(
        service: LibraryService, query: str, variables: dict[str, Any] | None = None
    ):
        return await schema.execute(
            query,
            variable_values=variables,
            context_value=build_context(None, service),
        )

    return _execute


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
