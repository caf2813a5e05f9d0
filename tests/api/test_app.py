"""
End-to-end tests through the FastAPI application
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from bookshelf.api.app import create_app
from bookshelf.config import Settings
from bookshelf.store import create_memory_store, create_rest_store

API_URL = "http://books-api.test"

ADD_BOOK = """
    mutation AddBook {
        addBook(title: "X", publisher: "P", gender: FANTASY, authorName: "A") { id title }
    }
"""


@pytest.fixture
def client(memory_store):
    app = create_app(Settings(debug=False), store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.mark.integration
def test_health_reports_store_backend(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "0.1.0", "store_backend": "memory"}


@pytest.mark.integration
def test_graphql_query_over_http(client):
    response = client.post("/graphql", json={"query": "{ getAllAuthors { name } }"})

    assert response.status_code == 200
    names = [a["name"] for a in response.json()["data"]["getAllAuthors"]]
    assert names == ["Ursula K. Le Guin", "Octavia E. Butler", "Italo Calvino"]


@pytest.mark.integration
def test_duplicate_add_book_over_http(client):
    client.post("/graphql", json={"query": 'mutation { addAuthor(name: "A") { id } }'})

    first = client.post("/graphql", json={"query": ADD_BOOK}).json()
    second = client.post("/graphql", json={"query": ADD_BOOK}).json()

    assert "errors" not in first
    assert first["data"]["addBook"]["title"] == "X"
    assert second["errors"][0]["extensions"]["code"] == "BAD_USER_INPUT"


@pytest.mark.integration
def test_request_id_header_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.integration
def test_request_id_is_generated_when_absent(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


@pytest.mark.integration
def test_memory_app_uses_lenient_deletes(client):
    response = client.post("/graphql", json={"query": 'mutation { deleteBook(id: "nope") { id } }'})

    body = response.json()
    assert body["data"] == {"deleteBook": None}
    assert "errors" not in body


@pytest.mark.integration
def test_proxy_app_uses_strict_deletes(fake_api):
    store = create_rest_store(API_URL, transport=httpx.MockTransport(fake_api.handle))
    app = create_app(Settings(debug=False, api_url=API_URL), store=store)

    with TestClient(app) as client:
        response = client.post(
            "/graphql", json={"query": 'mutation { deleteBook(id: "nope") { id } }'}
        )

    body = response.json()
    assert body["data"] == {"deleteBook": None}
    assert body["errors"][0]["extensions"]["code"] == "BAD_USER_INPUT"
    assert store.client.is_closed


@pytest.mark.integration
def test_strict_delete_setting_overrides_backend_default():
    app = create_app(Settings(debug=False, strict_delete=True), store=create_memory_store())

    with TestClient(app) as client:
        response = client.post(
            "/graphql", json={"query": 'mutation { deleteAuthor(id: "nope") { id } }'}
        )

    assert response.json()["errors"][0]["extensions"]["code"] == "BAD_USER_INPUT"
