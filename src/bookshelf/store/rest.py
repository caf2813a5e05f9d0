"""Backing store proxying an upstream REST API (json-server style resources)."""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from ..logging import get_logger
from .base import (
    BackingStore,
    Collection,
    Record,
    RecordNotFoundError,
    StoreConnectionError,
    StoreError,
)

logger = get_logger(__name__)


class RestCollection(Collection):
    """One REST resource: ``/<name>`` and ``/<name>/{id}``."""

    def __init__(self, name: str, client: httpx.AsyncClient):
        self.name = name
        self._client = client

    def _item_path(self, record_id: str) -> str:
        return f"/{self.name}/{quote(str(record_id), safe='')}"

    @staticmethod
    def _is_blank(record_id: str) -> bool:
        # A blank id would address the collection endpoint instead of an item
        return not str(record_id).strip()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.error(
                "Books API unreachable",
                method=method,
                path=path,
                base_url=str(self._client.base_url),
                error=str(e),
            )
            raise StoreConnectionError(f"Cannot connect to {self._client.base_url}: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Books API request failed", method=method, path=path, error=str(e))
            raise StoreError(f"{method} {path} failed: {e}") from e

    def _check(self, response: httpx.Response, record_id: str | None = None) -> None:
        if response.status_code == 404 and record_id is not None:
            raise RecordNotFoundError(self.name, record_id)
        if response.is_error:
            logger.warning(
                "Books API returned an error",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
            )
            raise StoreError(f"Request failed with status code {response.status_code}")

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON from {response.request.url}") from e

    async def list(self, **filters: Any) -> list[Record]:
        params = {key: str(value) for key, value in filters.items() if value is not None}
        response = await self._request("GET", f"/{self.name}", params=params)
        self._check(response)
        body = self._json(response)
        if not isinstance(body, list):
            raise StoreError(f"Expected a list from GET /{self.name}")
        return body

    async def get(self, record_id: str) -> Record | None:
        if self._is_blank(record_id):
            return None
        response = await self._request("GET", self._item_path(record_id))
        if response.status_code == 404:
            return None
        self._check(response)
        body = self._json(response)
        if not isinstance(body, dict):
            logger.warning("Books API returned a non-object item", path=self._item_path(record_id))
            return None
        return body

    async def create(self, data: Record) -> Record:
        response = await self._request("POST", f"/{self.name}", json=data)
        self._check(response)
        return self._json(response)

    async def update(self, record_id: str, data: Record) -> Record:
        if self._is_blank(record_id):
            raise RecordNotFoundError(self.name, record_id)
        response = await self._request("PUT", self._item_path(record_id), json=data)
        self._check(response, record_id)
        return self._json(response)

    async def delete(self, record_id: str) -> Record | None:
        if self._is_blank(record_id):
            raise RecordNotFoundError(self.name, record_id)
        response = await self._request("DELETE", self._item_path(record_id))
        self._check(response, record_id)
        if not response.content:
            return None
        body = self._json(response)
        # json-server answers {} on older releases and the removed record on newer ones
        if isinstance(body, dict) and body.get("id") is not None:
            return body
        return None


@dataclass
class RestBackingStore(BackingStore):
    client: httpx.AsyncClient = field(default=None)  # type: ignore[assignment]

    async def close(self) -> None:
        await self.client.aclose()


def create_rest_store(
    api_url: str, transport: httpx.AsyncBaseTransport | None = None
) -> RestBackingStore:
    """Build a backing store talking to the REST API at ``api_url``.

    Outbound calls use httpx's default timeouts; nothing is retried.
    """
    client = httpx.AsyncClient(base_url=api_url, transport=transport)
    return RestBackingStore(
        books=RestCollection("books", client),
        authors=RestCollection("authors", client),
        backend="rest",
        client=client,
    )
