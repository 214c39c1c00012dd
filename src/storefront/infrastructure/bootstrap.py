"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Components are built
explicitly and handed to whoever needs them: the catalog and cart stores
first, the query composer on top of the catalog store.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import httpx

from storefront.application.cart_store import CartStore
from storefront.application.catalog_store import CatalogStore
from storefront.application.query_composer import QueryComposer
from storefront.infrastructure.http.fakestore_gateway import FakeStoreCatalogGateway
from storefront.infrastructure.persistence.json_key_value_store import (
    JsonFileKeyValueStore,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_API_URL = "https://fakestoreapi.com"
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    data_dir: Path = _DEFAULT_DATA_DIR
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @property
    def storage_file(self) -> Path:
        return self.data_dir / "storage.json"


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Read settings from ``STOREFRONT_*`` environment variables."""
    env = os.environ if environ is None else environ
    timeout = env.get("STOREFRONT_HTTP_TIMEOUT")
    return Settings(
        api_url=env.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/"),
        data_dir=Path(env.get("STOREFRONT_DATA_DIR") or _DEFAULT_DATA_DIR),
        http_timeout=float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT,
    )


def http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.api_url, timeout=settings.http_timeout)


def catalog_store(client: httpx.AsyncClient) -> CatalogStore:
    return CatalogStore(FakeStoreCatalogGateway(client))


def query_composer(catalog: CatalogStore) -> QueryComposer:
    return QueryComposer(catalog)


def cart_store(settings: Settings) -> CartStore:
    return CartStore(JsonFileKeyValueStore(settings.storage_file))
