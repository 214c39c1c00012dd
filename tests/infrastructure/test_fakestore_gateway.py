"""Tests for the httpx catalog gateway using httpx.MockTransport."""

import asyncio
from decimal import Decimal

import httpx
import pytest

from storefront.application.catalog_store import CatalogStore
from storefront.domain.exceptions import (
    ApiError,
    CatalogResponseError,
    CatalogTransportError,
    ErrorCode,
)
from storefront.infrastructure.http.fakestore_gateway import FakeStoreCatalogGateway

PRODUCTS = [
    {
        "id": 1,
        "title": "Fjallraven Backpack",
        "price": 109.95,
        "description": "Your perfect pack",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/1.jpg",
        "rating": {"rate": 3.9, "count": 120},
    },
    {
        "id": 5,
        "title": "Dragon Bracelet",
        "price": 695,
        "description": "Chain bracelet",
        "category": "jewelery",
        "image": "https://fakestoreapi.com/img/5.jpg",
    },
]


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/products":
        limit = request.url.params.get("limit")
        body = PRODUCTS[: int(limit)] if limit else PRODUCTS
        return httpx.Response(200, json=body)
    if path == "/products/categories":
        return httpx.Response(200, json=["jewelery", "men's clothing"])
    if path.startswith("/products/category/"):
        name = path.removeprefix("/products/category/")
        return httpx.Response(200, json=[p for p in PRODUCTS if p["category"] == name])
    if path == "/products/1":
        return httpx.Response(200, json=PRODUCTS[0])
    if path == "/products/77":
        return httpx.Response(200, content=b"")
    if path == "/products/500":
        return httpx.Response(500, json={"message": "boom"})
    if path == "/products/418":
        return httpx.Response(418, json={"message": "I'm a teapot"})
    return httpx.Response(404, text="Not Found")


def _run(call):
    async def scenario():
        async with httpx.AsyncClient(
            base_url="https://catalog.test", transport=httpx.MockTransport(_handler)
        ) as client:
            return await call(FakeStoreCatalogGateway(client))

    return asyncio.run(scenario())


class TestParsing:

    def test_list_products(self):
        products = _run(lambda g: g.list_products())
        assert [p.id for p in products] == [1, 5]
        assert products[0].price.amount == Decimal("109.95")
        assert products[0].rating.count == 120
        assert products[1].rating is None

    def test_limit_is_sent_as_query_param(self):
        products = _run(lambda g: g.list_products(1))
        assert [p.id for p in products] == [1]

    def test_categories(self):
        assert _run(lambda g: g.list_categories()) == ["jewelery", "men's clothing"]

    def test_category_name_is_url_encoded(self):
        products = _run(lambda g: g.list_by_category("men's clothing"))
        assert [p.id for p in products] == [1]

    def test_single_product(self):
        assert _run(lambda g: g.get_product(1)).title == "Fjallraven Backpack"


class TestErrors:

    def test_empty_body_for_single_product_is_404(self):
        with pytest.raises(CatalogResponseError) as info:
            _run(lambda g: g.get_product(77))
        assert info.value.status == 404

    def test_status_and_server_message_kept(self):
        with pytest.raises(CatalogResponseError) as info:
            _run(lambda g: g.get_product(418))
        assert info.value.status == 418
        assert info.value.server_message == "I'm a teapot"

    def test_connection_error_is_transport_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def scenario():
            async with httpx.AsyncClient(
                base_url="https://catalog.test", transport=httpx.MockTransport(refuse)
            ) as client:
                await FakeStoreCatalogGateway(client).list_products()

        with pytest.raises(CatalogTransportError, match="connection refused"):
            asyncio.run(scenario())


class TestThroughCatalogStore:

    def test_404_classified_as_not_found(self):
        with pytest.raises(ApiError) as info:
            _run(lambda g: CatalogStore(g).fetch_by_id(2))
        assert info.value.code is ErrorCode.NOT_FOUND
        assert info.value.message == "Product not found."

    def test_500_classified_as_server_error(self):
        with pytest.raises(ApiError) as info:
            _run(lambda g: CatalogStore(g).fetch_by_id(500))
        assert info.value.code is ErrorCode.SERVER_ERROR

    def test_other_status_uses_server_message(self):
        with pytest.raises(ApiError) as info:
            _run(lambda g: CatalogStore(g).fetch_by_id(418))
        assert info.value.code is ErrorCode.UNKNOWN_ERROR
        assert info.value.message == "I'm a teapot"
