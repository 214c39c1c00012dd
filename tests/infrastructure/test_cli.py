"""End-to-end CLI tests with click's CliRunner.

The HTTP client factory is swapped for one backed by httpx.MockTransport
and the data directory points at tmp_path.
"""

import httpx
import pytest
from click.testing import CliRunner

from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.main import cli

CATALOG = [
    {"id": 1, "title": "Cheap mug", "price": 5, "category": "a", "description": "", "image": ""},
    {"id": 2, "title": "Lamp", "price": 15, "category": "b", "description": "", "image": ""},
    {"id": 3, "title": "Fancy mug", "price": 25, "category": "a", "description": "",
     "image": "", "rating": {"rate": 4.5, "count": 3}},
]


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/products":
        return httpx.Response(200, json=CATALOG)
    if path == "/products/categories":
        return httpx.Response(200, json=["a", "b"])
    if path.startswith("/products/category/"):
        name = path.rsplit("/", 1)[1]
        return httpx.Response(200, json=[p for p in CATALOG if p["category"] == name])
    for product in CATALOG:
        if path == f"/products/{product['id']}":
            return httpx.Response(200, json=product)
    return httpx.Response(404)


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setattr(
        bootstrap,
        "http_client",
        lambda settings: httpx.AsyncClient(
            base_url="https://catalog.test", transport=httpx.MockTransport(_handler)
        ),
    )
    return CliRunner()


class TestProductCommands:

    def test_list_filters_and_sorts(self, runner):
        result = runner.invoke(
            cli, ["products", "list", "--category", "a", "--sort-by", "price", "--order", "desc"]
        )
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[2].startswith("3 ")
        assert lines[3].startswith("1 ")
        assert "2 product(s)" in result.output

    def test_list_search(self, runner):
        result = runner.invoke(cli, ["products", "list", "--search", "MUG", "--max-price", "10"])
        assert result.exit_code == 0, result.output
        assert "Cheap mug" in result.output
        assert "Fancy mug" not in result.output

    def test_categories(self, runner):
        result = runner.invoke(cli, ["products", "categories"])
        assert result.output.splitlines() == ["a", "b"]

    def test_show_missing_product(self, runner):
        result = runner.invoke(cli, ["products", "show", "--id", "99"])
        assert result.exit_code != 0
        assert "Product not found." in result.output


class TestCartCommands:

    def test_add_show_and_checkout(self, runner):
        assert runner.invoke(cli, ["cart", "add", "--id", "3", "--quantity", "2"]).exit_code == 0
        assert runner.invoke(cli, ["cart", "add", "--id", "1"]).exit_code == 0

        shown = runner.invoke(cli, ["cart", "show"])
        assert "Fancy mug" in shown.output
        assert "$55.00" in shown.output

        placed = runner.invoke(
            cli,
            ["cart", "checkout", "--name", "Ada", "--address", "12 Analytical Row",
             "--phone", "5551234"],
        )
        assert placed.exit_code == 0, placed.output
        assert "Total: $55.00 (3 items)" in placed.output

        assert "Your cart is empty." in runner.invoke(cli, ["cart", "show"]).output

    def test_set_zero_removes(self, runner):
        runner.invoke(cli, ["cart", "add", "--id", "2"])
        result = runner.invoke(cli, ["cart", "set", "--id", "2", "--quantity", "0"])
        assert "removed from cart" in result.output

    def test_remove_unknown_line_fails(self, runner):
        result = runner.invoke(cli, ["cart", "remove", "--id", "2"])
        assert result.exit_code != 0
        assert "not in the cart" in result.output
