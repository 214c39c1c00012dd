"""CLI commands for browsing the catalog."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, TypeVar

import click

from storefront.application.catalog_store import CatalogStore
from storefront.domain.exceptions import DomainException
from storefront.domain.model.filters import FilterCriteria, SortField, SortOrder
from storefront.domain.model.product import Product
from storefront.infrastructure import bootstrap

T = TypeVar("T")


def run_with_catalog(
    settings: bootstrap.Settings,
    action: Callable[[CatalogStore], Awaitable[T]],
) -> T:
    """Run *action* against a catalog store whose HTTP client is closed
    afterwards; domain errors become click errors."""

    async def _main() -> T:
        async with bootstrap.http_client(settings) as client:
            return await action(bootstrap.catalog_store(client))

    try:
        return asyncio.run(_main())
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _to_decimal(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _display_products(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<5} {'Title':<40} {'Category':<18} {'Price':>10} {'Rating':>7}")
    click.echo("-" * 84)
    for p in products:
        title = p.title if len(p.title) <= 40 else p.title[:37] + "..."
        rating = f"{p.rating.rate:.1f}" if p.rating is not None else "-"
        click.echo(
            f"{p.id:<5} {title:<40} {p.category:<18} {str(p.price):>10} {rating:>7}"
        )
    click.echo(f"\n{len(products)} product(s)")


@click.command("list")
@click.option("--search", default=None, help="Match title or description.")
@click.option("--category", default=None, help="Only products in this category.")
@click.option("--min-price", type=float, default=None, help="Inclusive lower price bound.")
@click.option("--max-price", type=float, default=None, help="Inclusive upper price bound.")
@click.option("--limit", type=int, default=None, help="Cap the number of products fetched.")
@click.option(
    "--sort-by",
    type=click.Choice([f.value for f in SortField]),
    default=None,
    help="Sort field.",
)
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder]),
    default=SortOrder.ASC.value,
    show_default=True,
    help="Sort direction.",
)
@click.pass_obj
def product_list(
    settings: bootstrap.Settings,
    search: str | None,
    category: str | None,
    min_price: float | None,
    max_price: float | None,
    limit: int | None,
    sort_by: str | None,
    order: str,
) -> None:
    """List catalog products, filtered and sorted."""
    try:
        criteria = FilterCriteria(
            search_term=search.strip() if search else None,
            category=category or None,
            min_price=_to_decimal(min_price),
            max_price=_to_decimal(max_price),
            limit=limit,
            sort_by=SortField(sort_by) if sort_by else None,
            sort_order=SortOrder(order),
        )
    except DomainException as exc:
        raise click.BadParameter(str(exc))

    products = run_with_catalog(
        settings, lambda catalog: bootstrap.query_composer(catalog).resolve(criteria)
    )
    _display_products(products)


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_show(settings: bootstrap.Settings, product_id: int) -> None:
    """Show details of a single product."""
    product = run_with_catalog(settings, lambda catalog: catalog.fetch_by_id(product_id))

    click.echo(f"Product #{product.id}  {product.title}")
    click.echo(f"Category: {product.category}")
    click.echo(f"Price:    {product.price}")
    if product.rating is not None:
        click.echo(f"Rating:   {product.rating.rate:.1f} ({product.rating.count} reviews)")
    click.echo()
    click.echo(product.description)


@click.command("categories")
@click.pass_obj
def product_categories(settings: bootstrap.Settings) -> None:
    """List catalog categories."""
    categories = run_with_catalog(settings, lambda catalog: catalog.fetch_categories())

    if not categories:
        click.echo("No categories found.")
        return
    for name in categories:
        click.echo(name)
