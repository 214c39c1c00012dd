"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.checkout import PlaceOrderHandler
from storefront.application.dto import CartDTO, DeliveryDetails, to_cart_dto
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.product_commands import run_with_catalog


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<5} {'Product':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*63}")
    for line in dto.lines:
        title = line.title if len(line.title) <= 30 else line.title[:27] + "..."
        click.echo(
            f"  {line.product_id:<5} {title:<30} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Subtotal':<41} {dto.subtotal:>21}")
    click.echo(f"  {'Shipping':<41} {dto.shipping:>21}")
    click.echo(f"  {'Total (' + str(dto.item_count) + ' items)':<41} {dto.total:>21}")


@click.command("add")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.pass_obj
def cart_add(settings: bootstrap.Settings, product_id: int, quantity: int) -> None:
    """Add a catalog product to the cart."""
    product = run_with_catalog(settings, lambda catalog: catalog.fetch_by_id(product_id))
    cart = bootstrap.cart_store(settings)

    try:
        cart.add(product, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{product.title} added to cart (now {cart.quantity_of(product_id)} in cart).")


@click.command("show")
@click.pass_obj
def cart_show(settings: bootstrap.Settings) -> None:
    """Show the cart contents and totals."""
    cart = bootstrap.cart_store(settings)
    _display_cart(to_cart_dto(cart.items(), cart.summary()))


@click.command("set")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
@click.pass_obj
def cart_set(settings: bootstrap.Settings, product_id: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    cart = bootstrap.cart_store(settings)
    if not cart.contains(product_id):
        raise click.ClickException(f"Product #{product_id} is not in the cart")

    cart.set_quantity(product_id, quantity)
    if cart.contains(product_id):
        click.echo(f"Product #{product_id} quantity set to {quantity}.")
    else:
        click.echo(f"Product #{product_id} removed from cart.")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_remove(settings: bootstrap.Settings, product_id: int) -> None:
    """Remove a line from the cart."""
    cart = bootstrap.cart_store(settings)
    if not cart.contains(product_id):
        raise click.ClickException(f"Product #{product_id} is not in the cart")

    cart.remove(product_id)
    click.echo(f"Product #{product_id} removed from cart.")


@click.command("clear")
@click.pass_obj
def cart_clear(settings: bootstrap.Settings) -> None:
    """Empty the cart."""
    bootstrap.cart_store(settings).clear()
    click.echo("Cart cleared.")


@click.command("checkout")
@click.option("--name", "full_name", required=True, help="Recipient full name.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--phone", required=True, help="Contact phone number.")
@click.pass_obj
def cart_checkout(settings: bootstrap.Settings, full_name: str, address: str, phone: str) -> None:
    """Place an order for everything in the cart."""
    handler = PlaceOrderHandler(bootstrap.cart_store(settings))

    try:
        confirmation = handler.handle(
            DeliveryDetails(full_name=full_name, address=address, phone=phone)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order confirmed for {confirmation.customer_name}!")
    click.echo(f"Delivering to: {confirmation.address}")
    for line in confirmation.lines:
        click.echo(f"  {line.quantity} x {line.title}  {line.line_total}")
    click.echo(f"Total: {confirmation.total} ({confirmation.item_count} items)")
