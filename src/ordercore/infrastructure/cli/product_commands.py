"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ordercore.application.add_product import AddProductHandler, ListProductsHandler
from ordercore.application.restock_product import RestockProductHandler
from ordercore.config import get_settings
from ordercore.domain.exceptions import DomainException
from ordercore.infrastructure.bootstrap import product_catalog


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock.")
@click.option("--description", default="", help="Short description.")
@click.option("--currency", default=None, help="Currency code (defaults to the configured one).")
def product_add(
    name: str, price: str, stock: int, description: str, currency: str | None
) -> None:
    """Add a new product to the catalog."""
    settings = get_settings()
    handler = AddProductHandler(product_catalog=product_catalog(settings))

    try:
        dto = handler.handle(
            name=name,
            price=price,
            stock=stock,
            description=description,
            currency=(currency or settings.default_currency).upper(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price} ({dto.stock} in stock)")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_catalog=product_catalog()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>14} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.price:>14} {p.stock:>7}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(product_catalog=product_catalog())

    try:
        stock = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} now has {stock} in stock")
