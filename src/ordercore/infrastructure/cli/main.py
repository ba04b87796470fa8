import click

from ordercore.config import get_settings
from ordercore.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_confirm,
    order_create,
    order_deliver,
    order_list,
    order_ship,
    order_show,
)
from ordercore.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
)
from ordercore.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level.")
def cli(log_level: str | None) -> None:
    """ordercore: order lifecycle management"""
    configure_logging(settings=get_settings(), level=log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_ship)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
