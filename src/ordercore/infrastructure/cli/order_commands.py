"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from ordercore.application.cancel_order import CancelOrderHandler
from ordercore.application.checkout import CheckoutHandler
from ordercore.application.confirm_order import ConfirmOrderHandler
from ordercore.application.create_order import CreateOrderHandler
from ordercore.application.deliver_order import DeliverOrderHandler
from ordercore.application.dto import CreateOrderRequest, OrderDTO, OrderItemSpec
from ordercore.application.ship_order import ShipOrderHandler
from ordercore.application.show_order import ListCustomerOrdersHandler, ShowOrderHandler
from ordercore.config import get_settings
from ordercore.domain.exceptions import DomainException
from ordercore.domain.model.customer import Customer
from ordercore.infrastructure.bootstrap import (
    fulfillment,
    notifier,
    order_store,
    product_catalog,
)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' into an OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        if qty < 1:
            raise click.BadParameter(f"Quantity for product '{product_id}' must be at least 1.")
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _customer_options(func):
    func = click.option("--address", required=True, help="Delivery address.")(func)
    func = click.option("--email", required=True, help="Customer email.")(func)
    func = click.option("--name", required=True, help="Customer name.")(func)
    func = click.option("--customer-id", required=True, help="Customer ID.")(func)
    return func


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} ({dto.customer_id})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<27} {dto.total:>28}")


@click.command("create")
@_customer_options
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(customer_id: str, name: str, email: str, address: str, items: str) -> None:
    """Create a pending order."""
    specs = _parse_items(items)
    settings = get_settings()
    handler = CreateOrderHandler(
        order_store=order_store(settings),
        product_catalog=product_catalog(settings),
    )

    try:
        customer = Customer(id=customer_id, name=name, email=email, address=address)
        dto = handler.handle(customer=customer, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("checkout")
@_customer_options
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_checkout(customer_id: str, name: str, email: str, address: str, items: str) -> None:
    """Place an order: price it, schedule delivery and notify the customer."""
    request = CreateOrderRequest(
        customer_id=customer_id,
        customer_name=name,
        customer_email=email,
        customer_address=address,
        items=_parse_items(items),
    )
    settings = get_settings()
    handler = CheckoutHandler(
        order_store=order_store(settings),
        product_catalog=product_catalog(settings),
        notifier=notifier(),
        fulfillment=fulfillment(settings),
    )

    try:
        result = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(result.order)
    click.echo(f"  {'Discount':<27} {result.discount:>28}")
    shipping = "free" if result.free_shipping else result.shipping_cost
    click.echo(f"  {'Shipping':<27} {shipping:>28}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_store=order_store())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer-id", required=True, help="Customer whose orders to list.")
def order_list(customer_id: str) -> None:
    """List the orders of a customer."""
    try:
        orders = ListCustomerOrdersHandler(order_store=order_store()).handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo(f"No orders found for customer {customer_id}.")
        return

    click.echo(f"{'Order':<34} {'Status':<10} {'Total':>14}")
    click.echo("-" * 60)
    for dto in orders:
        click.echo(f"{dto.id:<34} {dto.status:<10} {dto.total:>14}")


@click.command("confirm")
@click.option("--id", "order_id", required=True, help="Order ID to confirm.")
def order_confirm(order_id: str) -> None:
    """Confirm a pending order."""
    try:
        ConfirmOrderHandler(order_store=order_store()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} confirmed.")


@click.command("ship")
@click.option("--id", "order_id", required=True, help="Order ID to ship.")
def order_ship(order_id: str) -> None:
    """Mark a confirmed order as shipped."""
    try:
        ShipOrderHandler(order_store=order_store()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} shipped.")


@click.command("deliver")
@click.option("--id", "order_id", required=True, help="Order ID to deliver.")
def order_deliver(order_id: str) -> None:
    """Mark a shipped order as delivered."""
    try:
        DeliverOrderHandler(order_store=order_store()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} delivered.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
def order_cancel(order_id: str) -> None:
    """Cancel an order and return its items to stock."""
    settings = get_settings()
    handler = CancelOrderHandler(
        order_store=order_store(settings),
        product_catalog=product_catalog(settings),
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled; stock restored.")
