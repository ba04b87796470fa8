"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ordercore.domain.model.order import Order
from ordercore.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CreateOrderRequest:
    """Input: a validated checkout request."""

    customer_id: str
    customer_name: str
    customer_email: str
    customer_address: str
    items: list[OrderItemSpec] = field(default_factory=list)


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00 USD"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_id: str
    customer_name: str
    status: str
    items: list[OrderItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: a placed order with its pricing breakdown."""

    order: OrderDTO
    discount: str
    shipping_cost: str
    free_shipping: bool


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str
    stock: int


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        customer_id=order.customer.id,
        customer_name=order.customer.name,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product.name,
                quantity=item.quantity,
                unit_price=str(item.price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=str(product.price),
        stock=product.stock,
    )
