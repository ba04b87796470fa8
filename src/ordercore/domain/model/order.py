"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.  Stock is never adjusted
in place: mutations return stock events for the StockAllocationService
to apply to the products.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ordercore.domain.events import StockReleased, StockReserved
from ordercore.domain.exceptions import (
    CurrencyMismatch,
    IllegalTransition,
    InsufficientStock,
    InvalidQuantity,
)
from ordercore.domain.model.customer import Customer
from ordercore.domain.model.product import Product
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# Statuses from which an order can no longer be cancelled.
_FINAL_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


@dataclass
class OrderItem:
    """One order line.

    ``price`` is the unit price captured when the product was first
    added; later catalog price changes do not affect it.
    """

    product: Product
    quantity: int
    price: Money  # locked when the line is created

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str
    customer: Customer
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(customer: Customer, order_id: str | None = None) -> Order:
        """Start a new, empty PENDING order for ``customer``."""
        return Order(id=order_id or uuid.uuid4().hex, customer=customer)

    # --- Items ----------------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> StockReserved:
        """Add ``quantity`` units of ``product`` to the order.

        Lines for the same product are merged.  All checks run before the
        order is touched, so a failure leaves it unchanged.  The caller is
        responsible for applying the returned event to the product.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise InvalidQuantity(f"Quantity must be positive, got {quantity!r}")
        if product.stock < quantity:
            raise InsufficientStock(
                f"Insufficient stock for {product.name} "
                f"(need {quantity}, have {product.stock})"
            )
        if self.items and product.price.currency != self.currency:
            raise CurrencyMismatch(
                f"Cannot add {product.name} priced in {product.price.currency} "
                f"to an order in {self.currency}"
            )

        existing = self.item_for(product.id)
        if existing is not None:
            existing.quantity += quantity
        else:
            self.items.append(
                OrderItem(product=product, quantity=quantity, price=product.price)
            )
        return StockReserved(product_id=product.id, quantity=quantity)

    def withdraw_item(self, event: StockReserved) -> None:
        """Take back the units an ``add_item`` call reserved.

        Used when the stock change behind ``event`` could not be persisted.
        """
        item = self.item_for(event.product_id)
        if item is None or item.quantity < event.quantity:
            raise InvalidQuantity(
                f"Order {self.id} holds fewer than {event.quantity} units "
                f"of product {event.product_id}"
            )
        item.quantity -= event.quantity
        if item.quantity == 0:
            self.items.remove(item)

    def item_for(self, product_id: str) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    # --- State transitions ----------------------------------------------------

    def confirm(self) -> None:
        """Transition PENDING -> CONFIRMED."""
        self._advance(OrderStatus.PENDING, OrderStatus.CONFIRMED)

    def ship(self) -> None:
        """Transition CONFIRMED -> SHIPPED."""
        self._advance(OrderStatus.CONFIRMED, OrderStatus.SHIPPED)

    def deliver(self) -> None:
        """Transition SHIPPED -> DELIVERED."""
        self._advance(OrderStatus.SHIPPED, OrderStatus.DELIVERED)

    def release_stock(self) -> list[StockReleased]:
        """Stock events that cancelling this order would produce.

        Nothing is mutated; stock must be restored *before* ``cancel()``
        is called so a failed restoration leaves the status untouched.
        """
        self._assert_cancellable()
        return [
            StockReleased(product_id=item.product_id, quantity=item.quantity)
            for item in self.items
        ]

    def cancel(self) -> None:
        """Transition any non-final status -> CANCELLED."""
        self._assert_cancellable()
        self.status = OrderStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        if not self.items:
            return DEFAULT_CURRENCY
        return self.items[0].price.currency

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_cancellable(self) -> bool:
        return self.status not in _FINAL_STATUSES

    # --- Internal helpers -----------------------------------------------------

    def _advance(self, expected: OrderStatus, target: OrderStatus) -> None:
        if self.status != expected:
            raise IllegalTransition(
                f"Cannot move order {self.id} to {target.value}; current status "
                f"is {self.status.value}, expected {expected.value}"
            )
        self.status = target

    def _assert_cancellable(self) -> None:
        if not self.is_cancellable:
            raise IllegalTransition(
                f"Cannot cancel order {self.id} in {self.status.value} status"
            )
