"""Fulfillment adapter with a flat shipping rate."""

from __future__ import annotations

from decimal import Decimal

from loguru import logger

from ordercore.domain.model.order import Order
from ordercore.domain.model.value_objects import Money
from ordercore.domain.ports import FulfillmentPort


class FlatRateFulfillment(FulfillmentPort):
    """Charges the same shipping cost for every order and logs deliveries."""

    def __init__(self, flat_cost: Decimal) -> None:
        self._flat_cost = flat_cost

    def calculate_shipping_cost(self, order: Order) -> Money:
        return Money(self._flat_cost, order.currency)

    def schedule_delivery(self, order: Order) -> None:
        logger.info(
            "Delivery of order {} scheduled to {}", order.id, order.customer.address
        )
