"""Application service: Confirm Order use case.

Loads the order, asks the aggregate for the confirm transition and
stores the result.  Stock was already taken when the lines were added,
so confirming only changes the status.
"""

from __future__ import annotations

from loguru import logger

from ordercore.domain.exceptions import OrderNotFound
from ordercore.domain.repository.order_store import OrderStore


class ConfirmOrderHandler:

    def __init__(self, order_store: OrderStore) -> None:
        self._order_store = order_store

    def handle(self, order_id: str) -> None:
        order = self._order_store.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found")

        order.confirm()
        self._order_store.update(order)
        logger.info("Order {} confirmed", order_id)
