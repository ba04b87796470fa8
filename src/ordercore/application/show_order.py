"""Application service: Show Order use case (query)."""

from __future__ import annotations

from ordercore.application.dto import OrderDTO, order_to_dto
from ordercore.domain.exceptions import OrderNotFound
from ordercore.domain.repository.order_store import OrderStore


class ShowOrderHandler:

    def __init__(self, order_store: OrderStore) -> None:
        self._order_store = order_store

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_store.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found")
        return order_to_dto(order)


class ListCustomerOrdersHandler:

    def __init__(self, order_store: OrderStore) -> None:
        self._order_store = order_store

    def handle(self, customer_id: str) -> list[OrderDTO]:
        return [order_to_dto(o) for o in self._order_store.find_by_customer_id(customer_id)]
