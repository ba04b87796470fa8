"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
Builds an order for an already-constructed Customer, reserving stock
for every requested line.
"""

from __future__ import annotations

from loguru import logger

from ordercore.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from ordercore.domain.exceptions import ProductNotFound
from ordercore.domain.model.customer import Customer
from ordercore.domain.model.order import Order
from ordercore.domain.repository.order_store import OrderStore
from ordercore.domain.repository.product_catalog import ProductCatalog
from ordercore.domain.service.stock_allocation_service import StockAllocationService


class CreateOrderHandler:

    def __init__(
        self,
        order_store: OrderStore,
        product_catalog: ProductCatalog,
    ) -> None:
        self._order_store = order_store
        self._product_catalog = product_catalog

    def handle(self, customer: Customer, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Resolve each product ID (fail if not found).
        2. Add the line through the stock allocation service, which
           snapshots the price and takes the units out of stock.
        3. Persist and return a DTO.

        If a line fails, stock taken by the lines before it is released
        and the error is re-raised.
        """
        order = Order.create(customer)
        try:
            build_order(customer, item_specs, self._product_catalog, order)
        except Exception:
            if order.items:
                StockAllocationService(self._product_catalog).release_for_order(order)
                logger.warning("Released stock reserved by abandoned order {}", order.id)
            raise
        self._order_store.save(order)

        logger.info(
            "Order {} created for customer {} ({} lines, total {})",
            order.id,
            customer.id,
            len(order.items),
            order.total_amount,
        )
        return order_to_dto(order)


def build_order(
    customer: Customer,
    item_specs: list[OrderItemSpec],
    product_catalog: ProductCatalog,
    order: Order | None = None,
) -> Order:
    """Add every requested line to ``order`` (a new one if not given)."""
    if order is None:
        order = Order.create(customer)
    svc = StockAllocationService(product_catalog)

    for spec in item_specs:
        product = product_catalog.find_by_id(spec.product_id)
        if product is None:
            raise ProductNotFound(f"Product {spec.product_id} not found")
        logger.debug("Adding {} x {} to order {}", spec.quantity, product.id, order.id)
        svc.add_item(order, product, spec.quantity)

    return order
