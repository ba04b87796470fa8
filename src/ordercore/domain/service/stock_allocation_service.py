"""Domain service: Stock Allocation.

This service applies the stock events emitted by the Order aggregate to
the Product aggregates.  It lives in the domain layer because keeping
stock consistent with order lines is a core business rule, not just
orchestration.

Releasing stock uses a two-phase approach (validate-then-mutate) so a
product that cannot be restored never leaves the others half-restored.
"""

from __future__ import annotations

from ordercore.domain.events import StockReleased, StockReserved
from ordercore.domain.exceptions import NegativeStock, ProductNotFound
from ordercore.domain.model.order import Order
from ordercore.domain.model.product import Product
from ordercore.domain.repository.product_catalog import ProductCatalog


class StockAllocationService:

    def __init__(self, product_catalog: ProductCatalog) -> None:
        self._product_catalog = product_catalog

    def add_item(self, order: Order, product: Product, quantity: int) -> StockReserved:
        """Add a line to the order and take its units out of stock.

        If the product cannot be saved, the line is withdrawn from the
        order again so the order only holds units actually taken.
        """
        event = order.add_item(product, quantity)
        product.update_stock(event.delta)
        try:
            self._product_catalog.save(product)
        except Exception:
            product.update_stock(-event.delta)
            order.withdraw_item(event)
            raise
        return event

    def release_for_order(self, order: Order) -> list[StockReleased]:
        """Put every unit of the order back in stock.

        Uses a two-phase approach:
          Phase 1: collect the release events (this also checks the
                   order may be cancelled), load each product and check
                   the adjustment is possible.  Fails before any mutation.
          Phase 2: apply each adjustment and save the product.

        The order status is not changed here; the caller cancels the
        order once this returns.
        """
        events = order.release_stock()

        # Phase 1: load and validate
        staged: list[tuple[Product, StockReleased]] = []
        for event in events:
            product = self._product_catalog.find_by_id(event.product_id)
            if product is None:
                raise ProductNotFound(f"Product {event.product_id} not found")
            if not product.can_adjust(event.delta):
                raise NegativeStock(
                    f"Cannot restore {event.quantity} units of {product.name}"
                )
            staged.append((product, event))

        # Phase 2: mutate and persist
        for product, event in staged:
            product.update_stock(event.delta)
            self._product_catalog.save(product)

        return events

    def reclaim(self, events: list[StockReleased]) -> None:
        """Take released units back out of stock.

        Undoes ``release_for_order`` when the cancellation that needed it
        could not be recorded.
        """
        for event in events:
            product = self._product_catalog.find_by_id(event.product_id)
            if product is None:
                raise ProductNotFound(f"Product {event.product_id} not found")
            product.update_stock(-event.quantity)
            self._product_catalog.save(product)
