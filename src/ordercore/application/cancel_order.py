"""Application service: Cancel Order use case.

Puts every unit of the order back in stock, then cancels the order.
Restoration is all-or-nothing: if any product cannot be restored the
stock is left as it was and the order keeps its current status.  If
the cancelled order cannot be saved, the returned units are taken back
out of stock.
"""

from __future__ import annotations

from loguru import logger

from ordercore.domain.exceptions import OrderNotFound
from ordercore.domain.repository.order_store import OrderStore
from ordercore.domain.repository.product_catalog import ProductCatalog
from ordercore.domain.service.stock_allocation_service import StockAllocationService


class CancelOrderHandler:

    def __init__(
        self,
        order_store: OrderStore,
        product_catalog: ProductCatalog,
    ) -> None:
        self._order_store = order_store
        self._product_catalog = product_catalog

    def handle(self, order_id: str) -> None:
        order = self._order_store.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found")

        # Restore stock first; cancel() only runs once every product is back.
        svc = StockAllocationService(self._product_catalog)
        released = svc.release_for_order(order)

        order.cancel()
        try:
            self._order_store.update(order)
        except Exception:
            # The order keeps its old status, so its units are taken again.
            svc.reclaim(released)
            logger.warning("Cancelling order {} failed, stock reclaimed", order_id)
            raise
        logger.info(
            "Order {} cancelled, {} units returned to stock",
            order_id,
            sum(event.quantity for event in released),
        )
