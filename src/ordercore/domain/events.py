"""Stock events emitted by the Order aggregate.

The Order never touches Product stock directly.  Its mutations return
these events and the StockAllocationService applies them to the
Product aggregates.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StockReserved:
    """Units of a product were allocated to an order line."""

    product_id: str
    quantity: int

    @property
    def delta(self) -> int:
        return -self.quantity


@dataclass(frozen=True)
class StockReleased:
    """Units previously allocated to an order go back on the shelf."""

    product_id: str
    quantity: int

    @property
    def delta(self) -> int:
        return self.quantity
