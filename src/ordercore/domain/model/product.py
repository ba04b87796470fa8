"""Product aggregate.

Products live independently of orders.  The catalog owns them and they
carry the stock counter that order placement and cancellation adjust.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordercore.domain.exceptions import NegativeStock
from ordercore.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.  ``version`` is managed by
    the catalog and bumped on every successful save.
    """

    id: str
    name: str
    description: str
    price: Money
    stock: int
    version: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise NegativeStock(f"Stock cannot be negative, got {self.stock}")

    def can_adjust(self, delta: int) -> bool:
        return self.stock + delta >= 0

    def update_stock(self, delta: int) -> None:
        """Apply a stock change; negative deltas allocate, positive restock.

        Raises NegativeStock and leaves the stock untouched if the result
        would drop below zero.
        """
        new_stock = self.stock + delta
        if new_stock < 0:
            raise NegativeStock(
                f"Cannot adjust stock of {self.name} by {delta} "
                f"(only {self.stock} in stock)"
            )
        self.stock = new_stock
