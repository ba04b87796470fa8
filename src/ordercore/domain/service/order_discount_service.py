"""Domain service: order discounts and free shipping.

Stateless policy computed from an Order snapshot.  The thresholds are
fixed business rules:

- more than 5 items: 5 % off
- more than 10 items: 10 % off
- total above 1000: 7 more percentage points
- total above 500: free shipping
"""

from __future__ import annotations

from decimal import Decimal

from ordercore.domain.model.order import Order
from ordercore.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
LARGE_ORDER_ITEMS = 10
LARGE_ORDER_PERCENT = 10
MEDIUM_ORDER_ITEMS = 5
MEDIUM_ORDER_PERCENT = 5
HIGH_VALUE_TOTAL = Decimal("1000")
HIGH_VALUE_PERCENT = 7
FREE_SHIPPING_TOTAL = Decimal("500")


class OrderDiscountService:

    def discount_percentage(self, order: Order) -> int:
        percent = 0
        total_items = order.total_quantity

        if total_items > LARGE_ORDER_ITEMS:
            percent += LARGE_ORDER_PERCENT
        elif total_items > MEDIUM_ORDER_ITEMS:
            percent += MEDIUM_ORDER_PERCENT

        if order.total_amount.amount > HIGH_VALUE_TOTAL:
            percent += HIGH_VALUE_PERCENT

        return percent

    def calculate_discount(self, order: Order) -> Money:
        """Amount taken off the order total, in the order's currency."""
        return order.total_amount.percentage(self.discount_percentage(order))

    def is_eligible_for_free_shipping(self, order: Order) -> bool:
        return order.total_amount.amount > FREE_SHIPPING_TOTAL
