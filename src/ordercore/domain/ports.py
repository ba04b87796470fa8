"""Outbound ports for notification and fulfillment.

The domain only knows these interfaces; the infrastructure layer
provides the concrete adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.customer import Customer
from ordercore.domain.model.order import Order
from ordercore.domain.model.value_objects import Money


class NotificationPort(ABC):

    @abstractmethod
    def send_order_confirmation(
        self, order: Order, customer: Customer, discount: Money
    ) -> None:
        """Tell the customer their order was placed."""


class FulfillmentPort(ABC):

    @abstractmethod
    def calculate_shipping_cost(self, order: Order) -> Money:
        """Quote the shipping cost for an order."""

    @abstractmethod
    def schedule_delivery(self, order: Order) -> None:
        """Book the delivery of a persisted order."""
