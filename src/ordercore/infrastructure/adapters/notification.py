"""Notification adapter that records confirmations in the log.

Stands in for an email gateway when running locally.
"""

from __future__ import annotations

from loguru import logger

from ordercore.domain.model.customer import Customer
from ordercore.domain.model.order import Order
from ordercore.domain.model.value_objects import Money
from ordercore.domain.ports import NotificationPort


class LoggingNotifier(NotificationPort):

    def send_order_confirmation(
        self, order: Order, customer: Customer, discount: Money
    ) -> None:
        logger.info(
            "Confirmation for order {} sent to {} <{}>: total {}, discount {}",
            order.id,
            customer.name,
            customer.email,
            order.total_amount,
            discount,
        )
