"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.order import Order


class OrderStore(ABC):

    @abstractmethod
    def find_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_by_customer_id(self, customer_id: str) -> list[Order]:
        """Return every order placed by a customer, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order.  Fails with ConcurrencyConflict if the ID exists."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist changes to an existing order.

        Fails with OrderNotFound if the order was never saved, and with
        ConcurrencyConflict if ``order.version`` differs from the stored
        version.  On success the version is incremented.
        """

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order.  Unknown IDs are ignored."""
