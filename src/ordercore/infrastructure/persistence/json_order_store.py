"""JSON-file-backed implementation of OrderStore.

The customer is stored inline with each order.  Line items keep only the
product ID plus the price snapshot; the product itself is resolved
through the catalog when the order is loaded.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ordercore.domain.exceptions import ConcurrencyConflict, OrderNotFound, ProductNotFound
from ordercore.domain.model.customer import Customer
from ordercore.domain.model.order import Order, OrderItem, OrderStatus
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from ordercore.domain.repository.order_store import OrderStore
from ordercore.domain.repository.product_catalog import ProductCatalog


class JsonOrderStore(OrderStore):

    def __init__(self, file_path: Path, product_catalog: ProductCatalog) -> None:
        self._file_path = file_path
        self._product_catalog = product_catalog
        self._ensure_file()

    # --- OrderStore interface -------------------------------------------------

    def find_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_customer_id(self, customer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["customer"]["id"] == customer_id
        ]

    def save(self, order: Order) -> None:
        orders = self._load_raw()
        if any(raw["id"] == order.id for raw in orders):
            raise ConcurrencyConflict(f"Order {order.id} already exists")
        orders.append(self._to_raw(order))
        self._persist_raw(orders)

    def update(self, order: Order) -> None:
        orders = self._load_raw()
        for i, raw in enumerate(orders):
            if raw["id"] != order.id:
                continue
            if raw["version"] != order.version:
                raise ConcurrencyConflict(
                    f"Order {order.id} was modified concurrently "
                    f"(stored version {raw['version']}, got {order.version})"
                )
            order.version += 1
            orders[i] = self._to_raw(order)
            self._persist_raw(orders)
            return
        raise OrderNotFound(f"Order {order.id} not found")

    def delete(self, order_id: str) -> None:
        orders = self._load_raw()
        remaining = [raw for raw in orders if raw["id"] != order_id]
        if len(remaining) != len(orders):
            self._persist_raw(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        customer = order.customer
        return {
            "id": order.id,
            "customer": {
                "id": customer.id,
                "name": customer.name,
                "email": customer.email,
                "address": customer.address,
            },
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "version": order.version,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "unit_price": str(item.price.amount),
                    "currency": item.price.currency,
                }
                for item in order.items
            ],
        }

    def _to_domain(self, raw: dict) -> Order:
        items = []
        for i in raw["items"]:
            product = self._product_catalog.find_by_id(i["product_id"])
            if product is None:
                raise ProductNotFound(
                    f"Product {i['product_id']} of order {raw['id']} not found"
                )
            items.append(
                OrderItem(
                    product=product,
                    quantity=i["quantity"],
                    price=Money(Decimal(i["unit_price"]), i.get("currency", DEFAULT_CURRENCY)),
                )
            )
        return Order(
            id=raw["id"],
            customer=Customer(**raw["customer"]),
            items=items,
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
