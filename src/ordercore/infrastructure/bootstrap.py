"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ordercore.config import Settings, get_settings
from ordercore.infrastructure.adapters.fulfillment import FlatRateFulfillment
from ordercore.infrastructure.adapters.notification import LoggingNotifier
from ordercore.infrastructure.persistence.json_order_store import JsonOrderStore
from ordercore.infrastructure.persistence.json_product_catalog import (
    JsonProductCatalog,
)


def product_catalog(settings: Settings | None = None) -> JsonProductCatalog:
    settings = settings or get_settings()
    return JsonProductCatalog(settings.data_dir / "products.json")


def order_store(settings: Settings | None = None) -> JsonOrderStore:
    settings = settings or get_settings()
    return JsonOrderStore(settings.data_dir / "orders.json", product_catalog(settings))


def notifier() -> LoggingNotifier:
    return LoggingNotifier()


def fulfillment(settings: Settings | None = None) -> FlatRateFulfillment:
    settings = settings or get_settings()
    return FlatRateFulfillment(settings.flat_shipping_cost)
