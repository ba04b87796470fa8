"""Tests for the JSON-file repositories."""

import json

import pytest

from ordercore.domain.exceptions import ConcurrencyConflict, OrderNotFound, ProductNotFound
from ordercore.domain.model.order import Order, OrderStatus
from ordercore.domain.model.value_objects import Money
from ordercore.infrastructure.persistence.json_order_store import JsonOrderStore
from ordercore.infrastructure.persistence.json_product_catalog import JsonProductCatalog
from tests.fakes import make_customer, make_product


@pytest.fixture
def catalog(tmp_path) -> JsonProductCatalog:
    catalog = JsonProductCatalog(tmp_path / "products.json")
    catalog.save(make_product("1", name="Widget", price="15.00", stock=10))
    catalog.save(make_product("2", name="Gadget", price="25.00", stock=5, currency="USD"))
    return catalog


@pytest.fixture
def store(tmp_path, catalog) -> JsonOrderStore:
    return JsonOrderStore(tmp_path / "orders.json", catalog)


def _order(catalog: JsonProductCatalog, order_id: str = "o-1", customer_id: str = "c-1") -> Order:
    order = Order.create(make_customer(customer_id), order_id=order_id)
    order.add_item(catalog.find_by_id("1"), 2)
    order.add_item(catalog.find_by_id("2"), 1)
    return order


class TestJsonProductCatalog:

    def test_creates_empty_file(self, tmp_path):
        JsonProductCatalog(tmp_path / "nested" / "products.json")
        assert json.loads((tmp_path / "nested" / "products.json").read_text()) == []

    def test_round_trips_product(self, catalog):
        product = catalog.find_by_id("1")
        assert product.name == "Widget"
        assert product.description == "A widget"
        assert product.price == Money.of("15.00")
        assert product.stock == 10
        assert product.version == 0

    def test_unknown_product_is_none(self, catalog):
        assert catalog.find_by_id("99") is None

    def test_list_all(self, catalog):
        assert [p.id for p in catalog.list_all()] == ["1", "2"]

    def test_update_bumps_version(self, catalog):
        product = catalog.find_by_id("1")
        product.update_stock(-3)
        catalog.save(product)

        assert product.version == 1
        reloaded = catalog.find_by_id("1")
        assert reloaded.stock == 7
        assert reloaded.version == 1

    def test_stale_update_rejected(self, catalog):
        first = catalog.find_by_id("1")
        second = catalog.find_by_id("1")
        first.update_stock(-1)
        catalog.save(first)

        second.update_stock(-2)
        with pytest.raises(ConcurrencyConflict):
            catalog.save(second)
        assert catalog.find_by_id("1").stock == 9


class TestJsonOrderStore:

    def test_round_trips_order(self, store, catalog):
        order = _order(catalog)
        store.save(order)

        loaded = store.find_by_id("o-1")

        assert loaded.customer == make_customer("c-1")
        assert loaded.customer.address == "1 Main Street"
        assert loaded.status == OrderStatus.PENDING
        assert [(i.product_id, i.quantity) for i in loaded.items] == [("1", 2), ("2", 1)]
        assert loaded.total_amount == Money.of("55.00")
        assert loaded.created_at == order.created_at

    def test_price_snapshot_survives_reload(self, store, catalog, tmp_path):
        store.save(_order(catalog))

        raw = json.loads((tmp_path / "products.json").read_text())
        raw[0]["price"] = "99.00"
        (tmp_path / "products.json").write_text(json.dumps(raw))

        assert store.find_by_id("o-1").items[0].price == Money.of("15.00")

    def test_duplicate_save_rejected(self, store, catalog):
        store.save(_order(catalog))
        with pytest.raises(ConcurrencyConflict):
            store.save(_order(catalog))

    def test_update_checks_version(self, store, catalog):
        store.save(_order(catalog))
        first = store.find_by_id("o-1")
        second = store.find_by_id("o-1")

        first.confirm()
        store.update(first)
        assert first.version == 1

        second.cancel()
        with pytest.raises(ConcurrencyConflict):
            store.update(second)
        assert store.find_by_id("o-1").status == OrderStatus.CONFIRMED

    def test_update_unknown_order_rejected(self, store, catalog):
        with pytest.raises(OrderNotFound):
            store.update(_order(catalog))

    def test_find_by_customer_id(self, store, catalog):
        store.save(_order(catalog, "o-1", "c-1"))
        store.save(_order(catalog, "o-2", "c-2"))
        store.save(_order(catalog, "o-3", "c-1"))

        assert [o.id for o in store.find_by_customer_id("c-1")] == ["o-1", "o-3"]

    def test_delete(self, store, catalog):
        store.save(_order(catalog))
        store.delete("o-1")
        store.delete("o-1")
        assert store.find_by_id("o-1") is None

    def test_missing_product_on_load_rejected(self, tmp_path, store, catalog):
        store.save(_order(catalog))
        (tmp_path / "products.json").write_text("[]")

        with pytest.raises(ProductNotFound):
            store.find_by_id("o-1")
