"""Integration tests for the confirm / ship / deliver / cancel use cases."""

import pytest

from ordercore.application.cancel_order import CancelOrderHandler
from ordercore.application.confirm_order import ConfirmOrderHandler
from ordercore.application.create_order import CreateOrderHandler
from ordercore.application.deliver_order import DeliverOrderHandler
from ordercore.application.dto import OrderItemSpec
from ordercore.application.ship_order import ShipOrderHandler
from ordercore.application.show_order import ListCustomerOrdersHandler, ShowOrderHandler
from ordercore.domain.exceptions import (
    ConcurrencyConflict,
    IllegalTransition,
    OrderNotFound,
    ProductNotFound,
)
from ordercore.domain.model.order import OrderStatus
from tests.fakes import FakeOrderStore, FakeProductCatalog, make_customer, make_product


def _setup():
    catalog = FakeProductCatalog([
        make_product("1", name="Widget", stock=10),
        make_product("2", name="Gadget", stock=10),
    ])
    store = FakeOrderStore()
    dto = CreateOrderHandler(store, catalog).handle(
        make_customer(), [OrderItemSpec("1", 2), OrderItemSpec("2", 3)]
    )
    return store, catalog, dto.id


class TestForwardTransitions:

    def test_confirm_ship_deliver(self):
        store, _, order_id = _setup()

        ConfirmOrderHandler(store).handle(order_id)
        assert store.find_by_id(order_id).status == OrderStatus.CONFIRMED
        ShipOrderHandler(store).handle(order_id)
        assert store.find_by_id(order_id).status == OrderStatus.SHIPPED
        DeliverOrderHandler(store).handle(order_id)
        assert store.find_by_id(order_id).status == OrderStatus.DELIVERED

    def test_each_update_bumps_version(self):
        store, _, order_id = _setup()
        ConfirmOrderHandler(store).handle(order_id)
        ShipOrderHandler(store).handle(order_id)
        assert store.find_by_id(order_id).version == 2

    def test_ship_before_confirm_rejected(self):
        store, _, order_id = _setup()
        with pytest.raises(IllegalTransition):
            ShipOrderHandler(store).handle(order_id)
        assert store.find_by_id(order_id).status == OrderStatus.PENDING

    @pytest.mark.parametrize(
        "handler_cls",
        [ConfirmOrderHandler, ShipOrderHandler, DeliverOrderHandler],
    )
    def test_unknown_order_rejected(self, handler_cls):
        with pytest.raises(OrderNotFound, match="Order nope not found"):
            handler_cls(FakeOrderStore()).handle("nope")

    def test_stale_copy_rejected(self):
        store, _, order_id = _setup()
        stale = store.find_by_id(order_id)

        ConfirmOrderHandler(store).handle(order_id)

        stale.cancel()
        with pytest.raises(ConcurrencyConflict):
            store.update(stale)
        assert store.find_by_id(order_id).status == OrderStatus.CONFIRMED


class TestCancelOrder:

    def test_cancel_confirmed_order_restores_stock(self):
        store, catalog, order_id = _setup()
        ConfirmOrderHandler(store).handle(order_id)
        assert catalog.stock_of("1") == 8
        assert catalog.stock_of("2") == 7

        CancelOrderHandler(store, catalog).handle(order_id)

        assert catalog.stock_of("1") == 10
        assert catalog.stock_of("2") == 10
        assert store.find_by_id(order_id).status == OrderStatus.CANCELLED

    def test_cancel_delivered_order_rejected(self):
        store, catalog, order_id = _setup()
        for handler in (ConfirmOrderHandler, ShipOrderHandler, DeliverOrderHandler):
            handler(store).handle(order_id)

        with pytest.raises(IllegalTransition):
            CancelOrderHandler(store, catalog).handle(order_id)

        assert catalog.stock_of("1") == 8
        assert store.find_by_id(order_id).status == OrderStatus.DELIVERED

    def test_cancel_twice_rejected_without_double_restore(self):
        store, catalog, order_id = _setup()
        CancelOrderHandler(store, catalog).handle(order_id)

        with pytest.raises(IllegalTransition):
            CancelOrderHandler(store, catalog).handle(order_id)

        assert catalog.stock_of("1") == 10

    def test_failed_restoration_keeps_status(self):
        store, _, order_id = _setup()
        # A catalog that lost product 2 cannot restore it
        partial_catalog = FakeProductCatalog([make_product("1", name="Widget", stock=8)])

        with pytest.raises(ProductNotFound):
            CancelOrderHandler(store, partial_catalog).handle(order_id)

        assert partial_catalog.stock_of("1") == 8
        assert store.find_by_id(order_id).status == OrderStatus.PENDING

    def test_failed_order_update_takes_stock_back(self, monkeypatch):
        store, catalog, order_id = _setup()
        ConfirmOrderHandler(store).handle(order_id)

        def conflicting_update(order):
            raise ConcurrencyConflict(f"Order {order.id} was modified concurrently")

        monkeypatch.setattr(store, "update", conflicting_update)

        for _ in range(2):
            with pytest.raises(ConcurrencyConflict):
                CancelOrderHandler(store, catalog).handle(order_id)

        assert catalog.stock_of("1") == 8
        assert catalog.stock_of("2") == 7
        assert store.find_by_id(order_id).status == OrderStatus.CONFIRMED

    def test_unknown_order_rejected(self):
        _, catalog, _ = _setup()
        with pytest.raises(OrderNotFound):
            CancelOrderHandler(FakeOrderStore(), catalog).handle("nope")


class TestQueries:

    def test_show_order(self):
        store, _, order_id = _setup()
        dto = ShowOrderHandler(store).handle(order_id)
        assert dto.id == order_id
        assert dto.total == "75.00 USD"

    def test_show_unknown_order_rejected(self):
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(FakeOrderStore()).handle("nope")

    def test_list_customer_orders(self):
        store, catalog, first_id = _setup()
        second = CreateOrderHandler(store, catalog).handle(
            make_customer(), [OrderItemSpec("1", 1)]
        )
        CreateOrderHandler(store, catalog).handle(
            make_customer("c-2", email="bob@example.com"), [OrderItemSpec("1", 1)]
        )

        orders = ListCustomerOrdersHandler(store).handle("c-1")

        assert [o.id for o in orders] == [first_id, second.id]
        assert ListCustomerOrdersHandler(store).handle("unknown") == []
