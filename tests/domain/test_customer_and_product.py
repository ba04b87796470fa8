"""Unit tests for the Customer entity and the Product aggregate."""

import pytest

from ordercore.domain.exceptions import EmptyAddress, InvalidEmail, NegativeStock
from ordercore.domain.model.customer import Customer
from tests.fakes import make_customer, make_product


class TestCustomer:

    def test_valid_customer(self):
        c = make_customer()
        assert c.email == "alice@example.com"
        assert c.address == "1 Main Street"

    @pytest.mark.parametrize(
        "email",
        ["", "alice", "alice@example", "@example.com", "alice@.com x", "al ice@example.com",
         "alice@example.com\n"],
    )
    def test_invalid_email_rejected(self, email):
        with pytest.raises(InvalidEmail):
            make_customer(email=email)

    def test_update_address(self):
        c = make_customer()
        c.update_address("2 Side Road")
        assert c.address == "2 Side Road"
        assert c.id == "c-1"

    @pytest.mark.parametrize("address", ["", "   ", "\t\n"])
    def test_blank_address_rejected(self, address):
        c = make_customer()
        with pytest.raises(EmptyAddress):
            c.update_address(address)
        assert c.address == "1 Main Street"

    def test_identity_is_by_id(self):
        a = make_customer("c-1", name="Alice")
        b = Customer(id="c-1", name="Alice B.", email="ab@example.org", address="elsewhere")
        assert a == b
        assert hash(a) == hash(b)
        assert a != make_customer("c-2")


class TestProduct:

    def test_negative_initial_stock_rejected(self):
        with pytest.raises(NegativeStock):
            make_product(stock=-1)

    def test_zero_stock_allowed(self):
        assert make_product(stock=0).stock == 0

    def test_allocate_and_restock(self):
        p = make_product(stock=10)
        p.update_stock(-4)
        assert p.stock == 6
        p.update_stock(3)
        assert p.stock == 9

    def test_can_drain_to_zero(self):
        p = make_product(stock=5)
        p.update_stock(-5)
        assert p.stock == 0

    @pytest.mark.parametrize("stock", [0, 1, 7, 100])
    def test_overdraw_rejected_and_stock_unchanged(self, stock):
        p = make_product(stock=stock)
        with pytest.raises(NegativeStock):
            p.update_stock(-stock - 1)
        assert p.stock == stock

    def test_can_adjust(self):
        p = make_product(stock=2)
        assert p.can_adjust(-2)
        assert not p.can_adjust(-3)
        assert p.can_adjust(5)
