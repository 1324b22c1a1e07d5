"""Unit tests for the Stock Ledger domain service."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import InsufficientStock, ProductNotFound
from backoffice.domain.service.stock_ledger import StockLedger
from backoffice.infrastructure.persistence.unit_of_work import StoreUnitOfWork
from tests.fakes import make_product, make_store, stock_of


def _setup(*products):
    store = make_store(products=list(products) or [make_product()])
    uow = StoreUnitOfWork(store)
    return store, uow, StockLedger(uow)


class TestReserve:

    def test_reserve_decrements_after_commit(self):
        store, uow, ledger = _setup(make_product(stock="10"))
        ledger.reserve("p1", Decimal("4"))
        assert stock_of(store, "p1") == Decimal("10")  # not visible yet
        uow.commit()
        assert stock_of(store, "p1") == Decimal("6")

    def test_reserve_exact_stock(self):
        store, uow, ledger = _setup(make_product(stock="3"))
        ledger.reserve("p1", Decimal("3"))
        uow.commit()
        assert stock_of(store, "p1") == Decimal("0")

    def test_insufficient_stock_rejected(self):
        _, _, ledger = _setup(make_product(stock="5"))
        with pytest.raises(InsufficientStock, match="Insufficient stock for Widget"):
            ledger.reserve("p1", Decimal("6"))

    def test_unknown_product_rejected(self):
        _, _, ledger = _setup()
        with pytest.raises(ProductNotFound):
            ledger.reserve("nope", Decimal("1"))


class TestReserveAll:

    def test_reserves_all_lines(self):
        store, uow, ledger = _setup(
            make_product("p1", "Widget", stock="100"),
            make_product("p2", "Gadget", stock="50"),
        )
        ledger.reserve_all([("p1", Decimal("10")), ("p2", Decimal("5"))])
        uow.commit()
        assert stock_of(store, "p1") == Decimal("90")
        assert stock_of(store, "p2") == Decimal("45")

    def test_no_partial_reservation_on_failure(self):
        """If Widget fits but Gadget does not, Widget must not be touched either."""
        _, uow, ledger = _setup(
            make_product("p1", "Widget", stock="100"),
            make_product("p2", "Gadget", stock="3"),
        )
        with pytest.raises(InsufficientStock, match="Gadget"):
            ledger.reserve_all([("p1", Decimal("10")), ("p2", Decimal("5"))])
        assert uow.products.get_by_id("p1").stock_quantity == Decimal("100")

    def test_same_product_on_two_lines_is_summed(self):
        _, _, ledger = _setup(make_product(stock="5"))
        with pytest.raises(InsufficientStock) as exc_info:
            ledger.reserve_all([("p1", Decimal("3")), ("p1", Decimal("3"))])
        assert exc_info.value.requested == Decimal("6")


class TestRelease:

    def test_release_increments(self):
        store, uow, ledger = _setup(make_product(stock="2"))
        ledger.release("p1", Decimal("8"))
        uow.commit()
        assert stock_of(store, "p1") == Decimal("10")

    def test_release_from_zero(self):
        store, uow, ledger = _setup(make_product(stock="0"))
        ledger.release_all([("p1", Decimal("1")), ("p1", Decimal("2"))])
        uow.commit()
        assert stock_of(store, "p1") == Decimal("3")


class TestSetLevel:

    def test_overwrites_stock(self):
        store, uow, ledger = _setup(make_product(stock="7"))
        ledger.set_level("p1", Decimal("42.5"))
        uow.commit()
        assert stock_of(store, "p1") == Decimal("42.5")
