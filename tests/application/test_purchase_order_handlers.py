"""Integration tests for the purchase order lifecycle."""

from decimal import Decimal

import pytest

from backoffice.application.cancel_purchase_order import CancelPurchaseOrderHandler
from backoffice.application.create_purchase_order import CreatePurchaseOrderHandler
from backoffice.application.dto import LineItemSpec
from backoffice.application.receive_purchase_order import ReceivePurchaseOrderHandler
from backoffice.application.show_purchase_order import (
    ListPurchaseOrdersHandler,
    ShowPurchaseOrderHandler,
)
from backoffice.domain.exceptions import (
    InvalidLineItem,
    InvalidStateTransition,
    PONotFound,
    SupplierNotFound,
)
from tests.fakes import make_product, make_store, make_supplier, stock_of, uow_factory


@pytest.fixture
def store():
    return make_store(
        products=[
            make_product("p1", "Widget", price="100", stock="10"),
            make_product("p2", "Gadget", price="25", stock="0"),
        ],
        suppliers=[make_supplier()],
    )


@pytest.fixture
def order(store):
    return CreatePurchaseOrderHandler(uow_factory(store)).handle(
        "s1", [LineItemSpec("p1", 5), LineItemSpec("p2", "2.5")]
    )


class TestCreatePurchaseOrder:

    def test_created_pending_without_stock_change(self, store, order):
        assert order.status == "pending"
        assert order.po_number == "PO-00001"
        assert order.supplier_name == "Acme Supplies"
        assert order.total_amount == "562.50"
        assert stock_of(store, "p1") == Decimal("10")
        assert stock_of(store, "p2") == Decimal("0")

    def test_unknown_supplier(self, store):
        with pytest.raises(SupplierNotFound):
            CreatePurchaseOrderHandler(uow_factory(store)).handle("nobody", [LineItemSpec("p1", 1)])

    def test_unknown_product(self, store):
        with pytest.raises(InvalidLineItem):
            CreatePurchaseOrderHandler(uow_factory(store)).handle("s1", [LineItemSpec("zz", 1)])
        assert store.list_records("purchase_orders") == []


class TestReceivePurchaseOrder:

    def test_receive_credits_stock_once(self, store, order):
        receive = ReceivePurchaseOrderHandler(uow_factory(store)).handle

        received = receive(order.id)
        assert received.status == "received"
        assert stock_of(store, "p1") == Decimal("15")
        assert stock_of(store, "p2") == Decimal("2.5")
        assert store.get("purchase_orders", order.id).received_at is not None

        with pytest.raises(InvalidStateTransition):
            receive(order.id)
        assert stock_of(store, "p1") == Decimal("15")

    def test_receive_unknown(self, store):
        with pytest.raises(PONotFound):
            ReceivePurchaseOrderHandler(uow_factory(store)).handle("nope")


class TestCancelPurchaseOrder:

    def test_cancel_pending(self, store, order):
        cancelled = CancelPurchaseOrderHandler(uow_factory(store)).handle(order.id)
        assert cancelled.status == "cancelled"
        assert stock_of(store, "p1") == Decimal("10")

    def test_cancelled_cannot_be_received(self, store, order):
        CancelPurchaseOrderHandler(uow_factory(store)).handle(order.id)
        with pytest.raises(InvalidStateTransition, match="from cancelled to received"):
            ReceivePurchaseOrderHandler(uow_factory(store)).handle(order.id)
        assert stock_of(store, "p1") == Decimal("10")

    def test_received_cannot_be_cancelled(self, store, order):
        ReceivePurchaseOrderHandler(uow_factory(store)).handle(order.id)
        with pytest.raises(InvalidStateTransition):
            CancelPurchaseOrderHandler(uow_factory(store)).handle(order.id)


class TestPurchaseOrderQueries:

    def test_show_and_list(self, store, order):
        shown = ShowPurchaseOrderHandler(uow_factory(store)).handle(order.id)
        assert shown == order
        assert [o.id for o in ListPurchaseOrdersHandler(uow_factory(store)).handle()] == [order.id]

    def test_show_unknown(self, store):
        with pytest.raises(PONotFound):
            ShowPurchaseOrderHandler(uow_factory(store)).handle("nope")
