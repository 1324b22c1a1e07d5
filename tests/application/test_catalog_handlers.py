"""Tests for catalog maintenance: products, stock counts, customers and suppliers."""

from decimal import Decimal

import pytest

from backoffice.application.add_product import AddProductHandler
from backoffice.application.cancel_purchase_order import CancelPurchaseOrderHandler
from backoffice.application.create_invoice import CreateInvoiceHandler
from backoffice.application.create_purchase_order import CreatePurchaseOrderHandler
from backoffice.application.delete_invoice import DeleteInvoiceHandler
from backoffice.application.delete_party import DeleteCustomerHandler, DeleteSupplierHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.dto import LineItemSpec, SupplierDTO
from backoffice.application.receive_purchase_order import ReceivePurchaseOrderHandler
from backoffice.application.register_party import AddCustomerHandler, AddSupplierHandler
from backoffice.application.set_stock import SetStockHandler
from backoffice.application.show_catalog import ListSuppliersHandler
from backoffice.application.update_party import UpdateCustomerHandler, UpdateSupplierHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import (
    CustomerNotFound,
    EntityInUse,
    ProductNotFound,
    SupplierNotFound,
    ValidationError,
)
from tests.fakes import make_product, make_store, make_supplier, stock_of, uow_factory


@pytest.fixture
def store():
    return make_store()


class TestAddProduct:

    def test_add(self, store):
        dto = AddProductHandler(uow_factory(store)).handle(
            name="  Cable ", sku="CAB-1", unit="m", price="12.5", tax_rate="12",
            stock_quantity="40", reorder_level="5", hsn_code="8544",
        )
        assert dto.name == "Cable"
        assert dto.price == "12.50"
        assert dto.stock_quantity == "40"
        assert store.get("products", dto.id).hsn_code == "8544"

    def test_duplicate_sku_rejected(self, store):
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(uow_factory(store)).handle(
                name="Other", sku="sku-p1", unit="pcs", price="1", tax_rate="0",
            )

    @pytest.mark.parametrize(
        "overrides",
        [{"name": " "}, {"sku": ""}, {"price": "-1"}, {"tax_rate": "101"}, {"stock_quantity": "-2"}],
    )
    def test_invalid_fields(self, store, overrides):
        fields = dict(name="Cable", sku="CAB-1", unit="m", price="1", tax_rate="5")
        fields.update(overrides)
        with pytest.raises(ValidationError):
            AddProductHandler(uow_factory(store)).handle(**fields)


class TestUpdateProduct:

    def test_update_price_and_rate(self, store):
        dto = UpdateProductHandler(uow_factory(store)).handle("p1", new_price="120", new_tax_rate="5")
        assert (dto.price, dto.tax_rate) == ("120.00", "5%")

    def test_unknown_product(self, store):
        with pytest.raises(ProductNotFound):
            UpdateProductHandler(uow_factory(store)).handle("nope", new_price="1")

    def test_revise_details(self, store):
        dto = UpdateProductHandler(uow_factory(store)).handle(
            "p1", name=" Widget Pro ", sku="WP-1", unit="box", reorder_level="4", hsn_code="8471",
        )
        assert (dto.name, dto.sku, dto.unit) == ("Widget Pro", "WP-1", "box")
        stored = store.get("products", "p1")
        assert stored.reorder_level == Decimal("4")
        assert stored.hsn_code == "8471"
        assert stored.price.amount == Decimal("100")

    def test_sku_taken_by_another_product(self):
        store = make_store(products=[make_product("p1"), make_product("p2", "Gadget")])
        with pytest.raises(ValidationError, match="already exists"):
            UpdateProductHandler(uow_factory(store)).handle("p2", sku="SKU-P1")
        assert store.get("products", "p2").sku == "SKU-P2"

    def test_keeping_own_sku_allowed(self, store):
        dto = UpdateProductHandler(uow_factory(store)).handle("p1", sku="SKU-P1", name="Renamed")
        assert dto.name == "Renamed"

    @pytest.mark.parametrize(
        "changes", [{"name": "  "}, {"sku": ""}, {"reorder_level": "-1"}, {"new_price": "-3"}],
    )
    def test_invalid_changes_leave_product_untouched(self, store, changes):
        with pytest.raises(ValidationError):
            UpdateProductHandler(uow_factory(store)).handle("p1", **changes)
        stored = store.get("products", "p1")
        assert (stored.name, stored.sku, stored.reorder_level) == ("Widget", "SKU-P1", Decimal("2"))


def _catalog_store():
    return make_store(
        products=[make_product("p1", "Widget"), make_product("p2", "Gadget")],
        suppliers=[make_supplier()],
    )


class TestDeleteProduct:

    def test_unused_product_deleted(self):
        store = _catalog_store()
        DeleteProductHandler(uow_factory(store)).handle("p2")
        assert store.get("products", "p2") is None
        assert store.get("products", "p1") is not None

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            DeleteProductHandler(uow_factory(_catalog_store())).handle("nope")

    def test_refused_while_on_an_invoice(self):
        store = _catalog_store()
        factory = uow_factory(store)
        invoice = CreateInvoiceHandler(factory).handle("c1", [LineItemSpec("p1", 1)])

        with pytest.raises(EntityInUse, match=f"appears on invoice {invoice.invoice_number}"):
            DeleteProductHandler(factory).handle("p1")
        assert store.get("products", "p1") is not None

        DeleteInvoiceHandler(factory).handle(invoice.id)
        DeleteProductHandler(factory).handle("p1")
        assert store.get("products", "p1") is None

    def test_refused_while_on_a_pending_order(self):
        store = _catalog_store()
        factory = uow_factory(store)
        order = CreatePurchaseOrderHandler(factory).handle("s1", [LineItemSpec("p2", 3)])

        with pytest.raises(EntityInUse, match=f"pending purchase order {order.po_number}"):
            DeleteProductHandler(factory).handle("p2")

        CancelPurchaseOrderHandler(factory).handle(order.id)
        DeleteProductHandler(factory).handle("p2")
        assert store.get("products", "p2") is None

    def test_allowed_once_order_received(self):
        store = _catalog_store()
        factory = uow_factory(store)
        order = CreatePurchaseOrderHandler(factory).handle("s1", [LineItemSpec("p2", 3)])
        ReceivePurchaseOrderHandler(factory).handle(order.id)

        DeleteProductHandler(factory).handle("p2")
        assert store.get("products", "p2") is None


class TestUpdateParties:

    def test_update_customer_contact(self):
        store = make_store()
        dto = UpdateCustomerHandler(uow_factory(store)).handle(
            "c1", email=" alice@example.com ", address="1 Main St",
        )
        assert (dto.name, dto.phone, dto.email) == ("Alice", "555-0100", "alice@example.com")
        assert store.get("customers", "c1").address == "1 Main St"

    def test_blank_customer_name_rejected(self):
        store = make_store()
        with pytest.raises(ValidationError):
            UpdateCustomerHandler(uow_factory(store)).handle("c1", name=" ")
        assert store.get("customers", "c1").name == "Alice"

    def test_unknown_customer(self):
        with pytest.raises(CustomerNotFound):
            UpdateCustomerHandler(uow_factory(make_store())).handle("nobody", phone="1")

    def test_update_supplier_returns_dto(self):
        store = make_store(suppliers=[make_supplier()])
        dto = UpdateSupplierHandler(uow_factory(store)).handle("s1", name="Acme Ltd", tax_id="GST9")
        assert isinstance(dto, SupplierDTO)
        assert (dto.name, dto.tax_id) == ("Acme Ltd", "GST9")
        assert store.get("suppliers", "s1").name == "Acme Ltd"

    def test_unknown_supplier(self):
        with pytest.raises(SupplierNotFound):
            UpdateSupplierHandler(uow_factory(make_store())).handle("nobody", name="X")


class TestDeleteParties:

    def test_customer_without_invoices_deleted(self):
        store = make_store()
        DeleteCustomerHandler(uow_factory(store)).handle("c1")
        assert store.get("customers", "c1") is None

    def test_customer_with_invoice_refused(self):
        store = _catalog_store()
        factory = uow_factory(store)
        CreateInvoiceHandler(factory).handle("c1", [LineItemSpec("p1", 1)])

        with pytest.raises(EntityInUse, match=r"has 1 invoice\(s\)"):
            DeleteCustomerHandler(factory).handle("c1")
        assert store.get("customers", "c1") is not None

    def test_unknown_customer(self):
        with pytest.raises(CustomerNotFound):
            DeleteCustomerHandler(uow_factory(make_store())).handle("nobody")

    def test_supplier_with_pending_order_refused(self):
        store = _catalog_store()
        factory = uow_factory(store)
        order = CreatePurchaseOrderHandler(factory).handle("s1", [LineItemSpec("p1", 1)])

        with pytest.raises(EntityInUse, match=f"pending purchase order {order.po_number}"):
            DeleteSupplierHandler(factory).handle("s1")

        CancelPurchaseOrderHandler(factory).handle(order.id)
        DeleteSupplierHandler(factory).handle("s1")
        assert store.get("suppliers", "s1") is None

    def test_unknown_supplier(self):
        with pytest.raises(SupplierNotFound):
            DeleteSupplierHandler(uow_factory(make_store())).handle("nobody")


class TestSetStock:

    def test_set_level(self, store):
        dto = SetStockHandler(uow_factory(store)).handle("p1", "3")
        assert dto.stock_quantity == "3"
        assert dto.low_stock is False
        assert stock_of(store, "p1") == Decimal("3")

    def test_negative_rejected(self, store):
        with pytest.raises(ValidationError):
            SetStockHandler(uow_factory(store)).handle("p1", "-1")
        assert stock_of(store, "p1") == Decimal("10")


class TestParties:

    def test_add_customer(self, store):
        dto = AddCustomerHandler(uow_factory(store)).handle("Carol", email=" c@example.com ")
        assert dto.email == "c@example.com"
        assert dto.outstanding_amount == "0.00"

    def test_add_supplier(self, store):
        supplier = AddSupplierHandler(uow_factory(store)).handle("Parts Ltd", tax_id="GST123")
        assert isinstance(supplier, SupplierDTO)
        assert store.get("suppliers", supplier.id).tax_id == "GST123"

    def test_list_suppliers_returns_dtos(self):
        store = make_store(suppliers=[make_supplier("s1", "Zeta"), make_supplier("s2", "Alpha")])
        suppliers = ListSuppliersHandler(uow_factory(store)).handle()
        assert all(isinstance(s, SupplierDTO) for s in suppliers)
        assert {s.name for s in suppliers} == {"Alpha", "Zeta"}

    def test_blank_name_rejected(self, store):
        with pytest.raises(ValidationError):
            AddCustomerHandler(uow_factory(store)).handle("   ")
