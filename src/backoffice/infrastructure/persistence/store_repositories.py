"""Repository implementations that delegate to a StoreUnitOfWork."""

from __future__ import annotations

from typing import TYPE_CHECKING

from backoffice.domain.model.invoice import Invoice
from backoffice.domain.model.party import Customer, Supplier
from backoffice.domain.model.payment import Payment
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase_order import PurchaseOrder
from backoffice.domain.repository.invoice_repository import (
    InvoiceRepository,
    PaymentRepository,
)
from backoffice.domain.repository.party_repository import (
    CustomerRepository,
    SupplierRepository,
)
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)

if TYPE_CHECKING:
    from backoffice.infrastructure.persistence.unit_of_work import StoreUnitOfWork


class _StoreRepository:

    kind: str

    def __init__(self, uow: StoreUnitOfWork) -> None:
        self._uow = uow

    def get_by_id(self, key: str):
        return self._uow._get(self.kind, key)

    def list_all(self) -> list:
        return self._uow._list(self.kind)

    def add(self, record) -> None:
        self._uow._add(self.kind, record)

    def save(self, record) -> None:
        self._uow._save(self.kind, record)

    def delete(self, record) -> None:
        self._uow._delete(self.kind, record)


class StoreProductRepository(_StoreRepository, ProductRepository):

    kind = "products"

    def get_by_sku(self, sku: str) -> Product | None:
        for product in self.list_all():
            if product.sku.lower() == sku.strip().lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return sorted(super().list_all(), key=lambda p: p.name.lower())


class StoreCustomerRepository(_StoreRepository, CustomerRepository):

    kind = "customers"

    def list_all(self) -> list[Customer]:
        return sorted(super().list_all(), key=lambda c: c.name.lower())


class StoreSupplierRepository(_StoreRepository, SupplierRepository):

    kind = "suppliers"

    def list_all(self) -> list[Supplier]:
        return sorted(super().list_all(), key=lambda s: s.name.lower())


class StoreInvoiceRepository(_StoreRepository, InvoiceRepository):

    kind = "invoices"

    def list_all(self) -> list[Invoice]:
        return sorted(super().list_all(), key=lambda i: i.created_at, reverse=True)

    def list_for_customer(self, customer_id: str) -> list[Invoice]:
        return [i for i in self.list_all() if i.customer_id == customer_id]


class StorePaymentRepository(_StoreRepository, PaymentRepository):

    kind = "payments"

    def list_all(self) -> list[Payment]:
        return sorted(super().list_all(), key=lambda p: p.payment_date, reverse=True)

    def list_for_invoice(self, invoice_id: str) -> list[Payment]:
        return [p for p in self.list_all() if p.invoice_id == invoice_id]


class StorePurchaseOrderRepository(_StoreRepository, PurchaseOrderRepository):

    kind = "purchase_orders"

    def list_all(self) -> list[PurchaseOrder]:
        return sorted(super().list_all(), key=lambda o: o.created_at, reverse=True)
