"""Abstract unit of work.

A unit of work groups every aggregate mutation of one business
operation. Domain services receive it and register changes through its
repositories; only the orchestrating application handler calls
``commit()``. Leaving the ``with`` block without committing, or with an
exception, discards every pending change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

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


class AbstractUnitOfWork(ABC):

    products: ProductRepository
    customers: CustomerRepository
    suppliers: SupplierRepository
    invoices: InvoiceRepository
    payments: PaymentRepository
    purchase_orders: PurchaseOrderRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *exc_info) -> None:
        self.rollback()

    @abstractmethod
    def new_id(self) -> str:
        """Generate a unique aggregate ID."""

    @abstractmethod
    def next_number(self, prefix: str) -> str:
        """Issue the next human-readable document number, e.g. ``INV-00007``."""

    @abstractmethod
    def commit(self) -> None:
        """Atomically apply every registered change.

        Raises ConcurrencyConflict, applying nothing, if any aggregate
        loaded by this unit of work was changed by someone else since.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard every registered change that has not been committed."""


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]
