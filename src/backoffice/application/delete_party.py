"""Application service: remove customers and suppliers.

A customer with any invoice is kept, since the invoice's balance is part
of that customer's outstanding amount. A supplier with a pending purchase
order is kept until the order is received or cancelled. Creating an
invoice or purchase order writes the party, so a racing delete loses
the version check.
"""

from __future__ import annotations

from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import CustomerNotFound, EntityInUse, SupplierNotFound
from backoffice.domain.model.purchase_order import POStatus
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.delete_party")


class DeleteCustomerHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, customer_id: str) -> None:
        def delete() -> None:
            with self._uow_factory() as uow:
                customer = uow.customers.get_by_id(customer_id)
                if customer is None:
                    raise CustomerNotFound(f"Customer '{customer_id}' not found")
                invoices = uow.invoices.list_for_customer(customer.id)
                if invoices:
                    raise EntityInUse(
                        f"Customer '{customer.name}' has {len(invoices)} invoice(s)"
                    )
                uow.customers.delete(customer)
                uow.commit()

        with LogContext.bind(operation="delete_customer"):
            self._retry.run(delete)
            logger.info("customer_deleted", extra={"customer_id": customer_id})


class DeleteSupplierHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, supplier_id: str) -> None:
        def delete() -> None:
            with self._uow_factory() as uow:
                supplier = uow.suppliers.get_by_id(supplier_id)
                if supplier is None:
                    raise SupplierNotFound(f"Supplier '{supplier_id}' not found")
                for order in uow.purchase_orders.list_all():
                    if order.supplier_id == supplier.id and order.status is POStatus.PENDING:
                        raise EntityInUse(
                            f"Supplier '{supplier.name}' has pending purchase order {order.po_number}"
                        )
                uow.suppliers.delete(supplier)
                uow.commit()

        with LogContext.bind(operation="delete_supplier"):
            self._retry.run(delete)
            logger.info("supplier_deleted", extra={"supplier_id": supplier_id})
