"""Application service: edit customer and supplier contact details.

Invoices and purchase orders keep the name they were issued under.
"""

from __future__ import annotations

from backoffice.application.dto import CustomerDTO, SupplierDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import CustomerNotFound, SupplierNotFound
from backoffice.domain.model.party import Customer, Supplier
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class UpdateCustomerHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, customer_id: str, **contact: str | None) -> CustomerDTO:
        """Change any of name, phone, email, address, tax_id."""

        def update() -> Customer:
            with self._uow_factory() as uow:
                customer = uow.customers.get_by_id(customer_id)
                if customer is None:
                    raise CustomerNotFound(f"Customer '{customer_id}' not found")
                customer.update_contact(**contact)
                uow.customers.save(customer)
                uow.commit()
                return customer

        return CustomerDTO.from_domain(self._retry.run(update))


class UpdateSupplierHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, supplier_id: str, **contact: str | None) -> SupplierDTO:
        def update() -> Supplier:
            with self._uow_factory() as uow:
                supplier = uow.suppliers.get_by_id(supplier_id)
                if supplier is None:
                    raise SupplierNotFound(f"Supplier '{supplier_id}' not found")
                supplier.update_contact(**contact)
                uow.suppliers.save(supplier)
                uow.commit()
                return supplier

        return SupplierDTO.from_domain(self._retry.run(update))
