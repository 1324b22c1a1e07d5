"""Application service: register customers and suppliers."""

from __future__ import annotations

from backoffice.application.dto import CustomerDTO, SupplierDTO
from backoffice.domain.model.party import Customer, Supplier
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class AddCustomerHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        phone: str = "",
        email: str = "",
        address: str = "",
        tax_id: str = "",
    ) -> CustomerDTO:
        with self._uow_factory() as uow:
            customer = Customer.create(
                uow.new_id(),
                name,
                phone=phone.strip(),
                email=email.strip(),
                address=address.strip(),
                tax_id=tax_id.strip(),
            )
            uow.customers.add(customer)
            uow.commit()
        return CustomerDTO.from_domain(customer)


class AddSupplierHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        phone: str = "",
        email: str = "",
        address: str = "",
        tax_id: str = "",
    ) -> SupplierDTO:
        with self._uow_factory() as uow:
            supplier = Supplier.create(
                uow.new_id(),
                name,
                phone=phone.strip(),
                email=email.strip(),
                address=address.strip(),
                tax_id=tax_id.strip(),
            )
            uow.suppliers.add(supplier)
            uow.commit()
        return SupplierDTO.from_domain(supplier)
