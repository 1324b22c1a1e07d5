"""Application service: Customer Statement use case (query).

The customer's details, outstanding amount and every current invoice.
"""

from __future__ import annotations

from backoffice.application.dto import CustomerDTO, CustomerStatementDTO, InvoiceDTO
from backoffice.domain.exceptions import CustomerNotFound
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class CustomerStatementHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, customer_id: str) -> CustomerStatementDTO:
        with self._uow_factory() as uow:
            customer = uow.customers.get_by_id(customer_id)
            if customer is None:
                raise CustomerNotFound(f"Customer '{customer_id}' not found")
            invoices = uow.invoices.list_for_customer(customer_id)
            return CustomerStatementDTO(
                customer=CustomerDTO.from_domain(customer),
                invoices=[InvoiceDTO.from_domain(i) for i in invoices],
            )
