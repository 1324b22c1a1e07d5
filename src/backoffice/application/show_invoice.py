"""Application service: Show / List Invoices use cases (queries)."""

from __future__ import annotations

from backoffice.application.dto import InvoiceDTO, PaymentDTO
from backoffice.domain.exceptions import InvoiceNotFound
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowInvoiceHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, invoice_id: str) -> InvoiceDTO:
        with self._uow_factory() as uow:
            invoice = uow.invoices.get_by_id(invoice_id)
            if invoice is None:
                raise InvoiceNotFound(f"Invoice '{invoice_id}' not found")
            return InvoiceDTO.from_domain(invoice)


class ListInvoicesHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, customer_id: str | None = None) -> list[InvoiceDTO]:
        with self._uow_factory() as uow:
            if customer_id is not None:
                invoices = uow.invoices.list_for_customer(customer_id)
            else:
                invoices = uow.invoices.list_all()
            return [InvoiceDTO.from_domain(i) for i in invoices]


class ListPaymentsHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, invoice_id: str | None = None) -> list[PaymentDTO]:
        with self._uow_factory() as uow:
            if invoice_id is not None:
                payments = uow.payments.list_for_invoice(invoice_id)
            else:
                payments = uow.payments.list_all()
            return [PaymentDTO.from_domain(p) for p in payments]
