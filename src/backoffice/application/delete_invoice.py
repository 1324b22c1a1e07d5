"""Application service: Delete Invoice use case (compensating reversal).

Undoes every aggregate effect of the invoice in one unit of work:
returns each line's quantity to stock, removes the still-unpaid balance
from the customer's outstanding amount (paid portions were subtracted
when the payments were recorded), deletes the invoice's payments and
finally the invoice itself.
"""

from __future__ import annotations

from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import InvoiceNotFound
from backoffice.domain.model.invoice import Invoice
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.domain.service.customer_balance import CustomerBalanceAggregator
from backoffice.domain.service.stock_ledger import StockLedger
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.delete_invoice")


class DeleteInvoiceHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, invoice_id: str) -> None:
        with LogContext.bind(operation="delete_invoice"):
            invoice, removed_payments = self._retry.run(lambda: self._delete(invoice_id))
            logger.info(
                "invoice_deleted",
                extra={
                    "invoice_number": invoice.invoice_number,
                    "customer_id": invoice.customer_id,
                    "reversed_balance": invoice.balance.amount,
                    "payments_removed": removed_payments,
                },
            )

    def _delete(self, invoice_id: str) -> tuple[Invoice, int]:
        with self._uow_factory() as uow:
            invoice = uow.invoices.get_by_id(invoice_id)
            if invoice is None:
                raise InvoiceNotFound(f"Invoice '{invoice_id}' not found")

            StockLedger(uow).release_all(
                [(item.product_id, item.quantity.value) for item in invoice.items]
            )

            CustomerBalanceAggregator(uow).adjust(invoice.customer_id, -invoice.balance.amount)

            payments = uow.payments.list_for_invoice(invoice.id)
            for payment in payments:
                uow.payments.delete(payment)

            uow.invoices.delete(invoice)
            uow.commit()
            return invoice, len(payments)
