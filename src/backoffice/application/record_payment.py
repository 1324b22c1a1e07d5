"""Application service: Record Payment use case.

Wraps the Payment Allocator in a unit of work so the invoice balance,
the payment record and the customer's outstanding amount commit
together.
"""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import PaymentDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.model.payment import Payment, PaymentMethod
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.domain.service.payment_allocator import PaymentAllocator
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.record_payment")


class RecordPaymentHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(
        self,
        invoice_id: str,
        amount: str | Decimal,
        method: str | PaymentMethod,
        reference_number: str | None = None,
        notes: str | None = None,
    ) -> PaymentDTO:
        def record() -> Payment:
            with self._uow_factory() as uow:
                payment = PaymentAllocator(uow).record_payment(
                    invoice_id, amount, method, reference_number, notes
                )
                uow.commit()
                return payment

        with LogContext.bind(operation="record_payment"):
            payment = self._retry.run(record)
            logger.info(
                "payment_recorded",
                extra={
                    "payment_number": payment.payment_number,
                    "invoice_number": payment.invoice_number,
                    "amount": payment.amount.amount,
                    "method": payment.method,
                },
            )
        return PaymentDTO.from_domain(payment)
