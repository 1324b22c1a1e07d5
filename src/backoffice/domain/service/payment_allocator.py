"""Domain service: Payment Allocator.

Applies a payment to one invoice. Balance, payment record and the
customer's outstanding amount all change inside the caller's unit of
work, so they commit together or not at all.
"""

from __future__ import annotations

from decimal import Decimal

from backoffice.domain.exceptions import InvalidAmount, InvoiceNotFound, ValidationError
from backoffice.domain.model.payment import Payment, PaymentMethod
from backoffice.domain.model.value_objects import Money, round_money, to_decimal
from backoffice.domain.repository.unit_of_work import AbstractUnitOfWork
from backoffice.domain.service.customer_balance import CustomerBalanceAggregator


class PaymentAllocator:

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        balances: CustomerBalanceAggregator | None = None,
    ) -> None:
        self._uow = uow
        self._balances = balances or CustomerBalanceAggregator(uow)

    def record_payment(
        self,
        invoice_id: str,
        amount: str | Decimal,
        method: str | PaymentMethod,
        reference_number: str | None = None,
        notes: str | None = None,
    ) -> Payment:
        value = self._parse_amount(amount)
        method = PaymentMethod.parse(method)

        invoice = self._uow.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFound(f"Invoice '{invoice_id}' not found")

        paid = Money(value)
        invoice.apply_payment(paid)
        self._uow.invoices.save(invoice)

        payment = Payment(
            id=self._uow.new_id(),
            payment_number=self._uow.next_number("PAY"),
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_id=invoice.customer_id,
            amount=paid,
            method=method,
            reference_number=(reference_number or "").strip(),
            notes=(notes or "").strip(),
        )
        self._uow.payments.add(payment)

        self._balances.adjust(invoice.customer_id, -value)
        return payment

    @staticmethod
    def _parse_amount(amount: str | Decimal) -> Decimal:
        try:
            value = to_decimal(amount, "payment amount")
        except ValidationError as exc:
            raise InvalidAmount(str(exc)) from exc
        if value <= 0:
            raise InvalidAmount(f"Payment amount must be greater than zero, got {value}")
        if value != round_money(value):
            raise InvalidAmount(f"Payment amount must be whole cents, got {value}")
        return value
