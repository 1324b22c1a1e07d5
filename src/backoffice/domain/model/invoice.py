"""Invoice aggregate — a sale to a customer.

The Invoice owns its line items, which are frozen at creation time.
After that the only mutable state is ``balance``; the payment status is
computed from it so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import (
    InvalidAmount,
    InvalidLineItem,
    InvoiceAlreadyPaid,
    Overpayment,
)
from backoffice.domain.model.value_objects import Money, Quantity, TaxRate


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"

    @staticmethod
    def for_balance(balance: Money, total: Money) -> PaymentStatus:
        if balance.is_zero:
            return PaymentStatus.PAID
        if balance < total:
            return PaymentStatus.PARTIAL
        return PaymentStatus.UNPAID


@dataclass(frozen=True)
class InvoiceItem:
    """Snapshot of a product at invoice-creation time plus computed amounts."""

    product_id: str
    product_name: str
    unit: str
    hsn_code: str
    quantity: Quantity
    unit_price: Money  # locked at invoice-creation time
    tax_rate: TaxRate
    tax_amount: Money
    line_total: Money


@dataclass
class Invoice:
    """Aggregate root for sales invoices.

    Use the ``Invoice.create()`` factory for new invoices. The
    ``__init__`` is intentionally simple so the repository can
    reconstitute persisted invoices without re-validating.

    Invariants:
    - ``0 <= balance <= total_amount``
    - ``total_amount`` equals the sum of line totals
    """

    id: str
    invoice_number: str
    customer_id: str
    customer_name: str
    items: tuple[InvoiceItem, ...]
    total_amount: Money
    balance: Money
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    due_date: datetime | None = None
    version: int = field(default=0, compare=False)

    # --- Factory (used for NEW invoices only) ---------------------------------

    @staticmethod
    def create(
        id: str,
        invoice_number: str,
        customer_id: str,
        customer_name: str,
        items: list[InvoiceItem],
        due_date: datetime | None = None,
    ) -> Invoice:
        if not items:
            raise InvalidLineItem("Invoice must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Invoice(
            id=id,
            invoice_number=invoice_number,
            customer_id=customer_id,
            customer_name=customer_name,
            items=tuple(items),
            total_amount=total,
            balance=total,
            due_date=due_date,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def payment_status(self) -> PaymentStatus:
        return PaymentStatus.for_balance(self.balance, self.total_amount)

    @property
    def amount_paid(self) -> Money:
        return self.total_amount - self.balance

    @property
    def tax_total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.tax_amount
        return result

    # --- Balance movements ----------------------------------------------------

    def apply_payment(self, amount: Money) -> None:
        """Reduce the balance by *amount* (Payment Allocator only)."""
        if amount.is_zero:
            raise InvalidAmount("Payment amount must be greater than zero")
        if self.balance.is_zero:
            raise InvoiceAlreadyPaid(f"Invoice {self.invoice_number} is already paid")
        if amount > self.balance:
            raise Overpayment(
                f"Payment {amount} exceeds outstanding balance {self.balance} "
                f"on invoice {self.invoice_number}"
            )
        self.balance = self.balance - amount
