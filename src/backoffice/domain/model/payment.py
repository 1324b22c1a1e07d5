"""Payment record — append-only receipt against one invoice."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import Money


class PaymentMethod(Enum):
    CASH = "cash"
    UPI = "upi"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"

    @staticmethod
    def parse(raw: str | PaymentMethod) -> PaymentMethod:
        if isinstance(raw, PaymentMethod):
            return raw
        try:
            return PaymentMethod(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method '{raw}' (expected one of: {allowed})"
            ) from None


@dataclass(frozen=True)
class Payment:
    id: str
    payment_number: str
    invoice_id: str
    invoice_number: str
    customer_id: str
    amount: Money
    method: PaymentMethod
    reference_number: str = ""
    notes: str = ""
    payment_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = field(default=0, compare=False)
