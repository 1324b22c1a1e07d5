"""Invoice Pricing — pure computation of line taxes and totals.

No repository access and no side effects: given price/tax snapshots and
quantities, return the amounts that will be frozen on the invoice.

The line subtotal and its tax are each rounded half-up to two places
before summing, so every total is a whole number of cents and equals the
sum of the figures printed per line.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from backoffice.domain.exceptions import InvalidLineItem
from backoffice.domain.model.value_objects import Money, round_money

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PricingLine:
    """Input: one line as (unit price, tax rate %, quantity)."""

    unit_price: Decimal
    tax_rate: Decimal
    quantity: Decimal
    label: str = ""


@dataclass(frozen=True)
class PricedLine:
    unit_price: Money
    quantity: Decimal
    tax_amount: Money
    line_total: Money


@dataclass(frozen=True)
class PricedInvoice:
    lines: tuple[PricedLine, ...]
    total_amount: Money


def price_line(line: PricingLine) -> PricedLine:
    name = line.label or "line item"
    if line.quantity <= 0:
        raise InvalidLineItem(f"Quantity for {name} must be positive, got {line.quantity}")
    if line.unit_price < 0:
        raise InvalidLineItem(f"Unit price for {name} cannot be negative, got {line.unit_price}")
    if not 0 <= line.tax_rate <= _HUNDRED:
        raise InvalidLineItem(
            f"Tax rate for {name} must be between 0 and 100, got {line.tax_rate}"
        )

    subtotal = round_money(line.quantity * line.unit_price)
    tax = round_money(subtotal * line.tax_rate / _HUNDRED)
    return PricedLine(
        unit_price=Money(line.unit_price),
        quantity=line.quantity,
        tax_amount=Money(tax),
        line_total=Money(subtotal + tax),
    )


def price_lines(lines: list[PricingLine]) -> PricedInvoice:
    priced = tuple(price_line(line) for line in lines)
    total = Money.zero()
    for p in priced:
        total = total + p.line_total
    return PricedInvoice(lines=priced, total_amount=total)
