"""Unit tests for the pure invoice pricing functions."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import InvalidLineItem
from backoffice.domain.service.invoice_pricing import PricingLine, price_line, price_lines


def _line(price="100", rate="18", qty="2"):
    return PricingLine(unit_price=Decimal(price), tax_rate=Decimal(rate), quantity=Decimal(qty))


class TestPriceLine:

    def test_reference_scenario(self):
        priced = price_line(_line("100", "18", "2"))
        assert priced.tax_amount.amount == Decimal("36.00")
        assert priced.line_total.amount == Decimal("236.00")

    def test_tax_rounded_half_up_per_line(self):
        # 3 x 0.35 = 1.05; 5% of that is 0.0525 -> 0.05
        priced = price_line(_line("0.35", "5", "3"))
        assert priced.tax_amount.amount == Decimal("0.05")
        assert priced.line_total.amount == Decimal("1.10")

    def test_fractional_quantity_rounded_to_cents(self):
        # 0.5 kg x 33.33 = 16.665 -> 16.67
        priced = price_line(_line("33.33", "0", "0.5"))
        assert priced.line_total.amount == Decimal("16.67")

    def test_tax_on_rounded_subtotal(self):
        # 1.5 x 3.33 = 4.995 -> 5.00; 18% -> 0.90
        priced = price_line(_line("3.33", "18", "1.5"))
        assert priced.tax_amount.amount == Decimal("0.90")
        assert priced.line_total.amount == Decimal("5.90")

    def test_zero_tax(self):
        priced = price_line(_line("9.99", "0", "1"))
        assert priced.tax_amount.amount == Decimal("0.00")
        assert priced.line_total.amount == Decimal("9.99")

    def test_zero_quantity_rejected(self):
        with pytest.raises(InvalidLineItem, match="must be positive"):
            price_line(_line(qty="0"))

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidLineItem, match="cannot be negative"):
            price_line(_line(price="-1"))

    def test_tax_rate_out_of_range_rejected(self):
        with pytest.raises(InvalidLineItem, match="between 0 and 100"):
            price_line(_line(rate="101"))

    def test_label_used_in_errors(self):
        with pytest.raises(InvalidLineItem, match="Gadget"):
            price_line(PricingLine(Decimal("1"), Decimal("5"), Decimal("-1"), label="Gadget"))


class TestPriceLines:

    def test_total_is_sum_of_rounded_lines(self):
        # Each line: 0.0525 tax -> 0.05; rounding once on the total would give 0.11
        lines = [_line("0.35", "5", "3"), _line("0.35", "5", "3")]
        priced = price_lines(lines)
        assert priced.total_amount.amount == Decimal("2.20")
        assert sum(p.line_total.amount for p in priced.lines) == priced.total_amount.amount

    def test_one_bad_line_rejects_all(self):
        with pytest.raises(InvalidLineItem):
            price_lines([_line(), _line(qty="-2")])
