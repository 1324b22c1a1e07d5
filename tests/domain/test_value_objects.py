"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import Money, Quantity, TaxRate, round_money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_goes_through_str(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(1.5)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_decimal(self):
        assert Money.of("7.50") * Decimal("1.5") == Money.of("11.25")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00"
        assert str(Money.of("9.5")) == "9.50"

    def test_str_rounds_half_up(self):
        assert str(Money.of("0.125")) == "0.13"
        assert str(Money.of("16.665")) == "16.67"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")

    def test_is_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


class TestRounding:

    def test_half_up(self):
        assert round_money(Decimal("0.125")) == Decimal("0.13")
        assert round_money(Decimal("0.124")) == Decimal("0.12")


# ── Quantity / TaxRate ───────────────────────────────────────────────────────


class TestQuantity:

    def test_decimal_quantity(self):
        assert Quantity.of("2.5").value == Decimal("2.5")

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity.of(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity.of("-3")

    def test_str_drops_trailing_zeros(self):
        assert str(Quantity(Decimal("3.000"))) == "3"


class TestTaxRate:

    def test_bounds_inclusive(self):
        assert TaxRate.of(0).percent == 0
        assert TaxRate.of(100).percent == 100

    def test_above_hundred_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            TaxRate.of("100.01")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            TaxRate.of("-1")
