"""Unit tests for the Invoice, Product and Customer aggregates."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import (
    InsufficientStock,
    InvalidAmount,
    InvalidLineItem,
    InvariantViolation,
    InvoiceAlreadyPaid,
    Overpayment,
    ValidationError,
)
from backoffice.domain.model.invoice import Invoice, InvoiceItem, PaymentStatus
from backoffice.domain.model.payment import PaymentMethod
from backoffice.domain.model.value_objects import Money, Quantity, TaxRate
from tests.fakes import make_customer, make_product


def _item(line_total: str = "236.00") -> InvoiceItem:
    return InvoiceItem(
        product_id="p1",
        product_name="Widget",
        unit="pcs",
        hsn_code="",
        quantity=Quantity.of(2),
        unit_price=Money.of("100"),
        tax_rate=TaxRate.of("18"),
        tax_amount=Money.of("36.00"),
        line_total=Money.of(line_total),
    )


def _invoice(*totals: str) -> Invoice:
    return Invoice.create(
        id="i1",
        invoice_number="INV-00001",
        customer_id="c1",
        customer_name="Alice",
        items=[_item(t) for t in totals or ("236.00",)],
    )


class TestInvoiceCreate:

    def test_total_and_balance(self):
        invoice = _invoice("236.00", "10.00")
        assert invoice.total_amount == Money.of("246.00")
        assert invoice.balance == invoice.total_amount
        assert invoice.payment_status is PaymentStatus.UNPAID

    def test_empty_invoice_rejected(self):
        with pytest.raises(InvalidLineItem, match="at least one item"):
            Invoice.create("i1", "INV-1", "c1", "Alice", items=[])

    def test_items_are_frozen(self):
        invoice = _invoice()
        assert isinstance(invoice.items, tuple)
        with pytest.raises(AttributeError):
            invoice.items[0].quantity = Quantity.of(5)


class TestPaymentStatus:

    def test_partial_then_paid(self):
        invoice = _invoice()
        invoice.apply_payment(Money.of("100"))
        assert invoice.balance == Money.of("136.00")
        assert invoice.payment_status is PaymentStatus.PARTIAL

        invoice.apply_payment(Money.of("136"))
        assert invoice.balance.is_zero
        assert invoice.payment_status is PaymentStatus.PAID
        assert invoice.amount_paid == invoice.total_amount

    def test_overpayment_rejected_and_balance_unchanged(self):
        invoice = _invoice()
        with pytest.raises(Overpayment, match="exceeds outstanding balance"):
            invoice.apply_payment(Money.of("236.01"))
        assert invoice.balance == Money.of("236.00")

    def test_payment_on_paid_invoice_rejected(self):
        invoice = _invoice()
        invoice.apply_payment(Money.of("236"))
        with pytest.raises(InvoiceAlreadyPaid):
            invoice.apply_payment(Money.of("1"))

    def test_zero_payment_rejected(self):
        with pytest.raises(InvalidAmount):
            _invoice().apply_payment(Money.zero())

    def test_zero_total_invoice_is_paid(self):
        assert PaymentStatus.for_balance(Money.zero(), Money.zero()) is PaymentStatus.PAID


class TestProductStock:

    def test_withdraw_and_restock(self):
        product = make_product(stock="5")
        product.withdraw(Decimal("3"))
        assert product.stock_quantity == Decimal("2")
        product.restock(Decimal("4"))
        assert product.stock_quantity == Decimal("6")

    def test_withdraw_more_than_stock_rejected(self):
        product = make_product(stock="5")
        with pytest.raises(InsufficientStock, match="Insufficient stock for Widget"):
            product.withdraw(Decimal("6"))
        assert product.stock_quantity == Decimal("5")

    def test_recount_cannot_go_negative(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            make_product().recount(Decimal("-1"))

    def test_low_stock_at_reorder_level(self):
        assert make_product(stock="2", reorder_level="2").is_low_stock
        assert not make_product(stock="3", reorder_level="2").is_low_stock


class TestCustomer:

    def test_outstanding_delta(self):
        customer = make_customer()
        customer.apply_outstanding_delta(Decimal("236.00"))
        customer.apply_outstanding_delta(Decimal("-100"))
        assert customer.outstanding_amount == Money.of("136.00")

    def test_outstanding_cannot_go_negative(self):
        with pytest.raises(InvariantViolation, match="would become negative"):
            make_customer().apply_outstanding_delta(Decimal("-1"))


class TestPaymentMethod:

    def test_parse_case_insensitive(self):
        assert PaymentMethod.parse("UPI") is PaymentMethod.UPI

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError, match="Unknown payment method"):
            PaymentMethod.parse("cheque")
