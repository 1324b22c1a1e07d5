"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Amounts are formatted
strings with two decimals, e.g. ``"236.00"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from backoffice.domain.model.invoice import Invoice
from backoffice.domain.model.party import Customer, Supplier
from backoffice.domain.model.payment import Payment
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase_order import PurchaseOrder

_TS = "%Y-%m-%d %H:%M UTC"


def _qty(value: Decimal) -> str:
    return f"{value.normalize():f}"


@dataclass(frozen=True)
class LineItemSpec:
    """Input: what the caller asked for (product id + quantity)."""

    product_id: str
    quantity: str | int | Decimal


@dataclass(frozen=True)
class InvoiceItemDTO:
    product_id: str
    product_name: str
    unit: str
    quantity: str
    unit_price: str
    tax_rate: str
    tax_amount: str
    line_total: str


@dataclass(frozen=True)
class InvoiceDTO:
    id: str
    invoice_number: str
    customer_id: str
    customer_name: str
    items: list[InvoiceItemDTO]
    total_amount: str
    tax_total: str
    balance: str
    payment_status: str
    created_at: str
    due_date: str | None

    @staticmethod
    def from_domain(invoice: Invoice) -> InvoiceDTO:
        return InvoiceDTO(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_id=invoice.customer_id,
            customer_name=invoice.customer_name,
            items=[
                InvoiceItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    unit=item.unit,
                    quantity=_qty(item.quantity.value),
                    unit_price=str(item.unit_price),
                    tax_rate=str(item.tax_rate),
                    tax_amount=str(item.tax_amount),
                    line_total=str(item.line_total),
                )
                for item in invoice.items
            ],
            total_amount=str(invoice.total_amount),
            tax_total=str(invoice.tax_total),
            balance=str(invoice.balance),
            payment_status=invoice.payment_status.value,
            created_at=invoice.created_at.strftime(_TS),
            due_date=invoice.due_date.strftime("%Y-%m-%d") if invoice.due_date else None,
        )


@dataclass(frozen=True)
class PaymentDTO:
    id: str
    payment_number: str
    invoice_id: str
    invoice_number: str
    amount: str
    method: str
    reference_number: str
    notes: str
    payment_date: str

    @staticmethod
    def from_domain(payment: Payment) -> PaymentDTO:
        return PaymentDTO(
            id=payment.id,
            payment_number=payment.payment_number,
            invoice_id=payment.invoice_id,
            invoice_number=payment.invoice_number,
            amount=str(payment.amount),
            method=payment.method.value,
            reference_number=payment.reference_number,
            notes=payment.notes,
            payment_date=payment.payment_date.strftime(_TS),
        )


@dataclass(frozen=True)
class POItemDTO:
    product_id: str
    product_name: str
    quantity: str
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class PurchaseOrderDTO:
    id: str
    po_number: str
    supplier_id: str
    supplier_name: str
    status: str
    items: list[POItemDTO]
    total_amount: str
    created_at: str

    @staticmethod
    def from_domain(order: PurchaseOrder) -> PurchaseOrderDTO:
        return PurchaseOrderDTO(
            id=order.id,
            po_number=order.po_number,
            supplier_id=order.supplier_id,
            supplier_name=order.supplier_name,
            status=order.status.value,
            items=[
                POItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=_qty(item.quantity.value),
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total_amount=str(order.total_amount),
            created_at=order.created_at.strftime(_TS),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    sku: str
    unit: str
    price: str
    tax_rate: str
    stock_quantity: str
    reorder_level: str
    low_stock: bool

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            sku=product.sku,
            unit=product.unit,
            price=str(product.price),
            tax_rate=str(product.tax_rate),
            stock_quantity=_qty(product.stock_quantity),
            reorder_level=_qty(product.reorder_level),
            low_stock=product.is_low_stock,
        )


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    phone: str
    email: str
    address: str
    tax_id: str
    outstanding_amount: str

    @staticmethod
    def from_domain(customer: Customer) -> CustomerDTO:
        return CustomerDTO(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            address=customer.address,
            tax_id=customer.tax_id,
            outstanding_amount=str(customer.outstanding_amount),
        )


@dataclass(frozen=True)
class SupplierDTO:
    id: str
    name: str
    phone: str
    email: str
    address: str
    tax_id: str

    @staticmethod
    def from_domain(supplier: Supplier) -> SupplierDTO:
        return SupplierDTO(
            id=supplier.id,
            name=supplier.name,
            phone=supplier.phone,
            email=supplier.email,
            address=supplier.address,
            tax_id=supplier.tax_id,
        )


@dataclass(frozen=True)
class CustomerStatementDTO:
    customer: CustomerDTO
    invoices: list[InvoiceDTO]


@dataclass(frozen=True)
class DashboardDTO:
    total_customers: int
    total_products: int
    low_stock_items: int
    total_outstanding: str
    today_sales: str
    month_sales: str
    low_stock: list[ProductDTO]
    recent_invoices: list[InvoiceDTO]
