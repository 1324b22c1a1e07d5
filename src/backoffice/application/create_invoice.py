"""Application service: Create Invoice use case.

The invoice, the stock reservations and the customer's outstanding
amount are written in one unit of work:

1. Resolve the customer and every product (fail if not found).
2. Snapshot name/unit/price/tax rate and price every line.
3. Reserve stock for all lines (two-phase, no partial reservation).
4. Persist the invoice with balance = total.
5. Add the total to the customer's outstanding amount.
6. Commit once.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from backoffice.application.dto import InvoiceDTO, LineItemSpec
from backoffice.application.line_items import parse_line_items
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import CustomerNotFound, InvalidLineItem
from backoffice.domain.model.invoice import Invoice, InvoiceItem
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.unit_of_work import AbstractUnitOfWork, UnitOfWorkFactory
from backoffice.domain.service.customer_balance import CustomerBalanceAggregator
from backoffice.domain.service.invoice_pricing import PricingLine, price_lines
from backoffice.domain.service.stock_ledger import StockLedger
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.create_invoice")


class CreateInvoiceHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(
        self,
        customer_id: str,
        item_specs: list[LineItemSpec],
        due_date: datetime | None = None,
    ) -> InvoiceDTO:
        lines = parse_line_items(item_specs)

        with LogContext.bind(operation="create_invoice"):
            invoice = self._retry.run(lambda: self._create(customer_id, lines, due_date))
            logger.info(
                "invoice_created",
                extra={
                    "invoice_number": invoice.invoice_number,
                    "customer_id": invoice.customer_id,
                    "total_amount": invoice.total_amount.amount,
                    "products": [item.product_id for item in invoice.items],
                },
            )
        return InvoiceDTO.from_domain(invoice)

    def _create(
        self,
        customer_id: str,
        lines: list[tuple[str, Decimal]],
        due_date: datetime | None,
    ) -> Invoice:
        with self._uow_factory() as uow:
            customer = uow.customers.get_by_id(customer_id)
            if customer is None:
                raise CustomerNotFound(f"Customer '{customer_id}' not found")

            products = [self._product(uow, product_id) for product_id, _ in lines]

            priced = price_lines([
                PricingLine(
                    unit_price=product.price.amount,
                    tax_rate=product.tax_rate.percent,
                    quantity=qty,
                    label=product.name,
                )
                for product, (_, qty) in zip(products, lines)
            ])

            # Snapshot before stock moves so the item reflects what was sold.
            items = [
                InvoiceItem(
                    product_id=product.id,
                    product_name=product.name,
                    unit=product.unit,
                    hsn_code=product.hsn_code,
                    quantity=Quantity(qty),
                    unit_price=p.unit_price,
                    tax_rate=product.tax_rate,
                    tax_amount=p.tax_amount,
                    line_total=p.line_total,
                )
                for product, (_, qty), p in zip(products, lines, priced.lines)
            ]

            StockLedger(uow).reserve_all(lines)

            invoice = Invoice.create(
                id=uow.new_id(),
                invoice_number=uow.next_number("INV"),
                customer_id=customer.id,
                customer_name=customer.name,
                items=items,
                due_date=due_date,
            )
            uow.invoices.add(invoice)

            CustomerBalanceAggregator(uow).adjust(customer.id, invoice.total_amount.amount)
            # Written even for a zero total, so a concurrent customer delete conflicts.
            uow.customers.save(customer)

            uow.commit()
            return invoice

    @staticmethod
    def _product(uow: AbstractUnitOfWork, product_id: str) -> Product:
        product = uow.products.get_by_id(product_id)
        if product is None:
            raise InvalidLineItem(f"Product '{product_id}' not found")
        return product
