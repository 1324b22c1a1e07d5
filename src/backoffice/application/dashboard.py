"""Application service: Dashboard use case (query).

Business overview figures. Reads are not linearizable with in-flight
writes; every figure reflects some committed state.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from backoffice.application.dto import DashboardDTO, InvoiceDTO, ProductDTO
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory

RECENT_INVOICES = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    def handle(self) -> DashboardDTO:
        now = self._clock()
        with self._uow_factory() as uow:
            customers = uow.customers.list_all()
            products = uow.products.list_all()
            invoices = uow.invoices.list_all()

        low_stock = [p for p in products if p.is_low_stock]

        outstanding = Money.zero()
        for customer in customers:
            outstanding = outstanding + customer.outstanding_amount

        today = Money.zero()
        month = Money.zero()
        for invoice in invoices:
            created = invoice.created_at.astimezone(timezone.utc)
            if (created.year, created.month) == (now.year, now.month):
                month = month + invoice.total_amount
                if created.date() == now.date():
                    today = today + invoice.total_amount

        return DashboardDTO(
            total_customers=len(customers),
            total_products=len(products),
            low_stock_items=len(low_stock),
            total_outstanding=str(outstanding),
            today_sales=str(today),
            month_sales=str(month),
            low_stock=[ProductDTO.from_domain(p) for p in low_stock],
            recent_invoices=[InvoiceDTO.from_domain(i) for i in invoices[:RECENT_INVOICES]],
        )
