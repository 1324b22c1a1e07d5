"""Application service: Show / List Purchase Orders use cases (queries)."""

from __future__ import annotations

from backoffice.application.dto import PurchaseOrderDTO
from backoffice.domain.exceptions import PONotFound
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowPurchaseOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, po_id: str) -> PurchaseOrderDTO:
        with self._uow_factory() as uow:
            order = uow.purchase_orders.get_by_id(po_id)
            if order is None:
                raise PONotFound(f"Purchase order '{po_id}' not found")
            return PurchaseOrderDTO.from_domain(order)


class ListPurchaseOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[PurchaseOrderDTO]:
        with self._uow_factory() as uow:
            return [PurchaseOrderDTO.from_domain(o) for o in uow.purchase_orders.list_all()]
