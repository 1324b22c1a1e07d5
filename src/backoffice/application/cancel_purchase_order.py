"""Application service: Cancel Purchase Order use case.

Only pending orders can be cancelled. No stock effect, since nothing
was credited at creation time.
"""

from __future__ import annotations

from backoffice.application.dto import PurchaseOrderDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import PONotFound
from backoffice.domain.model.purchase_order import PurchaseOrder
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.cancel_purchase_order")


class CancelPurchaseOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, po_id: str) -> PurchaseOrderDTO:
        def cancel() -> PurchaseOrder:
            with self._uow_factory() as uow:
                order = uow.purchase_orders.get_by_id(po_id)
                if order is None:
                    raise PONotFound(f"Purchase order '{po_id}' not found")
                order.cancel()
                uow.purchase_orders.save(order)
                uow.commit()
                return order

        with LogContext.bind(operation="cancel_purchase_order"):
            order = self._retry.run(cancel)
            logger.info("purchase_order_cancelled", extra={"po_number": order.po_number})
        return PurchaseOrderDTO.from_domain(order)
