"""Application service: Receive Purchase Order use case.

Credits every line's quantity to stock and marks the order received, in
one unit of work. The status check happens first, so a second receive
fails with InvalidStateTransition and never credits stock twice; a
concurrent double receive loses the version check on the order.
"""

from __future__ import annotations

from backoffice.application.dto import PurchaseOrderDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import PONotFound
from backoffice.domain.model.purchase_order import PurchaseOrder
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.domain.service.stock_ledger import StockLedger
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.receive_purchase_order")


class ReceivePurchaseOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, po_id: str) -> PurchaseOrderDTO:
        with LogContext.bind(operation="receive_purchase_order"):
            order = self._retry.run(lambda: self._receive(po_id))
            logger.info(
                "purchase_order_received",
                extra={
                    "po_number": order.po_number,
                    "products": [item.product_id for item in order.items],
                },
            )
        return PurchaseOrderDTO.from_domain(order)

    def _receive(self, po_id: str) -> PurchaseOrder:
        with self._uow_factory() as uow:
            order = uow.purchase_orders.get_by_id(po_id)
            if order is None:
                raise PONotFound(f"Purchase order '{po_id}' not found")

            order.receive()
            StockLedger(uow).release_all(
                [(item.product_id, item.quantity.value) for item in order.items]
            )
            uow.purchase_orders.save(order)
            uow.commit()
            return order
