"""Application service: Delete Product use case.

A product still named on an invoice or on a pending purchase order is
kept: deleting that invoice returns stock to it, and receiving that order
credits stock to it. Creating an invoice or a purchase order also writes
the product, so a delete racing one loses the version check and
re-evaluates on retry.
"""

from __future__ import annotations

from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import EntityInUse, ProductNotFound
from backoffice.domain.model.purchase_order import POStatus
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.delete_product")


class DeleteProductHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, product_id: str) -> None:
        def delete() -> str:
            with self._uow_factory() as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFound(f"Product with ID '{product_id}' not found")

                for invoice in uow.invoices.list_all():
                    if any(item.product_id == product.id for item in invoice.items):
                        raise EntityInUse(
                            f"Product '{product.name}' appears on invoice {invoice.invoice_number}"
                        )
                for order in uow.purchase_orders.list_all():
                    if order.status is POStatus.PENDING and any(
                        item.product_id == product.id for item in order.items
                    ):
                        raise EntityInUse(
                            f"Product '{product.name}' is on pending purchase order {order.po_number}"
                        )

                uow.products.delete(product)
                uow.commit()
                return product.sku

        with LogContext.bind(operation="delete_product"):
            sku = self._retry.run(delete)
            logger.info("product_deleted", extra={"product_id": product_id, "sku": sku})
