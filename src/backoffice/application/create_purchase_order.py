"""Application service: Create Purchase Order use case.

Records what was ordered from a supplier at the current catalog price.
Stock is not touched until the goods are received.
"""

from __future__ import annotations

from backoffice.application.dto import LineItemSpec, PurchaseOrderDTO
from backoffice.application.line_items import parse_line_items
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import InvalidLineItem, SupplierNotFound
from backoffice.domain.model.purchase_order import POItem, PurchaseOrder
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.logging_config import LogContext, get_logger

logger = get_logger("application.create_purchase_order")


class CreatePurchaseOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, supplier_id: str, item_specs: list[LineItemSpec]) -> PurchaseOrderDTO:
        lines = parse_line_items(item_specs)

        def create() -> PurchaseOrder:
            with self._uow_factory() as uow:
                supplier = uow.suppliers.get_by_id(supplier_id)
                if supplier is None:
                    raise SupplierNotFound(f"Supplier '{supplier_id}' not found")

                items: list[POItem] = []
                for product_id, qty in lines:
                    product = uow.products.get_by_id(product_id)
                    if product is None:
                        raise InvalidLineItem(f"Product '{product_id}' not found")
                    items.append(
                        POItem(
                            product_id=product.id,
                            product_name=product.name,
                            quantity=Quantity(qty),
                            unit_price=product.price,  # <-- price snapshot
                        )
                    )
                    # Version bump orders this against a concurrent product delete.
                    uow.products.save(product)

                uow.suppliers.save(supplier)

                order = PurchaseOrder.create(
                    id=uow.new_id(),
                    po_number=uow.next_number("PO"),
                    supplier_id=supplier.id,
                    supplier_name=supplier.name,
                    items=items,
                )
                uow.purchase_orders.add(order)
                uow.commit()
                return order

        with LogContext.bind(operation="create_purchase_order"):
            order = self._retry.run(create)
            logger.info(
                "purchase_order_created",
                extra={
                    "po_number": order.po_number,
                    "supplier_id": order.supplier_id,
                    "total_amount": order.total_amount.amount,
                },
            )
        return PurchaseOrderDTO.from_domain(order)
