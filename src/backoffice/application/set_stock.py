"""Application service: Set Stock use case (physical count correction)."""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import ProductDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.model.value_objects import to_decimal
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.domain.service.stock_ledger import StockLedger
from backoffice.logging_config import get_logger

logger = get_logger("application.set_stock")


class SetStockHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(self, product_id: str, quantity: str | Decimal) -> ProductDTO:
        """Overwrite the stock level of a product."""
        qty = to_decimal(quantity, "stock quantity")

        def set_level():
            with self._uow_factory() as uow:
                product = StockLedger(uow).set_level(product_id, qty)
                uow.commit()
                return product

        product = self._retry.run(set_level)
        logger.info("stock_level_set", extra={"product_id": product.id, "quantity": qty})
        return ProductDTO.from_domain(product)
