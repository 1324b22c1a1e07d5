"""Application service: Update Product use case."""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import ProductDTO
from backoffice.application.retry import RetryPolicy
from backoffice.domain.exceptions import ProductNotFound, ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money, TaxRate, to_decimal
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class UpdateProductHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry = retry or RetryPolicy()

    def handle(
        self,
        product_id: str,
        new_price: str | Decimal | None = None,
        new_tax_rate: str | Decimal | None = None,
        name: str | None = None,
        sku: str | None = None,
        unit: str | None = None,
        description: str | None = None,
        hsn_code: str | None = None,
        reorder_level: str | Decimal | None = None,
    ) -> ProductDTO:
        """Update a product's catalog details, price and/or tax rate.

        Fields left as None are unchanged. This does NOT affect any
        existing invoices; they captured a price snapshot at creation
        time.
        """
        price = Money.of(new_price) if new_price is not None else None
        rate = TaxRate.of(new_tax_rate) if new_tax_rate is not None else None
        reorder = to_decimal(reorder_level, "reorder level") if reorder_level is not None else None

        def update() -> Product:
            with self._uow_factory() as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFound(f"Product with ID '{product_id}' not found")
                if sku is not None:
                    clash = uow.products.get_by_sku(sku)
                    if clash is not None and clash.id != product.id:
                        raise ValidationError(f"Product with SKU '{sku.strip()}' already exists")
                product.revise(
                    name=name,
                    sku=sku,
                    unit=unit,
                    description=description,
                    hsn_code=hsn_code,
                    reorder_level=reorder,
                )
                if price is not None:
                    product.update_price(price)
                if rate is not None:
                    product.tax_rate = rate
                uow.products.save(product)
                uow.commit()
                return product

        return ProductDTO.from_domain(self._retry.run(update))
