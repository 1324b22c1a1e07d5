"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import ProductDTO
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money, TaxRate, to_decimal
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class AddProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        sku: str,
        unit: str,
        price: str | Decimal,
        tax_rate: str | Decimal,
        stock_quantity: str | Decimal = "0",
        reorder_level: str | Decimal = "0",
        description: str = "",
        hsn_code: str = "",
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")

        stock = to_decimal(stock_quantity, "stock quantity")
        reorder = to_decimal(reorder_level, "reorder level")
        if stock < 0 or reorder < 0:
            raise ValidationError("Stock quantity and reorder level cannot be negative")

        with self._uow_factory() as uow:
            if uow.products.get_by_sku(sku) is not None:
                raise ValidationError(f"Product with SKU '{sku.strip()}' already exists")

            product = Product(
                id=uow.new_id(),
                name=name.strip(),
                sku=sku.strip(),
                unit=(unit or "").strip(),
                price=Money.of(price),
                tax_rate=TaxRate.of(tax_rate),
                stock_quantity=stock,
                reorder_level=reorder,
                description=description.strip(),
                hsn_code=hsn_code.strip(),
            )
            uow.products.add(product)
            uow.commit()
        return ProductDTO.from_domain(product)
