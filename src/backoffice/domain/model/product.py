"""Product aggregate.

Products live independently of invoices. They have their own lifecycle:
prices change, products are added and removed from the catalog, and
stock moves up and down as goods are sold and received.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from backoffice.domain.exceptions import InsufficientStock, ValidationError
from backoffice.domain.model.value_objects import Money, TaxRate


@dataclass
class Product:
    """A product in the catalog.

    ``stock_quantity`` is owned by the Stock Ledger domain service; the
    ``withdraw``/``restock``/``recount`` methods below are its only
    callers.

    Invariants:
    - ``stock_quantity`` is always >= 0
    """

    id: str
    name: str
    sku: str
    unit: str
    price: Money
    tax_rate: TaxRate
    stock_quantity: Decimal = Decimal("0")
    reorder_level: Decimal = Decimal("0")
    description: str = ""
    hsn_code: str = ""
    version: int = field(default=0, compare=False)

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.reorder_level

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing invoices or purchase orders
        because they capture a price snapshot at creation time.
        """
        self.price = new_price

    def revise(
        self,
        name: str | None = None,
        sku: str | None = None,
        unit: str | None = None,
        description: str | None = None,
        hsn_code: str | None = None,
        reorder_level: Decimal | None = None,
    ) -> None:
        """Change catalog details. Fields left as None keep their value."""
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if sku is not None:
            if not sku.strip():
                raise ValidationError("Product SKU is required")
            self.sku = sku.strip()
        if unit is not None:
            self.unit = unit.strip()
        if description is not None:
            self.description = description.strip()
        if hsn_code is not None:
            self.hsn_code = hsn_code.strip()
        if reorder_level is not None:
            if reorder_level < 0:
                raise ValidationError("Reorder level cannot be negative")
            self.reorder_level = reorder_level

    # --- Stock movements (Stock Ledger only) ----------------------------------

    def withdraw(self, quantity: Decimal) -> None:
        if quantity <= 0:
            raise ValidationError("Withdrawal quantity must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStock(self.name, quantity, self.stock_quantity)
        self.stock_quantity -= quantity

    def restock(self, quantity: Decimal) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.stock_quantity += quantity

    def recount(self, quantity: Decimal) -> None:
        if quantity < 0:
            raise ValidationError("Stock level cannot be negative")
        self.stock_quantity = quantity
