"""Domain service: Stock Ledger.

The only component allowed to move ``Product.stock_quantity``. Every
call registers its changes with the unit of work it was given; nothing
is visible to other callers until the orchestrating handler commits.
Because the product's version is checked at commit, two concurrent
reservations against the same product can never both succeed when
together they exceed the stock.

``reserve_all`` uses a two-phase approach (validate-then-mutate) so a
multi-line reservation never leaves a product partially reserved when a
later line fails.
"""

from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal

from backoffice.domain.exceptions import InsufficientStock, ProductNotFound
from backoffice.domain.model.product import Product
from backoffice.domain.repository.unit_of_work import AbstractUnitOfWork


class StockLedger:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def reserve(self, product_id: str, quantity: Decimal) -> Product:
        """Take *quantity* out of stock, failing if not enough is on hand."""
        product = self._load(product_id)
        product.withdraw(quantity)
        self._uow.products.save(product)
        return product

    def reserve_all(self, lines: list[tuple[str, Decimal]]) -> None:
        """Reserve stock for several lines at once.

        Phase 1 — load and validate: sum the requested quantity per
                  product and check it against current stock. Fails
                  fast before any mutation.
        Phase 2 — mutate: withdraw from each product.
        """
        wanted: OrderedDict[str, Decimal] = OrderedDict()
        for product_id, qty in lines:
            wanted[product_id] = wanted.get(product_id, Decimal("0")) + qty

        # Phase 1: load all products and validate
        checked: list[tuple[Product, Decimal]] = []
        for product_id, qty in wanted.items():
            product = self._load(product_id)
            if qty > product.stock_quantity:
                raise InsufficientStock(product.name, qty, product.stock_quantity)
            checked.append((product, qty))

        # Phase 2: mutate
        for product, qty in checked:
            product.withdraw(qty)
            self._uow.products.save(product)

    def release(self, product_id: str, quantity: Decimal) -> Product:
        """Put *quantity* back into stock (reversal or goods received)."""
        product = self._load(product_id)
        product.restock(quantity)
        self._uow.products.save(product)
        return product

    def release_all(self, lines: list[tuple[str, Decimal]]) -> None:
        for product_id, qty in lines:
            self.release(product_id, qty)

    def set_level(self, product_id: str, quantity: Decimal) -> Product:
        """Overwrite the stock level after a physical count."""
        product = self._load(product_id)
        product.recount(quantity)
        self._uow.products.save(product)
        return product

    def _load(self, product_id: str) -> Product:
        product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product '{product_id}' not found")
        return product
