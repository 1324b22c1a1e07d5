"""Application service: catalog listings (queries)."""

from __future__ import annotations

from backoffice.application.dto import CustomerDTO, ProductDTO, SupplierDTO
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


class ListProductsHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            return [ProductDTO.from_domain(p) for p in uow.products.list_all()]


class ListCustomersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[CustomerDTO]:
        with self._uow_factory() as uow:
            return [CustomerDTO.from_domain(c) for c in uow.customers.list_all()]


class ListSuppliersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[SupplierDTO]:
        with self._uow_factory() as uow:
            return [SupplierDTO.from_domain(s) for s in uow.suppliers.list_all()]
