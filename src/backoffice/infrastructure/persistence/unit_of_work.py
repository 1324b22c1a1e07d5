"""Unit of work over an InMemoryStore (or any subclass of it).

Keeps an identity map so that every service touching the same aggregate
inside one operation shares one instance. The version each aggregate was
loaded at is the version expected at commit.
"""

from __future__ import annotations

import uuid
from typing import Any

from backoffice.domain.repository.unit_of_work import AbstractUnitOfWork
from backoffice.infrastructure.persistence.memory_store import InMemoryStore, Write
from backoffice.infrastructure.persistence.store_repositories import (
    StoreCustomerRepository,
    StoreInvoiceRepository,
    StorePaymentRepository,
    StoreProductRepository,
    StorePurchaseOrderRepository,
    StoreSupplierRepository,
)

_Key = tuple[str, str]


class StoreUnitOfWork(AbstractUnitOfWork):

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.products = StoreProductRepository(self)
        self.customers = StoreCustomerRepository(self)
        self.suppliers = StoreSupplierRepository(self)
        self.invoices = StoreInvoiceRepository(self)
        self.payments = StorePaymentRepository(self)
        self.purchase_orders = StorePurchaseOrderRepository(self)
        self._reset()

    # --- AbstractUnitOfWork ---------------------------------------------------

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def next_number(self, prefix: str) -> str:
        return f"{prefix}-{self._store.next_sequence(prefix):05d}"

    def commit(self) -> None:
        writes: list[Write] = []
        for (kind, key), record in self._new.items():
            writes.append(Write(kind, key, None, record))
        for kind, key in self._dirty:
            if (kind, key) in self._new or (kind, key) in self._deleted:
                continue
            record = self._loaded[(kind, key)]
            writes.append(Write(kind, key, record.version, record))
        for kind, key in self._deleted:
            record = self._loaded[(kind, key)]
            writes.append(Write(kind, key, record.version, None))
        try:
            self._store.commit(writes)
        finally:
            self._reset()

    def rollback(self) -> None:
        self._reset()

    # --- Repository plumbing --------------------------------------------------

    def _get(self, kind: str, key: str) -> Any | None:
        ident = (kind, key)
        if ident in self._deleted:
            return None
        if ident in self._new:
            return self._new[ident]
        if ident not in self._loaded:
            record = self._store.get(kind, key)
            if record is None:
                return None
            self._loaded[ident] = record
        return self._loaded[ident]

    def _list(self, kind: str) -> list[Any]:
        result = []
        for record in self._store.list_records(kind):
            ident = (kind, record.id)
            if ident in self._deleted:
                continue
            result.append(self._loaded.setdefault(ident, record))
        result.extend(r for (k, _), r in self._new.items() if k == kind)
        return result

    def _add(self, kind: str, record: Any) -> None:
        self._new[(kind, record.id)] = record

    def _save(self, kind: str, record: Any) -> None:
        ident = (kind, record.id)
        if ident in self._new:
            self._new[ident] = record
            return
        self._loaded[ident] = record
        self._dirty.add(ident)

    def _delete(self, kind: str, record: Any) -> None:
        ident = (kind, record.id)
        if ident in self._new:
            del self._new[ident]
            return
        self._loaded.setdefault(ident, record)
        self._deleted.add(ident)

    def _reset(self) -> None:
        self._loaded: dict[_Key, Any] = {}
        self._new: dict[_Key, Any] = {}
        self._dirty: set[_Key] = set()
        self._deleted: set[_Key] = set()
