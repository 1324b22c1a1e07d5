"""Abstract repository for PurchaseOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.purchase_order import PurchaseOrder


class PurchaseOrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, po_id: str) -> PurchaseOrder | None:
        """Return a purchase order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PurchaseOrder]:
        """Return every purchase order, newest first."""

    @abstractmethod
    def add(self, order: PurchaseOrder) -> None:
        """Register a new purchase order."""

    @abstractmethod
    def save(self, order: PurchaseOrder) -> None:
        """Mark a loaded purchase order as changed."""
