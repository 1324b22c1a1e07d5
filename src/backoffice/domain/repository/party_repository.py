"""Abstract repositories for Customer and Supplier aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.party import Customer, Supplier


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def add(self, customer: Customer) -> None:
        """Register a new customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Mark a loaded customer as changed."""

    @abstractmethod
    def delete(self, customer: Customer) -> None:
        """Remove a loaded customer."""


class SupplierRepository(ABC):

    @abstractmethod
    def get_by_id(self, supplier_id: str) -> Supplier | None:
        """Return a supplier by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every supplier."""

    @abstractmethod
    def add(self, supplier: Supplier) -> None:
        """Register a new supplier."""

    @abstractmethod
    def save(self, supplier: Supplier) -> None:
        """Mark a loaded supplier as changed."""

    @abstractmethod
    def delete(self, supplier: Supplier) -> None:
        """Remove a loaded supplier."""
