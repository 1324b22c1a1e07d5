"""Abstract repositories for Invoice aggregate and its Payments."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.invoice import Invoice
from backoffice.domain.model.payment import Payment


class InvoiceRepository(ABC):

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Invoice | None:
        """Return an invoice by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Invoice]:
        """Return every invoice, newest first."""

    @abstractmethod
    def list_for_customer(self, customer_id: str) -> list[Invoice]:
        """Return a customer's invoices, newest first."""

    @abstractmethod
    def add(self, invoice: Invoice) -> None:
        """Register a new invoice."""

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        """Mark a loaded invoice as changed."""

    @abstractmethod
    def delete(self, invoice: Invoice) -> None:
        """Remove a loaded invoice."""


class PaymentRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Payment]:
        """Return every payment, newest first."""

    @abstractmethod
    def list_for_invoice(self, invoice_id: str) -> list[Payment]:
        """Return the payments recorded against one invoice."""

    @abstractmethod
    def add(self, payment: Payment) -> None:
        """Append a new payment."""

    @abstractmethod
    def delete(self, payment: Payment) -> None:
        """Remove a payment (invoice reversal only)."""
