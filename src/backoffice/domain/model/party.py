"""Trading partners: customers we invoice and suppliers we buy from."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from backoffice.domain.exceptions import InvariantViolation, ValidationError
from backoffice.domain.model.value_objects import Money


def _require_name(name: str, kind: str) -> str:
    if not name or not name.strip():
        raise ValidationError(f"{kind} name is required")
    return name.strip()


def _revise_contact(party, name, phone, email, address, tax_id) -> None:
    if name is not None:
        party.name = _require_name(name, type(party).__name__)
    for attr, value in (
        ("phone", phone),
        ("email", email),
        ("address", address),
        ("tax_id", tax_id),
    ):
        if value is not None:
            setattr(party, attr, value.strip())


@dataclass
class Customer:
    """Aggregate root for a customer account.

    ``outstanding_amount`` is the running sum of balances over the
    customer's current invoices. Only the Customer Balance Aggregator
    writes it, through ``apply_outstanding_delta``.
    """

    id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    tax_id: str = ""
    outstanding_amount: Money = field(default_factory=Money.zero)
    version: int = field(default=0, compare=False)

    @staticmethod
    def create(id: str, name: str, **contact: str) -> Customer:
        return Customer(id=id, name=_require_name(name, "Customer"), **contact)

    def update_contact(
        self,
        name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tax_id: str | None = None,
    ) -> None:
        _revise_contact(self, name, phone, email, address, tax_id)

    def apply_outstanding_delta(self, delta: Decimal) -> None:
        result = self.outstanding_amount.amount + delta
        if result < 0:
            raise InvariantViolation(
                f"Outstanding amount for {self.name} would become negative ({result})"
            )
        self.outstanding_amount = Money(result)


@dataclass
class Supplier:

    id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    tax_id: str = ""
    version: int = field(default=0, compare=False)

    @staticmethod
    def create(id: str, name: str, **contact: str) -> Supplier:
        return Supplier(id=id, name=_require_name(name, "Supplier"), **contact)

    def update_contact(
        self,
        name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tax_id: str | None = None,
    ) -> None:
        _revise_contact(self, name, phone, email, address, tax_id)
