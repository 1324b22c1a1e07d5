"""PurchaseOrder aggregate — goods ordered from a supplier.

Stock is not touched when a purchase order is raised; it is credited
only when the goods are received. Status changes are one-way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import InvalidLineItem, InvalidStateTransition
from backoffice.domain.model.value_objects import Money, Quantity, round_money


class POStatus(Enum):
    PENDING = "pending"
    RECEIVED = "received"
    CANCELLED = "cancelled"


# Allowed transitions; terminal statuses map to nothing.
_TRANSITIONS: dict[POStatus, frozenset[POStatus]] = {
    POStatus.PENDING: frozenset({POStatus.RECEIVED, POStatus.CANCELLED}),
    POStatus.RECEIVED: frozenset(),
    POStatus.CANCELLED: frozenset(),
}


def check_transition(current: POStatus, target: POStatus) -> None:
    if target not in _TRANSITIONS[current]:
        raise InvalidStateTransition(
            f"Cannot move purchase order from {current.value} to {target.value}"
        )


@dataclass(frozen=True)
class POItem:
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order time

    @property
    def line_total(self) -> Money:
        return Money(round_money(self.unit_price.amount * self.quantity.value))


@dataclass
class PurchaseOrder:
    id: str
    po_number: str
    supplier_id: str
    supplier_name: str
    items: tuple[POItem, ...]
    status: POStatus = POStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    received_at: datetime | None = None
    version: int = field(default=0, compare=False)

    @staticmethod
    def create(
        id: str,
        po_number: str,
        supplier_id: str,
        supplier_name: str,
        items: list[POItem],
    ) -> PurchaseOrder:
        if not items:
            raise InvalidLineItem("Purchase order must contain at least one item")
        return PurchaseOrder(
            id=id,
            po_number=po_number,
            supplier_id=supplier_id,
            supplier_name=supplier_name,
            items=tuple(items),
        )

    @property
    def total_amount(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    # --- State transitions ----------------------------------------------------

    def receive(self) -> None:
        """Transition PENDING -> RECEIVED.

        Crediting stock must happen in the same unit of work
        (coordinated by the application handler via the Stock Ledger).
        """
        check_transition(self.status, POStatus.RECEIVED)
        self.status = POStatus.RECEIVED
        self.received_at = datetime.now(timezone.utc)

    def cancel(self) -> None:
        check_transition(self.status, POStatus.CANCELLED)
        self.status = POStatus.CANCELLED
