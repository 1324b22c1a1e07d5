"""Shape validation for incoming line items.

Runs before any unit of work is opened, so malformed requests never
touch an aggregate.
"""

from __future__ import annotations

from decimal import Decimal

from backoffice.application.dto import LineItemSpec
from backoffice.domain.exceptions import InvalidLineItem, ValidationError
from backoffice.domain.model.value_objects import to_decimal

MAX_LINE_ITEMS = 100


def parse_line_items(specs: list[LineItemSpec]) -> list[tuple[str, Decimal]]:
    if not specs:
        raise InvalidLineItem("At least one line item is required")
    if len(specs) > MAX_LINE_ITEMS:
        raise InvalidLineItem(f"Maximum {MAX_LINE_ITEMS} line items per document")

    parsed: list[tuple[str, Decimal]] = []
    for n, spec in enumerate(specs, start=1):
        if not spec.product_id or not str(spec.product_id).strip():
            raise InvalidLineItem(f"Line {n}: product is required")
        try:
            qty = to_decimal(spec.quantity, "quantity")
        except ValidationError as exc:
            raise InvalidLineItem(f"Line {n}: {exc}") from exc
        if qty <= 0:
            raise InvalidLineItem(f"Line {n}: quantity must be positive, got {qty}")
        parsed.append((str(spec.product_id).strip(), qty))
    return parsed
