"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from backoffice.application.dto import LineItemSpec
from backoffice.application.show_catalog import ListProductsHandler
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory


def parse_items(raw: str, uow_factory: UnitOfWorkFactory) -> list[LineItemSpec]:
    """Parse 'SKU-1:3,SKU-2:5' into LineItemSpec list.

    Each product may be given by SKU or by ID.
    """
    by_sku = {p.sku.lower(): p.id for p in ListProductsHandler(uow_factory).handle()}
    specs: list[LineItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Product:Quantity'."
            )
        ref, qty = pair.rsplit(":", 1)
        ref = ref.strip()
        specs.append(LineItemSpec(product_id=by_sku.get(ref.lower(), ref), quantity=qty.strip()))
    return specs


def parse_date(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{raw}'. Expected YYYY-MM-DD.")
