"""CLI commands for the PurchaseOrder aggregate."""

from __future__ import annotations

import click

from backoffice.application.cancel_purchase_order import CancelPurchaseOrderHandler
from backoffice.application.create_purchase_order import CreatePurchaseOrderHandler
from backoffice.application.dto import PurchaseOrderDTO
from backoffice.application.receive_purchase_order import ReceivePurchaseOrderHandler
from backoffice.application.show_purchase_order import (
    ListPurchaseOrdersHandler,
    ShowPurchaseOrderHandler,
)
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import retry_policy, uow_factory
from backoffice.infrastructure.cli.common import parse_items


def _display_order(dto: PurchaseOrderDTO) -> None:
    click.echo(f"Purchase order {dto.po_number}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Supplier: {dto.supplier_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>7} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*52}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>7} {item.unit_price:>10} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*52}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>25}")


@click.command("create")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID.")
@click.option("--items", required=True, help="Items as 'SKU:Qty,SKU:Qty'.")
def po_create(supplier_id: str, items: str) -> None:
    """Raise a purchase order (stock is credited on receipt)."""
    factory = uow_factory()
    specs = parse_items(items, factory)
    handler = CreatePurchaseOrderHandler(factory, retry_policy())

    try:
        dto = handler.handle(supplier_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "po_id", required=True, help="Purchase order ID.")
def po_show(po_id: str) -> None:
    """Show details of a purchase order."""
    try:
        dto = ShowPurchaseOrderHandler(uow_factory()).handle(po_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def po_list() -> None:
    """List purchase orders, newest first."""
    orders = ListPurchaseOrdersHandler(uow_factory()).handle()

    if not orders:
        click.echo("No purchase orders found.")
        return

    click.echo(f"{'Number':<10} {'Supplier':<20} {'Total':>12} {'Status':<10} ID")
    click.echo("-" * 90)
    for po in orders:
        click.echo(
            f"{po.po_number:<10} {po.supplier_name:<20} {po.total_amount:>12} {po.status:<10} {po.id}"
        )


@click.command("receive")
@click.option("--id", "po_id", required=True, help="Purchase order ID to receive.")
def po_receive(po_id: str) -> None:
    """Mark a purchase order received (credits stock)."""
    handler = ReceivePurchaseOrderHandler(uow_factory(), retry_policy())

    try:
        dto = handler.handle(po_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase order {dto.po_number} received, stock updated.")


@click.command("cancel")
@click.option("--id", "po_id", required=True, help="Purchase order ID to cancel.")
def po_cancel(po_id: str) -> None:
    """Cancel a pending purchase order."""
    handler = CancelPurchaseOrderHandler(uow_factory(), retry_policy())

    try:
        dto = handler.handle(po_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase order {dto.po_number} cancelled.")
