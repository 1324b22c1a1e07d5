"""CLI commands for the Invoice aggregate."""

from __future__ import annotations

import click

from backoffice.application.create_invoice import CreateInvoiceHandler
from backoffice.application.delete_invoice import DeleteInvoiceHandler
from backoffice.application.dto import InvoiceDTO
from backoffice.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import retry_policy, uow_factory
from backoffice.infrastructure.cli.common import parse_date, parse_items


def _display_invoice(dto: InvoiceDTO) -> None:
    click.echo(f"Invoice {dto.invoice_number}  (status={dto.payment_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.due_date:
        click.echo(f"Due:      {dto.due_date}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>7} {'Price':>10} {'Tax':>8} {'Tax amt':>10} {'Total':>12}")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>7} {item.unit_price:>10} "
            f"{item.tax_rate:>8} {item.tax_amount:>10} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Invoice Total':<27} {dto.total_amount:>45}")
    click.echo(f"  {'Balance':<27} {dto.balance:>45}")


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'SKU:Qty,SKU:Qty'.")
@click.option("--due", "due_date", default=None, help="Due date (YYYY-MM-DD).")
def invoice_create(customer_id: str, items: str, due_date: str | None) -> None:
    """Create an invoice (reserves stock)."""
    factory = uow_factory()
    specs = parse_items(items, factory)
    handler = CreateInvoiceHandler(factory, retry_policy())

    try:
        dto = handler.handle(customer_id, specs, due_date=parse_date(due_date))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)


@click.command("show")
@click.option("--id", "invoice_id", required=True, help="Invoice ID to display.")
def invoice_show(invoice_id: str) -> None:
    """Show details of an existing invoice."""
    handler = ShowInvoiceHandler(uow_factory())

    try:
        dto = handler.handle(invoice_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)


@click.command("list")
@click.option("--customer", "customer_id", default=None, help="Only this customer's invoices.")
def invoice_list(customer_id: str | None) -> None:
    """List invoices, newest first."""
    invoices = ListInvoicesHandler(uow_factory()).handle(customer_id)

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"{'Number':<11} {'Customer':<20} {'Total':>12} {'Balance':>12} {'Status':<8} ID")
    click.echo("-" * 100)
    for inv in invoices:
        click.echo(
            f"{inv.invoice_number:<11} {inv.customer_name:<20} {inv.total_amount:>12} "
            f"{inv.balance:>12} {inv.payment_status:<8} {inv.id}"
        )


@click.command("delete")
@click.option("--id", "invoice_id", required=True, help="Invoice ID to delete.")
def invoice_delete(invoice_id: str) -> None:
    """Delete an invoice (returns stock, reverses the customer balance)."""
    handler = DeleteInvoiceHandler(uow_factory(), retry_policy())

    try:
        handler.handle(invoice_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {invoice_id} deleted, stock returned.")
