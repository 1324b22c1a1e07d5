"""CLI commands for payments."""

from __future__ import annotations

import click

from backoffice.application.record_payment import RecordPaymentHandler
from backoffice.application.show_invoice import ListPaymentsHandler
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.payment import PaymentMethod
from backoffice.infrastructure.bootstrap import retry_policy, uow_factory


@click.command("record")
@click.option("--invoice", "invoice_id", required=True, help="Invoice ID.")
@click.option("--amount", required=True, help="Amount (e.g. 100.00).")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
)
@click.option("--reference", default=None, help="Transaction ID, cheque number, etc.")
@click.option("--notes", default=None)
def payment_record(
    invoice_id: str,
    amount: str,
    method: str,
    reference: str | None,
    notes: str | None,
) -> None:
    """Record a payment against an invoice."""
    handler = RecordPaymentHandler(uow_factory(), retry_policy())

    try:
        dto = handler.handle(invoice_id, amount, method, reference, notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment {dto.payment_number} of {dto.amount} recorded on {dto.invoice_number}")


@click.command("list")
@click.option("--invoice", "invoice_id", default=None, help="Only this invoice's payments.")
def payment_list(invoice_id: str | None) -> None:
    """List payments, newest first."""
    payments = ListPaymentsHandler(uow_factory()).handle(invoice_id)

    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"{'Number':<11} {'Invoice':<11} {'Amount':>12} {'Method':<14} {'Date':<20} Reference")
    click.echo("-" * 85)
    for p in payments:
        click.echo(
            f"{p.payment_number:<11} {p.invoice_number:<11} {p.amount:>12} "
            f"{p.method:<14} {p.payment_date:<20} {p.reference_number}"
        )
