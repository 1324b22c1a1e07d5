"""CLI command for the business overview."""

from __future__ import annotations

import click

from backoffice.application.dashboard import DashboardHandler
from backoffice.infrastructure.bootstrap import uow_factory


@click.command("dashboard")
def dashboard() -> None:
    """Show the business overview."""
    dto = DashboardHandler(uow_factory()).handle()

    click.echo(f"Customers:          {dto.total_customers}")
    click.echo(f"Products:           {dto.total_products}")
    click.echo(f"Low stock items:    {dto.low_stock_items}")
    click.echo(f"Outstanding amount: {dto.total_outstanding}")
    click.echo(f"Today's sales:      {dto.today_sales}")
    click.echo(f"Month sales:        {dto.month_sales}")

    if dto.low_stock:
        click.echo()
        click.echo("Low stock:")
        for p in dto.low_stock:
            click.echo(f"  {p.name:<20} {p.stock_quantity:>10} {p.unit:<6} (reorder at {p.reorder_level})")

    if dto.recent_invoices:
        click.echo()
        click.echo("Recent invoices:")
        for inv in dto.recent_invoices:
            click.echo(
                f"  {inv.invoice_number:<11} {inv.customer_name:<20} "
                f"{inv.total_amount:>12} {inv.payment_status}"
            )
