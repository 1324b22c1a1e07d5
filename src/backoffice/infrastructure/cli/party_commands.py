"""CLI commands for customers and suppliers."""

from __future__ import annotations

import click

from backoffice.application.customer_statement import CustomerStatementHandler
from backoffice.application.delete_party import DeleteCustomerHandler, DeleteSupplierHandler
from backoffice.application.register_party import AddCustomerHandler, AddSupplierHandler
from backoffice.application.show_catalog import ListCustomersHandler, ListSuppliersHandler
from backoffice.application.update_party import UpdateCustomerHandler, UpdateSupplierHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import retry_policy, uow_factory


def _contact_options(editing: bool = False):
    """Contact fields; when editing, every field is optional and None means unchanged."""
    default = None if editing else ""

    def decorate(func):
        for option in reversed([
            click.option("--name", required=not editing, default=None),
            click.option("--phone", default=default),
            click.option("--email", default=default),
            click.option("--address", default=default),
            click.option("--tax-id", default=default, help="Tax registration number (e.g. GSTIN)."),
        ]):
            func = option(func)
        return func

    return decorate


@click.command("add")
@_contact_options()
def customer_add(name: str, phone: str, email: str, address: str, tax_id: str) -> None:
    """Register a customer."""
    try:
        dto = AddCustomerHandler(uow_factory()).handle(name, phone, email, address, tax_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer '{dto.name}' added  id={dto.id}")


@click.command("list")
def customer_list() -> None:
    """List customers with their outstanding amounts."""
    customers = ListCustomersHandler(uow_factory()).handle()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'Name':<24} {'Phone':<14} {'Outstanding':>12} ID")
    click.echo("-" * 90)
    for c in customers:
        click.echo(f"{c.name:<24} {c.phone:<14} {c.outstanding_amount:>12} {c.id}")


@click.command("show")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
def customer_show(customer_id: str) -> None:
    """Show a customer statement."""
    try:
        statement = CustomerStatementHandler(uow_factory()).handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    c = statement.customer
    click.echo(f"{c.name}  {c.phone}  {c.email}".rstrip())
    if c.address:
        click.echo(c.address)
    if c.tax_id:
        click.echo(f"Tax ID: {c.tax_id}")
    click.echo(f"Outstanding: {c.outstanding_amount}")
    click.echo()

    if not statement.invoices:
        click.echo("No invoices.")
        return
    for inv in statement.invoices:
        click.echo(
            f"  {inv.invoice_number:<11} {inv.created_at:<20} {inv.total_amount:>12} "
            f"{inv.balance:>12} {inv.payment_status}"
        )


@click.command("add")
@_contact_options()
def supplier_add(name: str, phone: str, email: str, address: str, tax_id: str) -> None:
    """Register a supplier."""
    try:
        supplier = AddSupplierHandler(uow_factory()).handle(name, phone, email, address, tax_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier '{supplier.name}' added  id={supplier.id}")


@click.command("list")
def supplier_list() -> None:
    """List suppliers."""
    suppliers = ListSuppliersHandler(uow_factory()).handle()

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'Name':<24} {'Phone':<14} ID")
    click.echo("-" * 76)
    for s in suppliers:
        click.echo(f"{s.name:<24} {s.phone:<14} {s.id}")


def _require_change(contact: dict) -> None:
    if all(value is None for value in contact.values()):
        raise click.ClickException("Nothing to update: pass at least one field option")


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@_contact_options(editing=True)
def customer_update(customer_id: str, **contact: str | None) -> None:
    """Edit a customer's contact details."""
    _require_change(contact)
    try:
        dto = UpdateCustomerHandler(uow_factory(), retry_policy()).handle(customer_id, **contact)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer '{dto.name}' updated")


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
def customer_delete(customer_id: str) -> None:
    """Remove a customer that has no invoices."""
    try:
        DeleteCustomerHandler(uow_factory(), retry_policy()).handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {customer_id} deleted.")


@click.command("update")
@click.option("--id", "supplier_id", required=True, help="Supplier ID.")
@_contact_options(editing=True)
def supplier_update(supplier_id: str, **contact: str | None) -> None:
    """Edit a supplier's contact details."""
    _require_change(contact)
    try:
        dto = UpdateSupplierHandler(uow_factory(), retry_policy()).handle(supplier_id, **contact)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier '{dto.name}' updated")


@click.command("delete")
@click.option("--id", "supplier_id", required=True, help="Supplier ID.")
def supplier_delete(supplier_id: str) -> None:
    """Remove a supplier without pending purchase orders."""
    try:
        DeleteSupplierHandler(uow_factory(), retry_policy()).handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier {supplier_id} deleted.")
