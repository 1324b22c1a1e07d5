import click

from backoffice.infrastructure.bootstrap import settings
from backoffice.infrastructure.cli.dashboard_commands import dashboard
from backoffice.infrastructure.cli.invoice_commands import (
    invoice_create,
    invoice_delete,
    invoice_list,
    invoice_show,
)
from backoffice.infrastructure.cli.party_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_show,
    customer_update,
    supplier_add,
    supplier_delete,
    supplier_list,
    supplier_update,
)
from backoffice.infrastructure.cli.payment_commands import payment_list, payment_record
from backoffice.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_set_stock,
    product_update,
)
from backoffice.infrastructure.cli.purchase_order_commands import (
    po_cancel,
    po_create,
    po_list,
    po_receive,
    po_show,
)
from backoffice.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Back office: invoices, payments, stock and purchase orders"""
    configure_logging(level=settings().log_level)


@cli.group()
def invoice() -> None:
    """Manage sales invoices."""


@cli.group()
def payment() -> None:
    """Record and list payments."""


@cli.group()
def po() -> None:
    """Manage purchase orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


# Register subcommands
invoice.add_command(invoice_create)
invoice.add_command(invoice_delete)
invoice.add_command(invoice_list)
invoice.add_command(invoice_show)
payment.add_command(payment_list)
payment.add_command(payment_record)
po.add_command(po_cancel)
po.add_command(po_create)
po.add_command(po_list)
po.add_command(po_receive)
po.add_command(po_show)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_set_stock)
product.add_command(product_update)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_show)
customer.add_command(customer_update)
supplier.add_command(supplier_add)
supplier.add_command(supplier_delete)
supplier.add_command(supplier_list)
supplier.add_command(supplier_update)
cli.add_command(dashboard)
