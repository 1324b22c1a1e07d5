"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.set_stock import SetStockHandler
from backoffice.application.show_catalog import ListProductsHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import retry_policy, uow_factory


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock-keeping unit code.")
@click.option("--unit", default="pcs", show_default=True, help="Unit of measure.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--tax-rate", default="0", show_default=True, help="Tax rate in percent.")
@click.option("--stock", default="0", show_default=True, help="Opening stock.")
@click.option("--reorder-level", default="0", show_default=True)
@click.option("--hsn", "hsn_code", default="", help="HSN / classification code.")
@click.option("--description", default="")
def product_add(
    name: str,
    sku: str,
    unit: str,
    price: str,
    tax_rate: str,
    stock: str,
    reorder_level: str,
    hsn_code: str,
    description: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow_factory())

    try:
        product = handler.handle(
            name=name,
            sku=sku,
            unit=unit,
            price=price,
            tax_rate=tax_rate,
            stock_quantity=stock,
            reorder_level=reorder_level,
            description=description,
            hsn_code=hsn_code,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' ({product.sku}) added at {product.price}  id={product.id}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(uow_factory()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<12} {'Name':<20} {'Price':>10} {'Tax':>6} {'Stock':>10} {'Unit':<6}")
    click.echo("-" * 70)
    for p in products:
        flag = "  LOW" if p.low_stock else ""
        click.echo(
            f"{p.sku:<12} {p.name:<20} {p.price:>10} {p.tax_rate:>6} "
            f"{p.stock_quantity:>10} {p.unit:<6}{flag}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--tax-rate", default=None, help="New tax rate in percent.")
@click.option("--name", default=None)
@click.option("--sku", default=None)
@click.option("--unit", default=None)
@click.option("--reorder-level", default=None)
@click.option("--hsn", "hsn_code", default=None, help="HSN / classification code.")
@click.option("--description", default=None)
def product_update(product_id: str, **changes: str | None) -> None:
    """Update a product's details, price or tax rate."""
    if all(value is None for value in changes.values()):
        raise click.ClickException("Nothing to update: pass at least one field option")

    handler = UpdateProductHandler(uow_factory(), retry_policy())

    try:
        dto = handler.handle(
            product_id,
            new_price=changes.pop("price"),
            new_tax_rate=changes.pop("tax_rate"),
            **changes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{dto.name}' ({dto.sku}) now {dto.price} at {dto.tax_rate} tax")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product that no invoice or pending order refers to."""
    try:
        DeleteProductHandler(uow_factory(), retry_policy()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Counted stock level.")
def product_set_stock(product_id: str, quantity: str) -> None:
    """Overwrite a product's stock level after a physical count."""
    handler = SetStockHandler(uow_factory(), retry_policy())

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{dto.name}' set to {dto.stock_quantity}")
