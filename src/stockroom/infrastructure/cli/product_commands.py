"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from stockroom.domain.model.value_objects import format_cents
from stockroom.infrastructure import bootstrap
from stockroom.infrastructure.cli.common import database, reported_errors


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, type=int, help="Unit price in cents (e.g. 1999).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--description", default=None, help="Optional description.")
def product_add(name: str, price: int, stock: int, description: str | None) -> None:
    """Add a new product to the catalog."""
    with database() as db, reported_errors():
        product = bootstrap.add_product_handler(db).handle(
            name=name, unit_price=price, stock=stock, description=description
        )

    click.echo(
        f"Product #{product.id} '{product.name}' added at "
        f"{format_cents(product.unit_price)} ({product.stock} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with database() as db, reported_errors():
        products = bootstrap.show_product_handler(db).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 47)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {format_cents(p.unit_price):>10} {p.stock:>8}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show a single product."""
    with database() as db, reported_errors():
        p = bootstrap.show_product_handler(db).handle(product_id)

    click.echo(f"Product #{p.id} '{p.name}'")
    if p.description:
        click.echo(f"  {p.description}")
    click.echo(f"Price: {format_cents(p.unit_price)}")
    click.echo(f"Stock: {p.stock}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, type=int, help="New unit price in cents.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(
    product_id: int,
    name: str | None,
    description: str | None,
    price: int | None,
    stock: int | None,
) -> None:
    """Update a product; omitted options keep their value."""
    with database() as db, reported_errors():
        p = bootstrap.update_product_handler(db).handle(
            product_id,
            name=name,
            description=description,
            unit_price=price,
            stock=stock,
        )

    click.echo(
        f"Product #{p.id} updated: '{p.name}' at {format_cents(p.unit_price)} "
        f"({p.stock} in stock)"
    )


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_remove(product_id: int) -> None:
    """Remove a product (existing orders are not affected)."""
    with database() as db, reported_errors():
        removed = bootstrap.remove_product_handler(db).handle(product_id)

    if removed:
        click.echo(f"Product #{product_id} removed.")
    else:
        click.echo(f"Product #{product_id} not found; nothing removed.")
