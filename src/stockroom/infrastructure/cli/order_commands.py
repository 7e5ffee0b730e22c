"""CLI commands for orders."""

from __future__ import annotations

import click

from stockroom.application.dto import OrderItemRequest
from stockroom.domain.model.value_objects import format_cents
from stockroom.infrastructure import bootstrap
from stockroom.infrastructure.cli.common import database, reported_errors


def _parse_items(raw: str) -> list[OrderItemRequest]:
    """Parse '1:3,2:5' (product id : quantity) into OrderItemRequest list."""
    requests: list[OrderItemRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
        except ValueError:
            raise click.BadParameter(f"Invalid product id '{id_str}'.")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product {product_id}."
            )
        requests.append(OrderItemRequest(product_id=product_id, quantity=qty))
    return requests


@click.command("place")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_place(items: str) -> None:
    """Place an order (consumes stock, all-or-nothing)."""
    requests = _parse_items(items)

    with database() as db, reported_errors():
        placed = bootstrap.place_order_handler(db).handle(requests)

    click.echo(f"Order {placed.id} placed")
    click.echo(f"Total: {format_cents(placed.total)}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show an order with its frozen prices."""
    with database() as db, reported_errors():
        dto = bootstrap.show_order_handler(db).handle(order_id)

    click.echo(f"Order {dto.id}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*38}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<10} {item.quantity:>5} "
            f"{format_cents(item.unit_price):>10} {format_cents(item.line_total):>10}"
        )
    click.echo(f"  {'-'*38}")
    click.echo(f"  {'Order Total':<17} {format_cents(dto.total):>20}")
