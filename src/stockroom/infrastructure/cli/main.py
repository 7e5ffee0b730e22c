import click

from stockroom.infrastructure.cli.common import database
from stockroom.infrastructure.cli.order_commands import order_place, order_show
from stockroom.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_show,
    product_update,
)
from stockroom.infrastructure.config import get_settings
from stockroom.infrastructure.observability import setup_logging


@click.group()
def cli() -> None:
    """stockroom — inventory and ordering service"""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def db() -> None:
    """Database maintenance."""


@db.command("init")
def db_init() -> None:
    """Create any missing tables."""
    with database() as store:
        click.echo(f"Database ready: {store.engine.url.render_as_string(hide_password=True)}")


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST setting).")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT setting).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from stockroom.infrastructure.api.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
product.add_command(product_remove)
