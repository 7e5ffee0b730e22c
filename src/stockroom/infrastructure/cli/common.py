"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import click

from stockroom.domain.exceptions import DomainException, StoreError
from stockroom.infrastructure import bootstrap
from stockroom.infrastructure.persistence.database import Database


@contextmanager
def database() -> Iterator[Database]:
    """Open the configured store for the duration of one command."""
    try:
        db = bootstrap.open_database()
    except StoreError:
        raise click.ClickException("Could not open the database.")
    try:
        yield db
    finally:
        db.dispose()


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn domain and store errors into user-facing click errors."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except StoreError:
        raise click.ClickException("Store failure; nothing was changed.")
