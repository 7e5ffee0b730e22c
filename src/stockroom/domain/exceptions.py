"""Domain-level exceptions.

Caller-fault errors are subclasses of DomainException so the CLI and HTTP
layers can catch them uniformly and display user-friendly messages.
StoreError is deliberately *not* a DomainException: it signals an
infrastructure failure whose details must not reach the caller.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed or empty input, or a field rule was violated."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock available for a product."""

    def __init__(
        self,
        product_id: int,
        requested: int,
        available: int | None = None,
    ) -> None:
        super().__init__(f"not enough stock for product {product_id}")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class StoreError(Exception):
    """The underlying persistence layer failed.

    The unit of work has already been rolled back when this is raised, so
    callers may safely retry.
    """
