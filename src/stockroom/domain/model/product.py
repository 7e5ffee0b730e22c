"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are added and removed from the
catalog. Orders only hold a weak reference (the product id) plus a
frozen copy of the price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.value_objects import MAX_INTEGER, MIN_INTEGER


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``name`` is non-empty once trimmed
    - ``unit_price`` is a positive amount in minor currency units
    - ``stock`` never goes negative
    """

    id: int | None
    name: str
    unit_price: int
    stock: int = 0
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        unit_price: int,
        stock: int = 0,
        description: str | None = None,
    ) -> Product:
        """Create a new catalog entry; the store assigns the id."""
        product = Product(
            id=None,
            name=name,
            unit_price=unit_price,
            stock=stock,
            description=description,
        )
        # Route every field through its mutator so creation and updates
        # share one set of rules.
        product.rename(name)
        product.update_price(unit_price)
        product.set_stock(stock)
        return product

    # --- Mutations ------------------------------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("name must not be empty")
        self.name = name.strip()

    def describe(self, description: str | None) -> None:
        self.description = description

    def update_price(self, new_price: int) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        _require_int(new_price, "unit_price")
        if new_price <= 0:
            raise ValidationError("unit_price must be > 0")
        self.unit_price = new_price

    def set_stock(self, stock: int) -> None:
        _require_int(stock, "stock")
        if stock < 0:
            raise ValidationError("stock must be >= 0")
        self.stock = stock


def _require_int(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise ValidationError(f"{name} is out of range")
