"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, newest first."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> bool:
        """Remove a product. Returns False if it did not exist."""

    @abstractmethod
    def decrement_stock(self, product_id: int, amount: int) -> None:
        """Atomically reduce stock by ``amount``.

        Must never drive stock negative: implementations perform a single
        conditional update and raise InsufficientStockError when the row
        does not hold enough stock.
        """
