"""Application service: Remove Product use case.

Historical orders are left untouched: their items keep the product id,
quantity and frozen price.
"""

from __future__ import annotations

import logging
from typing import Callable

from stockroom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RemoveProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int) -> bool:
        """Delete a product. Returns False if there was nothing to delete."""
        with self._uow_factory() as uow:
            removed = uow.products.delete(product_id)
            uow.commit()

        if removed:
            logger.info("Removed product %s", product_id, extra={"product_id": product_id})
        return removed
