"""
Shipment weight from aggregated basket quantities.
"""
import logging
from typing import Mapping

from shipcost.services.catalog import ProductCatalog

logger = logging.getLogger(__name__)


class WeightResolver:
    """Sums catalog package weights multiplied by basket quantities."""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    async def get_weight(self, quantities: Mapping[str, float]) -> float:
        """
        Total weight in kg of all products in the quantity map.

        Products missing from the catalog or without a package weight
        contribute nothing.
        """
        if not quantities:
            return 0.0

        weight = 0.0
        for product in await self.catalog.find_by_codes(list(quantities.keys())):
            quantity = quantities.get(product.code)
            if quantity is None:
                continue
            for value in product.weights:
                weight += value * quantity

        logger.debug(f"Resolved shipment weight {weight:.3f} kg for {len(quantities)} products")
        return weight
