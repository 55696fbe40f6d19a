"""
Product catalog lookups for shipping weights.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shipcost.models.product import Product, PACKAGE_WEIGHT_PROPERTY

logger = logging.getLogger(__name__)


@dataclass
class CatalogProduct:
    """Product code with its per-unit package weights in kg."""
    code: str
    weights: List[float] = field(default_factory=list)


class ProductCatalog(ABC):
    """Looks up products by code."""

    @abstractmethod
    async def find_by_codes(self, codes: Sequence[str]) -> List[CatalogProduct]:
        """
        Fetch all products with the given codes in one lookup.

        Codes without a catalog entry are left out of the result.
        """
        pass


class InMemoryProductCatalog(ProductCatalog):
    """Catalog backed by a dict of product code -> package weights."""

    def __init__(self, weights: Optional[Dict[str, List[float]]] = None):
        self._weights = dict(weights or {})

    async def find_by_codes(self, codes: Sequence[str]) -> List[CatalogProduct]:
        return [
            CatalogProduct(code=code, weights=list(self._weights[code]))
            for code in codes
            if code in self._weights
        ]


class SqlProductCatalog(ProductCatalog):
    """Catalog stored in the products / product_properties tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_codes(self, codes: Sequence[str]) -> List[CatalogProduct]:
        if not codes:
            return []

        query = (
            select(Product)
            .options(selectinload(Product.properties))
            .where(Product.code.in_(list(codes)))
            .limit(len(codes))
        )
        result = await self.db.execute(query)
        products = result.scalars().all()

        return [
            CatalogProduct(code=product.code, weights=self._package_weights(product))
            for product in products
        ]

    @staticmethod
    def _package_weights(product: Product) -> List[float]:
        weights = []
        for value in product.get_properties(PACKAGE_WEIGHT_PROPERTY):
            try:
                weights.append(float(value))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid package weight {value!r} of product {product.code}")
        return weights
