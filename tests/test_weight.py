"""
Tests for shipment weight resolution and the product catalog adapters.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from shipcost.models.product import Product, ProductProperty
from shipcost.services.catalog import (
    CatalogProduct,
    InMemoryProductCatalog,
    ProductCatalog,
    SqlProductCatalog,
)
from shipcost.services.weight import WeightResolver


@pytest.fixture
def catalog() -> InMemoryProductCatalog:
    return InMemoryProductCatalog({
        "A": [1.0],
        "B": [0.5, 0.25],
        "C": [],
    })


class TestWeightResolver:

    @pytest.mark.asyncio
    async def test_weights_multiplied_by_quantity(self, catalog):
        weight = await WeightResolver(catalog).get_weight({"A": 2, "B": 3})

        assert weight == pytest.approx(2 * 1.0 + 3 * (0.5 + 0.25))

    @pytest.mark.asyncio
    async def test_unknown_and_weightless_products_add_nothing(self, catalog):
        weight = await WeightResolver(catalog).get_weight({"A": 1, "C": 5, "UNKNOWN": 7})

        assert weight == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_empty_map_skips_lookup(self):
        mock_catalog = AsyncMock(spec=ProductCatalog)

        assert await WeightResolver(mock_catalog).get_weight({}) == 0.0
        mock_catalog.find_by_codes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_single_batched_lookup(self):
        mock_catalog = AsyncMock(spec=ProductCatalog)
        mock_catalog.find_by_codes.return_value = [
            CatalogProduct(code="A", weights=[2.0]),
            CatalogProduct(code="B", weights=[1.0]),
        ]

        weight = await WeightResolver(mock_catalog).get_weight({"A": 1, "B": 2, "C": 3})

        assert weight == pytest.approx(4.0)
        mock_catalog.find_by_codes.assert_awaited_once()
        codes = mock_catalog.find_by_codes.await_args.args[0]
        assert sorted(codes) == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_products_outside_the_map_are_ignored(self):
        mock_catalog = AsyncMock(spec=ProductCatalog)
        mock_catalog.find_by_codes.return_value = [CatalogProduct(code="Z", weights=[9.0])]

        assert await WeightResolver(mock_catalog).get_weight({"A": 1}) == 0.0


class TestSqlProductCatalog:

    @staticmethod
    def _product(code, *weights, other=None):
        properties = [ProductProperty(type="package-weight", value=value) for value in weights]
        if other:
            properties.append(ProductProperty(type="package-height", value=other))
        return Product(code=code, label=code, properties=properties)

    @pytest.fixture
    def mock_db(self) -> AsyncMock:
        db = AsyncMock()
        db.execute = AsyncMock()
        return db

    def _returns(self, mock_db, products):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = products
        mock_db.execute.return_value = mock_result

    @pytest.mark.asyncio
    async def test_reads_package_weight_properties(self, mock_db):
        self._returns(mock_db, [self._product("A", "1.5", "0.5", other="30")])

        products = await SqlProductCatalog(mock_db).find_by_codes(["A", "B"])

        assert products == [CatalogProduct(code="A", weights=[1.5, 0.5])]
        mock_db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_weight_values_are_skipped(self, mock_db):
        self._returns(mock_db, [self._product("A", "heavy", "2")])

        products = await SqlProductCatalog(mock_db).find_by_codes(["A"])

        assert products[0].weights == [2.0]

    @pytest.mark.asyncio
    async def test_no_codes_no_query(self, mock_db):
        assert await SqlProductCatalog(mock_db).find_by_codes([]) == []
        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_filters_by_codes_and_limits_rows(self, mock_db):
        self._returns(mock_db, [])

        await SqlProductCatalog(mock_db).find_by_codes(["A", "B"])

        query = mock_db.execute.await_args.args[0]
        sql = str(query)
        assert "products.code IN" in sql
        assert "LIMIT" in sql
