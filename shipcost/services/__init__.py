# Services layer for shipping cost estimation
from shipcost.services.catalog import ProductCatalog, SqlProductCatalog, InMemoryProductCatalog
from shipcost.services.logsta_client import LogstaClient
from shipcost.services.quantities import get_quantities, quantities_signature
from shipcost.services.weight import WeightResolver
