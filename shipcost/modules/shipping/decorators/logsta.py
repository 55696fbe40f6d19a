"""
Logsta Shipping Cost Decorator v1.0.0

Adds the shipping costs estimated by the Logsta API to the price of the
wrapped delivery provider.

Costs are cached in the user session by basket content, so the API is only
asked again when products or quantities change.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from shipcost.core.config import (
    LOGSTA_USERNAME_KEY,
    LOGSTA_PASSWORD_KEY,
    LOGSTA_APIKEY_KEY,
    LOGSTA_SELLERID_KEY,
    LOGSTA_GROUP_KEY,
)
from shipcost.core.session_cache import SessionCache
from shipcost.modules.shipping.base import (
    ADDRESS_DELIVERY,
    ADDRESS_PAYMENT,
    ConfigAttribute,
    Order,
    Price,
    PriceProvider,
    ProviderDecorator,
    check_config,
)
from shipcost.services.catalog import ProductCatalog
from shipcost.services.logsta_client import LogstaClient
from shipcost.services.quantities import get_quantities, quantities_signature
from shipcost.services.weight import WeightResolver

logger = logging.getLogger(__name__)

COSTS_KEY_PREFIX = "logsta/costs/"

LOGSTA_CONFIG_BE = {
    LOGSTA_USERNAME_KEY: ConfigAttribute(code=LOGSTA_USERNAME_KEY, label="Logsta user name"),
    LOGSTA_PASSWORD_KEY: ConfigAttribute(code=LOGSTA_PASSWORD_KEY, label="Logsta password"),
    LOGSTA_APIKEY_KEY: ConfigAttribute(code=LOGSTA_APIKEY_KEY, label="Logsta API key"),
    LOGSTA_SELLERID_KEY: ConfigAttribute(code=LOGSTA_SELLERID_KEY, label="Logsta seller ID"),
    LOGSTA_GROUP_KEY: ConfigAttribute(
        code=LOGSTA_GROUP_KEY,
        label="Logsta ID of the shipping service group",
        type="int",
        default=0,
        required=False,
    ),
}


class LogstaDecorator(ProviderDecorator):
    """
    Delivery price decorator for Logsta shipping costs.

    The session cache passed in belongs to the current user session and
    holds both the Logsta token and the costs per basket signature.
    """

    def __init__(
        self,
        provider: PriceProvider,
        config: Mapping[str, Any],
        session: SessionCache,
        catalog: ProductCatalog,
        client: Optional[LogstaClient] = None,
    ):
        super().__init__(provider, config)
        self.session = session
        self.weights = WeightResolver(catalog)
        self.client = client or LogstaClient(self._config, session)

    async def close(self):
        await self.client.close()

    def get_config_be(self) -> Dict[str, ConfigAttribute]:
        attributes = dict(self.get_provider().get_config_be())
        attributes.update(LOGSTA_CONFIG_BE)
        return attributes

    def check_config_be(self, attributes: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        errors = dict(self.get_provider().check_config_be(attributes))
        errors.update(check_config(LOGSTA_CONFIG_BE, attributes))
        return errors

    async def calc_price(self, order: Order, options: Optional[Dict[str, Any]] = None) -> Price:
        price = await self.get_provider().calc_price(order, options or {})
        return price.with_costs(price.costs + await self.get_costs(order))

    async def get_costs(self, order: Order) -> float:
        """
        Shipping costs for the basket.

        Returns 0 if the basket has neither a delivery nor a payment address.
        """
        addresses = order.get_address(ADDRESS_DELIVERY) or order.get_address(ADDRESS_PAYMENT)
        if not addresses:
            return 0.0

        quantities = get_quantities(order)
        key = COSTS_KEY_PREFIX + quantities_signature(quantities)

        costs = await self.session.get(key)
        if costs is None:
            logger.debug(f"Logsta costs cache miss for {key}")
            weight = await self.weights.get_weight(quantities)
            costs = await self.client.estimate(addresses[0], weight)
        else:
            logger.debug(f"Logsta costs cache hit for {key}")

        await self.session.set(key, costs)
        return float(costs)
