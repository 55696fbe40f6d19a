"""
Base price providers that decorators are stacked on.
"""
from typing import Any, Dict, Optional

from shipcost.modules.shipping.base import Order, Price, PriceProvider


class StaticPriceProvider(PriceProvider):
    """Delivery option with fixed value and costs, independent of the basket."""

    def __init__(self, value: float = 0.0, costs: float = 0.0, currency: str = "EUR"):
        self.value = value
        self.costs = costs
        self.currency = currency

    async def calc_price(self, order: Order, options: Optional[Dict[str, Any]] = None) -> Price:
        return Price(value=self.value, costs=self.costs, currency=self.currency)
