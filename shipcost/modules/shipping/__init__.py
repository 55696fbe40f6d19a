"""
Shipping Module v1.0.0

- PriceProvider interface and ProviderDecorator base for delivery prices
- Basket data classes shared by all providers
- Decorators (e.g. Logsta) live in shipping.decorators
"""
from shipcost.modules.shipping.base import (
    Order,
    OrderAddress,
    OrderProduct,
    Price,
    PriceProvider,
    ProviderDecorator,
)
from shipcost.modules.shipping.providers import StaticPriceProvider

__all__ = [
    "Order",
    "OrderAddress",
    "OrderProduct",
    "Price",
    "PriceProvider",
    "ProviderDecorator",
    "StaticPriceProvider",
]
