"""
Base Price Provider Interface v1.0.0

Delivery prices are computed by a chain of providers:
- A base provider calculates the upstream price of a delivery option
- Decorators wrap a provider and augment its price (e.g. carrier costs)
- Each decorator adds its own backend configuration attributes
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional


ADDRESS_DELIVERY = "delivery"
ADDRESS_PAYMENT = "payment"


# =============================================================================
# Basket Data Classes
# =============================================================================

@dataclass(frozen=True)
class OrderAddress:
    """Address snapshot taken from the basket."""
    postal: str
    city: str
    address1: str
    country_id: str
    address2: Optional[str] = None
    type: str = ADDRESS_DELIVERY


@dataclass
class OrderProduct:
    """Basket line item, optionally containing bundled products."""
    product_code: str
    quantity: float = 1
    products: List["OrderProduct"] = field(default_factory=list)


@dataclass
class Order:
    """Basket with line items and addresses tagged by role."""
    products: List[OrderProduct] = field(default_factory=list)
    addresses: List[OrderAddress] = field(default_factory=list)

    def get_address(self, address_type: str) -> List[OrderAddress]:
        """All addresses with the given role, in basket order."""
        return [address for address in self.addresses if address.type == address_type]


@dataclass(frozen=True)
class Price:
    """Price of a delivery option."""
    value: float = 0.0
    costs: float = 0.0
    rebate: float = 0.0
    tax_rate: float = 0.0
    currency: str = "EUR"

    def with_costs(self, costs: float) -> "Price":
        return replace(self, costs=costs)


@dataclass(frozen=True)
class ConfigAttribute:
    """Definition of a backend configuration attribute."""
    code: str
    label: str
    type: str = "string"
    default: Any = ""
    required: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "label": self.label,
            "type": self.type,
            "default": self.default,
            "required": self.required,
        }


def check_config(
    definitions: Mapping[str, ConfigAttribute],
    attributes: Mapping[str, Any],
) -> Dict[str, Optional[str]]:
    """
    Validate configuration attributes against their definitions.

    Returns:
        Dict with every defined code as key and None (valid) or an error message
    """
    errors: Dict[str, Optional[str]] = {}

    for code, definition in definitions.items():
        value = attributes.get(code)

        if value is None or value == "":
            errors[code] = f'Configuration for "{code}" is missing' if definition.required else None
            continue

        if definition.type == "int":
            try:
                int(value)
            except (TypeError, ValueError):
                errors[code] = f'Invalid value for "{code}", an integer is required'
                continue
        elif definition.type == "string" and not isinstance(value, str):
            errors[code] = f'Invalid value for "{code}", a string is required'
            continue

        errors[code] = None

    return errors


# =============================================================================
# Provider Interfaces
# =============================================================================

class PriceProvider(ABC):
    """Calculates the price of a delivery option for a basket."""

    @abstractmethod
    async def calc_price(self, order: Order, options: Optional[Dict[str, Any]] = None) -> Price:
        """Return the price including costs for the given basket."""
        pass

    def get_config_be(self) -> Dict[str, ConfigAttribute]:
        """Backend configuration attribute definitions."""
        return {}

    def check_config_be(self, attributes: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        """Validation result for the backend configuration attributes."""
        return {}


class ProviderDecorator(PriceProvider):
    """
    Wraps another provider and augments its price.

    Subclasses override calc_price() and call the wrapped provider first.
    """

    def __init__(self, provider: PriceProvider, config: Optional[Mapping[str, Any]] = None):
        self._provider = provider
        self._config = dict(config or {})

    def get_provider(self) -> PriceProvider:
        return self._provider

    async def calc_price(self, order: Order, options: Optional[Dict[str, Any]] = None) -> Price:
        return await self._provider.calc_price(order, options or {})

    def get_config_be(self) -> Dict[str, ConfigAttribute]:
        return self._provider.get_config_be()

    def check_config_be(self, attributes: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        return self._provider.check_config_be(attributes)

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value of this service.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value
