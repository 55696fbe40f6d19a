"""
Shipping price API schemas.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from shipcost.modules.shipping.base import Order, OrderAddress, OrderProduct, Price


class OrderProductIn(BaseModel):
    """Basket line item with optional bundled products."""
    code: str = Field(..., min_length=1, max_length=64)
    quantity: float = Field(1, gt=0)
    products: List["OrderProductIn"] = Field(default_factory=list)

    def to_order_product(self) -> OrderProduct:
        return OrderProduct(
            product_code=self.code,
            quantity=self.quantity,
            products=[bundled.to_order_product() for bundled in self.products],
        )


class AddressIn(BaseModel):
    type: Literal["delivery", "payment"] = "delivery"
    postal: str = Field(..., min_length=1, max_length=20)
    city: str = Field(..., min_length=1, max_length=100)
    address1: str = Field(..., min_length=1, max_length=255)
    address2: Optional[str] = Field(None, max_length=255)
    country_id: str = Field(..., min_length=2, max_length=2)

    def to_order_address(self) -> OrderAddress:
        return OrderAddress(
            type=self.type,
            postal=self.postal,
            city=self.city,
            address1=self.address1,
            address2=self.address2,
            country_id=self.country_id.upper(),
        )


class PriceRequest(BaseModel):
    """Basket to calculate the delivery price for."""
    products: List[OrderProductIn] = Field(default_factory=list)
    addresses: List[AddressIn] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)

    def to_order(self) -> Order:
        return Order(
            products=[product.to_order_product() for product in self.products],
            addresses=[address.to_order_address() for address in self.addresses],
        )


class PriceResponse(BaseModel):
    value: float
    costs: float
    rebate: float
    tax_rate: float
    currency: str

    @classmethod
    def from_price(cls, price: Price) -> "PriceResponse":
        return cls(
            value=price.value,
            costs=price.costs,
            rebate=price.rebate,
            tax_rate=price.tax_rate,
            currency=price.currency,
        )


class ConfigAttributeResponse(BaseModel):
    code: str
    label: str
    type: str
    default: Any = None
    required: bool


class ConfigCheckRequest(BaseModel):
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ConfigCheckResponse(BaseModel):
    valid: bool
    errors: Dict[str, Optional[str]]
