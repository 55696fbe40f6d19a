"""
Shipping API Routes

Provides endpoints for:
- Delivery price of a basket including Logsta shipping costs
- Logsta configuration attribute definitions and validation
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from shipcost.api.deps import get_config_decorator, get_logsta_decorator
from shipcost.modules.shipping.decorators import LogstaDecorator
from shipcost.schemas.shipping import (
    ConfigAttributeResponse,
    ConfigCheckRequest,
    ConfigCheckResponse,
    PriceRequest,
    PriceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("/price", response_model=PriceResponse)
async def calculate_price(
    request: PriceRequest,
    decorator: LogstaDecorator = Depends(get_logsta_decorator),
):
    """
    Calculate the delivery price for a basket.

    Shipping costs are cached per session and basket content, so repeated
    requests for an unchanged basket do not call the Logsta API again.
    """
    price = await decorator.calc_price(request.to_order(), request.options)
    return PriceResponse.from_price(price)


@router.get("/config", response_model=List[ConfigAttributeResponse])
async def get_config_definitions(
    decorator: LogstaDecorator = Depends(get_config_decorator),
):
    """Configuration attributes of the delivery provider chain."""
    return [ConfigAttributeResponse(**attr.to_dict()) for attr in decorator.get_config_be().values()]


@router.post("/config/check", response_model=ConfigCheckResponse)
async def check_config(
    request: ConfigCheckRequest,
    decorator: LogstaDecorator = Depends(get_config_decorator),
):
    """Validate configuration attributes before saving them."""
    errors = decorator.check_config_be(request.attributes)
    return ConfigCheckResponse(
        valid=all(error is None for error in errors.values()),
        errors=errors,
    )
