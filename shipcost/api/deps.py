"""
API dependencies
"""
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shipcost.core.config import settings, logsta_config_from_settings
from shipcost.core.database import get_db
from shipcost.core.session_cache import (
    InMemorySessionCache,
    RedisSessionCache,
    SessionCache,
    SessionCacheRegistry,
)
from shipcost.modules.shipping.base import PriceProvider
from shipcost.modules.shipping.decorators import LogstaDecorator
from shipcost.modules.shipping.providers import StaticPriceProvider
from shipcost.services.catalog import InMemoryProductCatalog, ProductCatalog, SqlProductCatalog


def get_session_registry(request: Request) -> SessionCacheRegistry:
    """In-memory sessions owned by the running application."""
    return request.app.state.session_registry


async def get_session_cache(
    request: Request,
    registry: SessionCacheRegistry = Depends(get_session_registry),
) -> SessionCache:
    """Session cache of the calling user, identified by the session header."""
    session_id = request.headers.get(settings.SESSION_HEADER)
    if not session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {settings.SESSION_HEADER} header",
        )

    client = getattr(request.app.state, "redis", None)
    if client is not None:
        return RedisSessionCache(client, session_id)

    return registry.get(session_id)


async def get_catalog(db: AsyncSession = Depends(get_db)) -> ProductCatalog:
    return SqlProductCatalog(db)


def get_base_provider() -> PriceProvider:
    return StaticPriceProvider(
        costs=settings.SHIPPING_BASE_COSTS,
        currency=settings.SHIPPING_CURRENCY,
    )


async def get_logsta_decorator(
    session: SessionCache = Depends(get_session_cache),
    catalog: ProductCatalog = Depends(get_catalog),
    provider: PriceProvider = Depends(get_base_provider),
) -> AsyncGenerator[LogstaDecorator, None]:
    """Logsta decorator bound to the caller's session; closes its HTTP client afterwards."""
    decorator = LogstaDecorator(provider, logsta_config_from_settings(), session, catalog)
    try:
        yield decorator
    finally:
        await decorator.close()


def get_config_decorator(
    provider: PriceProvider = Depends(get_base_provider),
) -> LogstaDecorator:
    """Decorator used only for configuration definitions and validation."""
    return LogstaDecorator(
        provider,
        logsta_config_from_settings(),
        InMemorySessionCache(),
        InMemoryProductCatalog(),
    )
