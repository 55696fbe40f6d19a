"""
Shipping Cost Estimator API

Delivery prices with shipping costs estimated by the Logsta API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shipcost import __version__
from shipcost.api import api_router
from shipcost.core.config import settings
from shipcost.core.database import dispose_engine
from shipcost.core.error_handler import register_exception_handlers
from shipcost.core.redis_client import connect_redis, disconnect_redis
from shipcost.core.session_cache import SessionCacheRegistry

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    app.state.session_registry = SessionCacheRegistry()
    app.state.redis = await connect_redis()
    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
    yield
    await disconnect_redis(app.state.redis)
    await dispose_engine()
    logger.info(f"{settings.APP_NAME} shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Delivery prices with Logsta shipping cost estimates",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "shipcost.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
