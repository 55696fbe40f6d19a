"""
Error handling for shipping cost failures

- Each error kind maps to its own HTTP status so clients can tell them apart
- Underlying causes are logged only, not returned to the client (unless DEBUG)
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shipcost.core.config import settings
from shipcost.core.exceptions import ShipCostError, ERROR_STATUS_CODES

logger = logging.getLogger(__name__)


def error_response_body(exc: ShipCostError) -> dict:
    """Serialized error, without internal causes outside of debug mode."""
    body = exc.to_dict()
    if not settings.DEBUG:
        body["details"] = {k: v for k, v in body["details"].items() if k != "cause"}
    return body


async def shipcost_error_handler(request: Request, exc: ShipCostError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(exc.code, 500)
    logger.error(
        f"{type(exc).__name__} [{exc.code}] on {request.method} {request.url.path}: "
        f"{exc.message} {exc.details}"
    )
    return JSONResponse(status_code=status_code, content=error_response_body(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShipCostError, shipcost_error_handler)
