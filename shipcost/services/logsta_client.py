"""
Logsta API Client for shipping cost estimation v1.0.0

Implements the two Logsta operations the shop needs:
- Login (username/password -> bearer token, cached in the user session)
- Shipment estimate (weight + destination -> label and insurance costs)

All external API calls are logged and failures are raised as typed errors.
Tokens, passwords and API keys are never logged.
"""
import json
import logging
import time
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

import httpx
from pydantic import ValidationError

from shipcost.core.config import (
    settings,
    LOGSTA_USERNAME_KEY,
    LOGSTA_PASSWORD_KEY,
    LOGSTA_APIKEY_KEY,
    LOGSTA_SELLERID_KEY,
    LOGSTA_GROUP_KEY,
)
from shipcost.core.exceptions import (
    ConfigurationMissingError,
    AuthenticationFailedError,
    TransportError,
    EstimationRejectedError,
)
from shipcost.core.session_cache import SessionCache
from shipcost.modules.shipping.base import OrderAddress
from shipcost.schemas.logsta import (
    LogstaLoginRequest,
    LogstaLoginResponse,
    LogstaShipTo,
    LogstaEstimateRequest,
    LogstaEstimatePayload,
    LogstaEstimateResponse,
)

logger = logging.getLogger(__name__)

# API endpoints
LOGIN_PATH = "/login"
ESTIMATE_PATH = "/shipments/estimate"

# Session keys of the cached token
TOKEN_VALUE_KEY = "logsta/token/value"
TOKEN_UNTIL_KEY = "logsta/token/until"


class LogstaClient:
    """
    Logsta API client with session cached login token.

    The token is stored in the session cache together with its absolute
    expiry time and is only reused while both are present and the expiry
    lies in the future.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        session: SessionCache,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        token_ttl: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.session = session
        self.base_url = (base_url or settings.LOGSTA_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.LOGSTA_TIMEOUT_SECONDS
        self.token_ttl = token_ttl if token_ttl is not None else settings.LOGSTA_TOKEN_TTL_SECONDS
        self._http_client = http_client
        # injected clients belong to the caller
        self._owns_http_client = http_client is None
        self._clock = clock

    @property
    def login_url(self) -> str:
        return f"{self.base_url}{LOGIN_PATH}"

    @property
    def estimate_url(self) -> str:
        return f"{self.base_url}{ESTIMATE_PATH}"

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=self.timeout),
            )
        return self._http_client

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._http_client and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    def get_config_value(self, key: str, default: Any = None) -> Any:
        value = self.config.get(key)
        return default if value is None else value

    def _require(self, key: str) -> Any:
        """Return a mandatory configuration value or fail before any request."""
        value = self.config.get(key)
        if value is None or value == "":
            logger.error(f"Logsta configuration {key} is missing")
            raise ConfigurationMissingError(key)
        return value

    # ==================== Transport ====================

    async def _send(self, url: str, payload: Dict, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """POST a JSON payload with the API key header."""
        apikey = self._require(LOGSTA_APIKEY_KEY)

        request_headers = dict(headers or {})
        request_headers["X-Api-Key"] = str(apikey)
        request_headers["Content-Type"] = "application/json"

        client = await self._get_http_client()

        try:
            response = await client.post(url, content=json.dumps(payload), headers=request_headers)
        except httpx.TimeoutException as e:
            logger.error(f"Logsta request to {url} timed out: {e}")
            raise TransportError(f'Request to "{url}" timed out', endpoint=url, cause=e) from e
        except httpx.HTTPError as e:
            logger.error(f"Logsta request to {url} failed: {e}")
            raise TransportError(f'Request to "{url}" failed: {e}', endpoint=url, cause=e) from e

        logger.debug(f"Logsta POST {url} -> {response.status_code}")
        return response

    @staticmethod
    def _decode(response: httpx.Response, url: str) -> Dict[str, Any]:
        """Parse a JSON object body."""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Logsta returned invalid JSON for {url}: {response.text[:200]}")
            raise TransportError(f'Invalid response for "{url}"', endpoint=url, cause=e) from e

        if not isinstance(data, dict):
            raise TransportError(f'Invalid response for "{url}": JSON object expected', endpoint=url)

        return data

    # ==================== Token ====================

    async def token(self) -> str:
        """Return a valid token, logging in when absent or expired."""
        value = await self.session.get(TOKEN_VALUE_KEY)
        until = await self.session.get(TOKEN_UNTIL_KEY)

        if value and until is not None and self._clock() < float(until):
            return value

        return await self.login()

    async def login(self) -> str:
        """Authenticate and cache the token for token_ttl seconds."""
        username = self._require(LOGSTA_USERNAME_KEY)
        password = self._require(LOGSTA_PASSWORD_KEY)
        url = self.login_url

        payload = LogstaLoginRequest(username=str(username), password=str(password)).model_dump()
        response = await self._send(url, payload)

        if response.status_code != 200:
            logger.error(f"Logsta login failed: HTTP {response.status_code}")
            raise AuthenticationFailedError(
                "Logsta login for requesting shipping costs failed",
                endpoint=url,
                status_code=response.status_code,
            )

        data = self._decode(response, url)
        try:
            token = LogstaLoginResponse.model_validate(data).token
        except ValidationError:
            token = None

        if not token:
            logger.error("Logsta login response contains no token")
            raise AuthenticationFailedError(
                "Logsta login for requesting shipping costs failed",
                endpoint=url,
                status_code=response.status_code,
            )

        await self.session.set(TOKEN_VALUE_KEY, token)
        await self.session.set(TOKEN_UNTIL_KEY, self._clock() + self.token_ttl)

        logger.info(f"Logsta token obtained, expires in {self.token_ttl}s")
        return token

    async def invalidate_token(self) -> None:
        await self.session.delete(TOKEN_VALUE_KEY)
        await self.session.delete(TOKEN_UNTIL_KEY)

    # ==================== Estimate ====================

    def _service_group_id(self) -> int:
        """Optional shipping service group, 0 if not configured."""
        value = self.get_config_value(LOGSTA_GROUP_KEY, 0)
        if value == "":
            return 0
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.error(f"Logsta configuration {LOGSTA_GROUP_KEY} is not an integer")
            raise ConfigurationMissingError(
                LOGSTA_GROUP_KEY,
                message=f'Invalid configuration "{LOGSTA_GROUP_KEY}", an integer is required',
            )

    def build_payload(self, address: OrderAddress, weight: float) -> Dict[str, Any]:
        """Estimate request body with a fresh request UUID."""
        request = LogstaEstimateRequest(
            requestUUID=str(uuid.uuid4()),
            shippingServiceGroupId=self._service_group_id(),
            grossWeightKg=weight,
            sellerId=self._require(LOGSTA_SELLERID_KEY),
            shipTo=LogstaShipTo(
                zip=address.postal,
                city=address.city,
                street=address.address1,
                street2=address.address2 or "",
                countryIso2=address.country_id,
            ),
        )
        return LogstaEstimatePayload(estimateRequests=[request]).model_dump()

    async def estimate(self, address: OrderAddress, weight: float) -> float:
        """
        Request the shipping costs for one package.

        Returns:
            Label costs plus insurance costs
        """
        self._require(LOGSTA_SELLERID_KEY)
        self._require(LOGSTA_APIKEY_KEY)

        payload = self.build_payload(address, weight)
        url = self.estimate_url
        token = await self.token()

        logger.info(f"Requesting Logsta estimate for {weight:.3f} kg to {address.country_id}")
        response = await self._send(url, payload, {"Authorization": token})

        if response.status_code in (401, 403):
            await self.invalidate_token()
            logger.error(f"Logsta rejected the token: HTTP {response.status_code}")
            raise AuthenticationFailedError(
                "Logsta rejected the authentication token",
                endpoint=url,
                status_code=response.status_code,
            )

        data = self._decode(response, url)
        try:
            results = LogstaEstimateResponse.model_validate(data).estimateResults
        except ValidationError as e:
            logger.error(f"Logsta estimate response is malformed: {e.error_count()} errors")
            raise EstimationRejectedError(
                "Requesting shipping costs failed",
                endpoint=url,
                status_code=response.status_code,
            ) from e

        result = results[0] if results else None
        if result is None or result.success is not True:
            logger.error(f"Logsta estimate failed: HTTP {response.status_code}")
            raise EstimationRejectedError(
                "Requesting shipping costs failed",
                endpoint=url,
                status_code=response.status_code,
            )

        return (result.amountLabel or 0.0) + (result.amountInsurance or 0.0)
