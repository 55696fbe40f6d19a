"""
Logsta API request and response bodies.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class LogstaLoginRequest(BaseModel):
    username: str
    password: str


class LogstaLoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: Optional[str] = None


class LogstaShipTo(BaseModel):
    zip: str
    city: str
    street: str
    street2: str = ""
    countryIso2: str


class LogstaEstimateRequest(BaseModel):
    requestUUID: str
    shippingServiceGroupId: int = 0
    grossWeightKg: float
    sellerId: Union[int, str]
    shipTo: LogstaShipTo


class LogstaEstimatePayload(BaseModel):
    estimateRequests: List[LogstaEstimateRequest]


class LogstaEstimateResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: Optional[bool] = None
    amountLabel: Optional[float] = None
    amountInsurance: Optional[float] = None


class LogstaEstimateResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    estimateResults: List[LogstaEstimateResult] = []
