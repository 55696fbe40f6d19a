"""
Shipping Cost Exception Hierarchy

Structured exception classes for the shipping cost estimation.
All exceptions include code, message, and details so callers can tell
the failure kinds apart programmatically and log them with context.

Exception Hierarchy:
    ShipCostError
    ├── ConfigurationMissingError
    ├── AuthenticationFailedError
    ├── TransportError
    └── EstimationRejectedError
"""
from typing import Optional, Dict, Any


class ShipCostError(Exception):
    """
    Base exception for all shipping cost errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging/audit
        severity: P0-P3 severity level
    """

    default_code: str = "SHIPCOST_ERROR"
    default_severity: str = "P2"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationMissingError(ShipCostError):
    """A required configuration value is absent or unusable."""
    default_code = "CONFIGURATION_MISSING"
    default_severity = "P0"

    def __init__(self, key: str, message: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        details["key"] = key
        self.key = key
        super().__init__(message or f'Missing configuration "{key}"', details=details, **kwargs)


class AuthenticationFailedError(ShipCostError):
    """Login rejected or answered without a token."""
    default_code = "AUTH_FAILED"
    default_severity = "P1"

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "endpoint": endpoint,
            "status_code": status_code,
        })
        super().__init__(message, details=details, **kwargs)


class TransportError(ShipCostError):
    """Connection failure, timeout or a response body that is not JSON."""
    default_code = "TRANSPORT_ERROR"
    default_severity = "P1"

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "endpoint": endpoint,
            "cause": repr(cause) if cause is not None else None,
        })
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(message, details=details, **kwargs)


class EstimationRejectedError(ShipCostError):
    """The estimation service reported a failure or returned no usable result."""
    default_code = "ESTIMATION_REJECTED"
    default_severity = "P2"

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "endpoint": endpoint,
            "status_code": status_code,
        })
        super().__init__(message, details=details, **kwargs)


# HTTP status used by the API error handler for each error code
ERROR_STATUS_CODES = {
    ConfigurationMissingError.default_code: 503,
    AuthenticationFailedError.default_code: 502,
    TransportError.default_code: 504,
    EstimationRejectedError.default_code: 422,
}
