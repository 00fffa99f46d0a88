"""Error taxonomy shared by the client, the routes and the bootstrap."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ProxyError(Exception):
    """Base class for every error raised by collect_proxy."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


class ConfigurationError(ProxyError):
    pass


class ValidationKind(str, Enum):
    REQUIRED = "required"
    DATE_RANGE = "date_range"
    CYCLE = "cycle"
    INTERVAL_TYPE = "interval_type"
    DATA_TYPE = "data_type"
    TIME_PERIOD = "time_period"
    ATTRIBUTE = "attribute"
    VALUE = "value"
    BODY = "body"


class ValidationError(ProxyError):
    """Client input is malformed or out of policy. Never retried."""

    def __init__(self, message: str, kind: ValidationKind = ValidationKind.REQUIRED):
        super().__init__(message)
        self.kind = kind


class AuthError(ProxyError):
    """The client-credentials exchange failed."""


class UpstreamError(ProxyError):
    """The data API failed: network error, non-2xx or unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnauthorizedError(UpstreamError):
    """The data API answered 401; eligible for one refresh-and-retry."""

    def __init__(self, message: str = "Upstream rejected the access token", body: Any = None):
        super().__init__(message, status_code=401, body=body)
        # bearer value that was rejected, set by the client that sent it
        self.token: Optional[str] = None
