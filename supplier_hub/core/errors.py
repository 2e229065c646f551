"""
Error taxonomy shared by the relay handlers.

Every failure a handler can produce is a ``RelayError`` carrying an
``ErrorKind``; the kind decides the HTTP status of the envelope.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFIGURATION = "configuration"
    GATEWAY = "gateway"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.INTERNAL: 500,
    ErrorKind.GATEWAY: 502,
}


class RelayError(Exception):
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.message = message
        self.data = data

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class PayloadError(RelayError):
    """Request body or query failed validation"""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthError(RelayError):
    kind = ErrorKind.UNAUTHORIZED


class ConfigurationError(RelayError):
    kind = ErrorKind.CONFIGURATION


class NotFoundError(RelayError):
    kind = ErrorKind.NOT_FOUND


class GatewayError(RelayError):
    kind = ErrorKind.GATEWAY


class DownstreamUnavailable(GatewayError):
    """The downstream platform could not be reached (connect error, timeout)"""

    def __init__(self, platform: str):
        super().__init__(f"Unable to communicate with {platform}")
        self.platform = platform


class DownstreamRejected(GatewayError):
    """The downstream platform answered with a non-2xx status"""

    def __init__(self, platform: str, status: int, body: str = "", message: Optional[str] = None):
        super().__init__(message or f"{platform} rejected the request (HTTP {status})")
        self.platform = platform
        self.upstream_status = status
        self.body = body
