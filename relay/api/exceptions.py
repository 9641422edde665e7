"""HTTP mapping for relay errors.

API-only failures subclass RelayAPIError. Domain errors from
relay.errors are mapped to a status and error code by `status_for`.
"""

from relay.api.models.errors import ErrorCode
from relay.errors import (
    CompletionFailed,
    ConfigurationMissing,
    DeliveryFailed,
    RelayError,
    ReplyIncomplete,
    StoreUnavailable,
)


class RelayAPIError(Exception):
    """Base exception for errors raised by route handlers themselves."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SessionNotFoundError(RelayAPIError):
    """Raised when no live thread exists for a session key."""

    status_code = 404
    error_code = ErrorCode.SESSION_NOT_FOUND


_DOMAIN_ERRORS: list[tuple[type[RelayError], int, ErrorCode]] = [
    (ConfigurationMissing, 500, ErrorCode.CONFIGURATION_MISSING),
    (StoreUnavailable, 503, ErrorCode.STORE_UNAVAILABLE),
    (CompletionFailed, 502, ErrorCode.COMPLETION_FAILED),
    (DeliveryFailed, 502, ErrorCode.DELIVERY_FAILED),
    (ReplyIncomplete, 502, ErrorCode.REPLY_INCOMPLETE),
]


def status_for(exc: RelayError) -> tuple[int, ErrorCode]:
    """HTTP status and error code for a domain error."""
    for error_type, status_code, error_code in _DOMAIN_ERRORS:
        if isinstance(exc, error_type):
            return status_code, error_code
    return 500, ErrorCode.INTERNAL_ERROR
