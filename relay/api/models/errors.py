"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the error envelope."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (missing form fields, bad values)."""

    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    """No live thread exists for the session key."""

    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    """A component could not start because a required setting is absent."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    """The session backend could not be reached."""

    COMPLETION_FAILED = "COMPLETION_FAILED"
    """The completion endpoint failed or was unreachable."""

    DELIVERY_FAILED = "DELIVERY_FAILED"
    """The messaging channel rejected an outbound message."""

    REPLY_INCOMPLETE = "REPLY_INCOMPLETE"
    """A reply was generated but not fully recorded or delivered."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope.

    Example:
        {
            "error": {
                "code": "COMPLETION_FAILED",
                "message": "Completion endpoint returned 503"
            }
        }
    """

    error: ErrorBody
