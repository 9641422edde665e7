"""API request/response models."""

from relay.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from relay.api.models.health import ComponentHealth, HealthResponse
from relay.api.models.session import ThreadResponse, TurnView

__all__ = [
    "ComponentHealth",
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ThreadResponse",
    "TurnView",
]
