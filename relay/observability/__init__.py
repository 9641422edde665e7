"""Observability: structured logging and Prometheus metrics.

Logging goes through structlog; metrics through prometheus_client.
"""

from relay.observability.logging import (
    bind_session_context,
    clear_session_context,
    get_logger,
    setup_logging,
)

__all__ = [
    "bind_session_context",
    "clear_session_context",
    "get_logger",
    "setup_logging",
]
