"""Structured logging configuration using structlog.

JSON output for deployed environments, console output for local runs.
Sender identifiers are phone numbers, so redaction is on by default.
"""

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

SENSITIVE_KEYS: frozenset[str] = frozenset({
    "api_key",
    "auth_token",
    "authorization",
    "password",
    "secret",
    "token",
    "email",
    "phone",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-\(\)]{8,}\d")


class PIIRedactor:
    """Processor that masks credentials and contact details in log events.

    Known sensitive keys are replaced outright; string values are scanned
    for email addresses and phone numbers.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: "[REDACTED]" if str(key).lower() in SENSITIVE_KEYS else self._redact(item)
                for key, item in value.items()
            }
        if isinstance(value, str):
            return self.redact_string(value)
        if isinstance(value, (list, tuple)):
            return [self._redact(item) for item in value]
        return value

    @staticmethod
    def redact_string(value: str) -> str:
        """Mask email addresses and phone numbers inside a string."""
        value = EMAIL_PATTERN.sub("[EMAIL]", value)
        return PHONE_PATTERN.sub("[PHONE]", value)


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for deployed environments, "console" for development
        redact_pii: Whether to mask contact details and credentials
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]

    # Redact before the timestamp is added: ISO dates look like phone numbers
    if redact_pii:
        processors.append(PIIRedactor())

    processors += [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    level_num = logging.getLevelName(level.upper())
    if not isinstance(level_num, int):
        level_num = logging.INFO

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def bind_session_context(session_key: str, **extra: Any) -> None:
    """Bind the conversation being handled to every log line of this task."""
    structlog.contextvars.bind_contextvars(session_key=session_key, **extra)


def clear_session_context() -> None:
    """Drop request-scoped logging context."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given module name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
