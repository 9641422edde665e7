"""Configuration section models."""

from relay.config.models.api import APIConfig
from relay.config.models.observability import (
    LoggingConfig,
    ObservabilityConfig,
    TracingConfig,
)
from relay.config.models.providers import CompletionConfig, MessagingConfig
from relay.config.models.storage import SessionStoreConfig, StorageConfig

__all__ = [
    "APIConfig",
    "CompletionConfig",
    "LoggingConfig",
    "MessagingConfig",
    "ObservabilityConfig",
    "SessionStoreConfig",
    "StorageConfig",
    "TracingConfig",
]
