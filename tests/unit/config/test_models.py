"""Unit tests for configuration Pydantic models."""

import pytest
from pydantic import ValidationError

from relay.config.models import (
    APIConfig,
    CompletionConfig,
    LoggingConfig,
    MessagingConfig,
    ObservabilityConfig,
    SessionStoreConfig,
    StorageConfig,
)


class TestAPIConfig:
    """Tests for APIConfig model."""

    def test_defaults(self) -> None:
        """Default values are correct."""
        config = APIConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.cors_origins == []

    def test_port_range(self) -> None:
        """Port must be a valid TCP port."""
        with pytest.raises(ValidationError):
            APIConfig(port=0)
        with pytest.raises(ValidationError):
            APIConfig(port=70000)


class TestSessionStoreConfig:
    """Tests for SessionStoreConfig model."""

    def test_defaults(self) -> None:
        config = SessionStoreConfig()
        assert config.backend == "inmemory"
        assert config.connection_url is None
        assert config.key_prefix == "relay:session"
        assert config.max_cas_retries == 5

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SessionStoreConfig(ttl_seconds=0)

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SessionStoreConfig(backend="postgres")

    def test_storage_nests_session(self) -> None:
        config = StorageConfig(session={"backend": "redis", "connection_url": "redis://x"})
        assert config.session.backend == "redis"


class TestCompletionConfig:
    """Tests for CompletionConfig model."""

    def test_temperature_bounds(self) -> None:
        with pytest.raises(ValidationError):
            CompletionConfig(temperature=2.5)

    def test_top_p_bounds(self) -> None:
        with pytest.raises(ValidationError):
            CompletionConfig(top_p=1.5)

    def test_fallback_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            CompletionConfig(fallback_text="")

    def test_system_prompt_default_present(self) -> None:
        assert CompletionConfig().system_prompt


class TestMessagingConfig:
    """Tests for MessagingConfig model."""

    def test_chunk_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            MessagingConfig(max_chunk_size=0)

    def test_auth_token_is_secret(self) -> None:
        config = MessagingConfig(auth_token="tw-secret")
        assert "tw-secret" not in str(config)


class TestObservabilityConfig:
    def test_defaults(self) -> None:
        config = ObservabilityConfig()
        assert config.logging.format == "json"
        assert config.logging.redact_pii is True
        assert config.tracing.enabled is False

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")
