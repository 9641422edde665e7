"""Session storage configuration."""

from typing import Literal

from pydantic import BaseModel, Field

SessionBackendType = Literal["inmemory", "redis"]


class SessionStoreConfig(BaseModel):
    """Configuration for the conversation session store."""

    backend: SessionBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    connection_url: str | None = Field(
        default=None,
        description="Redis URL (prefer RELAY_STORAGE__SESSION__CONNECTION_URL)",
    )
    ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Absolute TTL applied on every write (seconds)",
    )
    key_prefix: str = Field(
        default="relay:session",
        description="Redis key prefix for session threads",
    )
    max_cas_retries: int = Field(
        default=5,
        ge=1,
        description="Compare-and-swap attempts before giving up on a contended key",
    )


class StorageConfig(BaseModel):
    """Configuration for storage backends."""

    session: SessionStoreConfig = Field(
        default_factory=SessionStoreConfig,
        description="SessionStore backend",
    )
