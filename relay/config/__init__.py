"""Configuration loading for relay.

Usage:
    from relay.config import get_settings

    settings = get_settings()
    ttl = settings.storage.session.ttl_seconds
"""

from functools import lru_cache

from relay.config.loader import load_config
from relay.config.settings import Settings, set_toml_config
from relay.observability.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance.

    TOML files are read once; RELAY_* environment variables take
    precedence over them. Without a config directory or default.toml the
    model defaults apply. Call `get_settings.cache_clear()` to reload.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError as e:
        logger.warning("config_file_not_found", msg="Using default configuration", error=str(e))
        set_toml_config({})

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
