"""Locate and layer the TOML configuration files.

Two files are read from the config directory: `default.toml`, which must
exist, and `<RELAY_ENV>.toml`, which may. Tables from the second are merged
into the first key by key.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "RELAY_CONFIG_DIR"
ENVIRONMENT_VAR = "RELAY_ENV"
DEFAULT_ENVIRONMENT = "development"

# How many directories above the working directory to search for config/
_SEARCH_DEPTH = 4


def get_config_dir() -> Path:
    """Return the directory holding the TOML files.

    An explicit RELAY_CONFIG_DIR must point at an existing directory.
    Without it, the nearest `config/` at or above the working directory
    wins, and a bare relative `config` is the last resort.
    """
    explicit = os.environ.get(CONFIG_DIR_VAR)
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"{CONFIG_DIR_VAR} points at a missing directory: {path}")
        return path

    cwd = Path.cwd()
    candidates = [cwd, *cwd.parents][: _SEARCH_DEPTH + 1]
    found = next((base / "config" for base in candidates if (base / "config").is_dir()), None)
    return found or Path("config")


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: The file does not exist
        tomllib.TOMLDecodeError: The file is not valid TOML
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with `override` layered onto `base`.

    Nested tables merge recursively; any other value in `override` replaces
    the one in `base`. Neither argument is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Read default.toml and layer the environment file over it.

    Raises:
        FileNotFoundError: default.toml (or an explicit config dir) is missing
    """
    config_dir = get_config_dir()

    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"No default.toml in {config_dir}. "
            f"Create config/default.toml or set {CONFIG_DIR_VAR}."
        )
    config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.is_file():
        config = deep_merge(config, load_toml(env_path))

    return config
