"""Configuration file management for moneytrack."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from moneytrack.errors import ConfigError
from moneytrack.logging_utils import LOG_LEVELS
from moneytrack.store.schema import get_db_path

DEFAULT_EXPORT_FILE = "expenses.xlsx"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    db_path: Path
    export_path: Path
    log_level: str


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "moneytrack" / "config.toml"


def default_config() -> dict[str, Any]:
    """Default configuration document. Empty database means the XDG default."""
    return {
        "storage": {"database": ""},
        "export": {"path": DEFAULT_EXPORT_FILE},
        "logging": {"level": DEFAULT_LOG_LEVEL},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def load_settings(config_path: Path | None = None) -> Settings:
    """Resolve settings from the config file, falling back to defaults.

    A missing config file is not an error.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.

    Raises:
        ConfigError: If the file is invalid or holds an unknown log level.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    database = str(_section(config, "storage").get("database") or "")
    export_path = str(_section(config, "export").get("path") or DEFAULT_EXPORT_FILE)
    log_level = str(_section(config, "logging").get("level") or DEFAULT_LOG_LEVEL).upper()

    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}")

    return Settings(
        db_path=Path(database).expanduser() if database else get_db_path(),
        export_path=Path(export_path).expanduser(),
        log_level=log_level,
    )
