"""Configuration file management for fintrack."""

import os
import tomllib
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import tomli_w

from fintrack.domain.models import EnforcementMode
from fintrack.domain.money import to_money
from fintrack.errors import InvalidField

STORAGE_BACKENDS = ("file", "sqlite")

DEFAULT_GOAL_LIMIT = "10000"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    mode: EnforcementMode = EnforcementMode.REJECT
    goal_limit: Decimal | None = Decimal(DEFAULT_GOAL_LIMIT)
    backend: str = "file"
    data_dir: Path | None = None

    @property
    def storage_path(self) -> Path:
        return self.data_dir or get_data_dir()


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "fintrack" / "config.toml"


def get_data_dir() -> Path:
    """Get the default directory for saved budgets and transactions."""
    return get_xdg_data_home() / "fintrack"


def default_config() -> dict[str, Any]:
    return {
        "budget": {"mode": EnforcementMode.REJECT.value, "goal_limit": DEFAULT_GOAL_LIMIT},
        "storage": {"backend": "file", "path": ""},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def parse_settings(config: dict[str, Any]) -> Settings:
    """Validate a configuration dictionary into Settings.

    Missing keys fall back to defaults.

    Raises:
        InvalidField: If the mode or backend is unknown.
        InvalidAmount: If the goal limit is negative or not a number.
    """
    budget = config.get("budget", {})
    storage = config.get("storage", {})

    raw_mode = str(budget.get("mode", EnforcementMode.REJECT.value)).lower()
    try:
        mode = EnforcementMode(raw_mode)
    except ValueError:
        raise InvalidField("mode", f"Unknown enforcement mode {raw_mode!r} (use 'reject' or 'warn')") from None

    raw_limit = budget.get("goal_limit", DEFAULT_GOAL_LIMIT)
    limit = to_money(str(raw_limit), "goal_limit")

    backend = str(storage.get("backend", "file")).lower()
    if backend not in STORAGE_BACKENDS:
        raise InvalidField("backend", f"Unknown storage backend {backend!r} (use 'file' or 'sqlite')")

    path = storage.get("path") or None

    return Settings(
        mode=mode,
        goal_limit=limit if limit > 0 else None,
        backend=backend,
        data_dir=Path(path).expanduser() if path else None,
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load Settings from the config file, or defaults if it doesn't exist."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return parse_settings(config)
