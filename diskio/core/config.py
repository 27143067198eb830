"""Configuration loading with layered overrides."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from diskio.core.fixedpoint import DEFAULT_PRECISION
from diskio.core.store import DEFAULT_STATE_DIR, DEFAULT_STATE_PREFIX

CONFIG_ENV_VAR = "CHECK_DISK_IO_CONFIG"
SYSTEM_CONFIG = Path("/etc/check_disk_io.yaml")


class ConfigError(Exception):
    """Invalid configuration file or value."""

    pass


@dataclass(frozen=True)
class CheckConfig:
    """Settings that are not thresholds."""

    state_dir: str = DEFAULT_STATE_DIR
    state_prefix: str = DEFAULT_STATE_PREFIX
    lock: bool = True
    precision: int = DEFAULT_PRECISION
    log_dir: str | None = None


def user_config_path() -> Path:
    return Path.home() / ".config" / "check_disk_io" / "config.yaml"


def load_config_file(path: Path, strict: bool = False) -> dict[str, Any]:
    """
    Load a YAML config file if it exists.

    Args:
        path: File to read
        strict: Raise ConfigError instead of ignoring unreadable or
            invalid files

    Returns:
        Mapping from the file, empty if missing or ignored
    """
    if not path.exists():
        if strict:
            raise ConfigError(f"Config file not found: {path}")
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        if strict:
            raise ConfigError(f"Config file {path} must be a YAML mapping")
        return {}
    return data


def _coerce(data: dict[str, Any], source: str) -> dict[str, Any]:
    """Keep known keys and check their types."""
    known = {f.name for f in fields(CheckConfig)}
    values = {k: v for k, v in data.items() if k in known}

    for key in ("state_dir", "state_prefix"):
        if key in values and not isinstance(values[key], str):
            raise ConfigError(f"{source}: {key} must be a string")
    if "log_dir" in values and values["log_dir"] is not None and not isinstance(values["log_dir"], str):
        raise ConfigError(f"{source}: log_dir must be a string")
    if "lock" in values and not isinstance(values["lock"], bool):
        raise ConfigError(f"{source}: lock must be true or false")
    if "precision" in values:
        precision = values["precision"]
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
            raise ConfigError(f"{source}: precision must be a positive integer")

    return values


def load_config(
    explicit: Path | None = None,
    search_paths: list[Path] | None = None,
) -> CheckConfig:
    """
    Build the configuration from defaults and config files.

    Later files override earlier ones: system file, user file, then the
    file named by CHECK_DISK_IO_CONFIG or `explicit`.

    Args:
        explicit: Config file given on the command line
        search_paths: Implicit files to try (default: system then user)

    Returns:
        Merged CheckConfig

    Raises:
        ConfigError: If an explicit file is missing or invalid, or any
            file holds a value of the wrong type
    """
    if search_paths is None:
        search_paths = [SYSTEM_CONFIG, user_config_path()]

    config = CheckConfig()
    for path in search_paths:
        data = load_config_file(path)
        config = replace(config, **_coerce(data, str(path)))

    if explicit is None and os.environ.get(CONFIG_ENV_VAR):
        explicit = Path(os.environ[CONFIG_ENV_VAR])

    if explicit is not None:
        data = load_config_file(explicit, strict=True)
        config = replace(config, **_coerce(data, str(explicit)))

    return config
