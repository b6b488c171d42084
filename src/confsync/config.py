"""
Configuration loading for confsync.

Settings are layered, later sources winning:

    defaults  ->  YAML file  ->  CONFSYNC_* environment  ->  CLI options

The YAML file is optional. The live and repository paths must come
from somewhere, otherwise loading fails with ConfigError.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from . import CONFIG_FILE
from .errors import ConfigError
from .models import SyncConfig

logger = logging.getLogger("confsync.config")

ENV_OVERRIDES = {
    "CONFSYNC_LIVE_PATH": "live_path",
    "CONFSYNC_REPO_PATH": "repo_path",
    "CONFSYNC_BRANCH": "branch",
    "CONFSYNC_REMOTE": "remote",
}


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dict.

    Args:
        path: File to read.

    Returns:
        Parsed mapping (empty for an empty file).

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.debug("Loaded config file %s", path)
    return data


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SyncConfig:
    """Resolve the effective SyncConfig.

    Args:
        config_file: Explicit YAML file. Must exist when given.
        overrides: Values from the command line; None entries are ignored.
        environ: Environment to read. Defaults to os.environ.

    Returns:
        Validated SyncConfig.

    Raises:
        ConfigError: On unreadable files or missing/invalid settings.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    if config_file is not None:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data.update(read_config_file(path))
    else:
        default = Path(env.get("CONFSYNC_CONFIG", CONFIG_FILE)).expanduser()
        if default.is_file():
            data.update(read_config_file(default))

    for var, key in ENV_OVERRIDES.items():
        if env.get(var):
            data[key] = env[var]

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    missing = [k for k in ("live_path", "repo_path") if not data.get(k)]
    if missing:
        raise ConfigError(
            "Missing setting(s): " + ", ".join(missing)
            + " (set them in the config file, CONFSYNC_* variables, or options)"
        )

    try:
        return SyncConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
