"""Configuration file loader for zlaunch."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from zlaunch.logging_config import get_logger
from zlaunch.models.config import Config

logger = get_logger("zlaunch.services.config_loader")

CONFIG_FILE = Path.home() / ".zlaunch" / "config.json"


def load_config(
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from the config file and environment.

    Environment variables override file config:
    - ZLAUNCH_CLIENT: client binary to launch
    - ZLAUNCH_SOCKET_DIR: registry directory to scan
    - ZLAUNCH_PROBE_TIMEOUT: probe timeout in seconds

    Returns:
        Config with values from file, environment or defaults.
    """
    env = os.environ if environ is None else environ
    config = _apply_file_values(Config(), _load_from_file(config_file or CONFIG_FILE))

    if client := env.get("ZLAUNCH_CLIENT"):
        config.client_binary = client
    if socket_dir := env.get("ZLAUNCH_SOCKET_DIR"):
        config.socket_dir = Path(socket_dir).expanduser()
    if timeout := env.get("ZLAUNCH_PROBE_TIMEOUT"):
        try:
            config.probe_timeout = float(timeout)
        except ValueError:
            logger.warning(f"Ignoring invalid ZLAUNCH_PROBE_TIMEOUT: {timeout!r}")

    return config


def _load_from_file(config_file: Path) -> dict[str, Any]:
    """Read the raw config mapping, or an empty one if unavailable."""
    if not config_file.exists():
        logger.debug(f"Config file not found: {config_file}")
        return {}

    try:
        with config_file.open() as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load config file: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {config_file}: expected a JSON object")
        return {}
    return data


def _apply_file_values(config: Config, data: dict[str, Any]) -> Config:
    """Copy recognised keys from the file mapping onto the config."""
    if isinstance(data.get("client_binary"), str):
        config.client_binary = data["client_binary"]
    for key in ("attach_args", "create_args", "nested_markers", "ignored_env"):
        value = data.get(key)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            setattr(config, key, value)
    if isinstance(data.get("socket_dir"), str):
        config.socket_dir = Path(data["socket_dir"]).expanduser()
    if isinstance(data.get("socket_subdir"), str):
        config.socket_subdir = data["socket_subdir"]
    if isinstance(data.get("probe_timeout"), int | float):
        config.probe_timeout = float(data["probe_timeout"])
    if isinstance(data.get("verbose"), bool):
        config.verbose = data["verbose"]
    return config
