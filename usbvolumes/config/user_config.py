"""
Configuration loading for usbvolumes.

Settings come from several sources:
1. Environment variables (highest precedence)
2. Config file given on the command line
3. usbvolumes.yaml in the current directory
4. The user's XDG config directory
5. Default values (lowest precedence)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from usbvolumes.config.models import UsbVolumesSettings
from usbvolumes.core.errors import ConfigError
from usbvolumes.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


def config_search_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Generate config paths to search in order of precedence."""
    config_paths = []

    if cli_config_path:
        config_paths.append(Path(cli_config_path).expanduser().resolve())

    config_paths.append(Path.cwd() / "usbvolumes.yaml")

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    config_paths.append(config_home / "usbvolumes" / "config.yaml")

    return config_paths


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Failed to read config file {path}: {e}", context={"path": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping",
            context={"path": str(path)},
        )
    return data


def load_settings(cli_config_path: str | Path | None = None) -> UsbVolumesSettings:
    """Load settings from the first config file found plus the environment.

    Args:
        cli_config_path: Optional config file path provided via CLI. Unlike the
            default locations it must exist.

    Raises:
        ConfigError: If a config file cannot be read or fails validation
    """
    if cli_config_path and not Path(cli_config_path).expanduser().exists():
        raise ConfigError(
            f"Config file not found: {cli_config_path}",
            context={"path": str(cli_config_path)},
        )

    config_data: dict[str, Any] = {}
    for path in config_search_paths(cli_config_path):
        if path.is_file():
            config_data = _read_config_file(path)
            logger.debug("config_file_loaded", path=str(path))
            break
    else:
        logger.debug("no_config_file_found")

    try:
        return UsbVolumesSettings(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
