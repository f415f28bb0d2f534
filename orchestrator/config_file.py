"""Add-on configuration file written into the project before injection."""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping, Optional

from common.config import AddonFileSettings
from common.errors import ConfigurationError, PatchIOError
from common.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ConfigFileContent:
    version: str
    token: str


def get_config_file_content(
    settings: AddonFileSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigFileContent:
    env = environ if environ is not None else os.environ
    token = env.get(settings.token_env) or ""
    if not token:
        raise ConfigurationError(f"{settings.token_env} is not set in env variables")
    LOGGER.debug("Config file version is %s", settings.version)
    return ConfigFileContent(version=settings.version, token=token)


def format_config_file_content(content: ConfigFileContent) -> bytes:
    """Serialize ``content`` as JSON.

    Changing this format requires bumping the config file version.
    """

    return json.dumps(asdict(content), indent=1).encode("utf-8")


def create_config_file(content: bytes, path: Path) -> Path:
    LOGGER.debug("Writing the config file content to %s", path)
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise PatchIOError(f"Failed to write the configuration file: {exc}", destination=path) from exc
    return path


def write_addon_config(
    project_dir: Path,
    settings: AddonFileSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    content = get_config_file_content(settings, environ)
    return create_config_file(format_config_file_content(content), project_dir / settings.file_name)


__all__ = [
    "ConfigFileContent",
    "create_config_file",
    "format_config_file_content",
    "get_config_file_content",
    "write_addon_config",
]
