"""Capture configuration.

Configuration precedence (highest to lowest):
1. Explicit arguments to load_capture_config()
2. Environment variables (BODYCAPTURE_*)
3. YAML configuration (.bodycapture/config.yaml, section ``http_body_capture``)
4. Built-in defaults

Environment Variables:
    BODYCAPTURE_CAPTURE_REQUEST_BODY: Capture HTTP request bodies (default: false)
    BODYCAPTURE_CAPTURE_RESPONSE_BODY: Capture HTTP response bodies (default: false)
    BODYCAPTURE_MAX_BODY_SIZE: Bytes captured before truncation (default: 4096)
    BODYCAPTURE_CONFIG_FILE: Path to the YAML config file
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY_SIZE = 4096
CONFIG_SECTION = "http_body_capture"
DEFAULT_CONFIG_PATH = Path(".bodycapture") / "config.yaml"

ENV_CAPTURE_REQUEST_BODY = "BODYCAPTURE_CAPTURE_REQUEST_BODY"
ENV_CAPTURE_RESPONSE_BODY = "BODYCAPTURE_CAPTURE_RESPONSE_BODY"
ENV_MAX_BODY_SIZE = "BODYCAPTURE_MAX_BODY_SIZE"
ENV_CONFIG_FILE = "BODYCAPTURE_CONFIG_FILE"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class CaptureConfig:
    """Immutable body capture settings, fixed for the lifetime of a recorder."""

    capture_request_body: bool = False
    capture_response_body: bool = False
    max_body_size: int = DEFAULT_MAX_BODY_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.max_body_size, bool) or not isinstance(self.max_body_size, int):
            raise ValueError(f"max_body_size must be an integer, got {self.max_body_size!r}")
        if self.max_body_size <= 0:
            raise ValueError(f"max_body_size must be positive, got {self.max_body_size}")

    @property
    def enabled(self) -> bool:
        return self.capture_request_body or self.capture_response_body


def parse_bool(value: Any) -> Optional[bool]:
    """Parse a boolean config value, returning None when it is not recognized."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def parse_max_body_size(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        size = int(str(value).strip())
    except ValueError:
        return None
    return size if size > 0 else None


def find_config_file() -> Optional[Path]:
    """Locate the YAML config file, if one exists."""
    explicit = os.environ.get(ENV_CONFIG_FILE)
    candidate = Path(explicit) if explicit else Path.cwd() / DEFAULT_CONFIG_PATH
    return candidate if candidate.is_file() else None


def load_config_file(path: Optional[Path] = None) -> dict[str, Any]:
    """Read the ``http_body_capture`` section of a YAML config file.

    A missing file yields an empty dict. A file that cannot be parsed is
    logged and ignored.
    """
    path = path or find_config_file()
    if path is None:
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to read config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a mapping at top level")
        return {}

    section = data.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        logger.warning(f"Ignoring '{CONFIG_SECTION}' in {path}: expected a mapping")
        return {}
    return section


def _resolve_bool(name: str, explicit: Optional[bool], env_var: str, file_config: dict[str, Any]) -> bool:
    if explicit is not None:
        return explicit

    env_value = os.environ.get(env_var)
    if env_value is not None:
        parsed = parse_bool(env_value)
        if parsed is not None:
            return parsed
        logger.warning(f"Invalid boolean for {env_var}: {env_value!r}, ignoring")

    if name in file_config:
        parsed = parse_bool(file_config[name])
        if parsed is not None:
            return parsed
        logger.warning(f"Invalid boolean for '{name}' in config file: {file_config[name]!r}, ignoring")

    return False


def _resolve_max_body_size(explicit: Optional[int], file_config: dict[str, Any]) -> int:
    if explicit is not None:
        return explicit

    env_value = os.environ.get(ENV_MAX_BODY_SIZE)
    if env_value is not None:
        parsed = parse_max_body_size(env_value)
        if parsed is not None:
            return parsed
        logger.warning(f"Invalid value for {ENV_MAX_BODY_SIZE}: {env_value!r}, using default")

    if "max_body_size" in file_config:
        parsed = parse_max_body_size(file_config["max_body_size"])
        if parsed is not None:
            return parsed
        logger.warning(
            f"Invalid 'max_body_size' in config file: {file_config['max_body_size']!r}, using default"
        )

    return DEFAULT_MAX_BODY_SIZE


def load_capture_config(
    capture_request_body: Optional[bool] = None,
    capture_response_body: Optional[bool] = None,
    max_body_size: Optional[int] = None,
    config_path: Optional[Path] = None,
) -> CaptureConfig:
    """Build a CaptureConfig from arguments, environment and config file.

    Args:
        capture_request_body: Overrides every other source when given
        capture_response_body: Overrides every other source when given
        max_body_size: Overrides every other source when given; must be positive
        config_path: YAML file to read instead of the default location

    Returns:
        The resolved CaptureConfig
    """
    file_config = load_config_file(config_path)

    config = CaptureConfig(
        capture_request_body=_resolve_bool(
            "capture_request_body", capture_request_body, ENV_CAPTURE_REQUEST_BODY, file_config
        ),
        capture_response_body=_resolve_bool(
            "capture_response_body", capture_response_body, ENV_CAPTURE_RESPONSE_BODY, file_config
        ),
        max_body_size=_resolve_max_body_size(max_body_size, file_config),
    )
    logger.debug(f"Capture config: {config}")
    return config
