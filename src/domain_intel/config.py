"""Shared configuration constants and YAML helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml

from .errors import ConfigurationError

CONFIG_DIR_NAME = "domain-intel"
FINGERPRINT_DIR_NAME = "fingerprints"
TEMPLATE_DIR_NAME = "templates"
SETTINGS_FILENAME = "settings.yaml"
RESOURCE_PACKAGE = "domain_intel.resources"
FINGERPRINT_PACKAGE = "domain_intel.resources.fingerprints"
TEMPLATE_PACKAGE = "domain_intel.resources.templates"

GROQ_API_KEY_ENV = "GROQ_API_KEY"
GROQ_MODEL_ENV = "GROQ_MODEL"

LOGGER = logging.getLogger(__name__)

SYSTEM_CONFIG_DIRS = [
    Path("/etc") / CONFIG_DIR_NAME,
    Path("/usr/local/etc") / CONFIG_DIR_NAME,
]


def external_config_dirs() -> List[Path]:
    """Return directories that may contain external configuration overrides.

    Returns:
        List[Path]: Ordered list of user and system config directories.
    """
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        user_dir = Path(xdg_home) / CONFIG_DIR_NAME
    else:
        user_dir = Path.home() / ".config" / CONFIG_DIR_NAME
    return [user_dir, *SYSTEM_CONFIG_DIRS]


def load_yaml_mapping(path: object) -> dict:
    """Load a YAML file that must contain a mapping.

    Args:
        path (object): Path-like object with read_text() and name.

    Returns:
        dict: Parsed YAML mapping.

    Raises:
        ConfigurationError: If the file cannot be parsed or is not a mapping.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} is not a mapping")
    return data


def find_config_file(*parts: str) -> Optional[Path]:
    """Find the first external config file matching a relative path.

    Args:
        *parts (str): Path components relative to a config directory.

    Returns:
        Optional[Path]: First existing file, or None.
    """
    for base_dir in external_config_dirs():
        candidate = base_dir.joinpath(*parts)
        if candidate.is_file():
            LOGGER.debug("Using config override %s", candidate)
            return candidate
    return None


__all__ = [
    "CONFIG_DIR_NAME",
    "FINGERPRINT_DIR_NAME",
    "FINGERPRINT_PACKAGE",
    "GROQ_API_KEY_ENV",
    "GROQ_MODEL_ENV",
    "RESOURCE_PACKAGE",
    "SETTINGS_FILENAME",
    "TEMPLATE_DIR_NAME",
    "TEMPLATE_PACKAGE",
    "external_config_dirs",
    "find_config_file",
    "load_yaml_mapping",
]
