#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for docxcompare.

Settings are read from the first of these found while walking from the
current directory up to the filesystem root:

1. ``.docxcompare.toml``
2. ``.docxcompare.yaml`` / ``.docxcompare.yml``
3. ``.docxcompare.json``
4. ``pyproject.toml`` with a ``[tool.docxcompare]`` table

``DOCXCOMPARE_CONFIG`` or ``--config`` point at a file explicitly. Values
found here are overridden by environment variables and CLI flags.

Example ``.docxcompare.toml``::

    semantic_review = true
    reviewer = "text"
    replace_expected = false
    log_level = "DEBUG"

"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from docxcompare.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAMES,
    CONFIG_KEYS,
    LOG_LEVELS,
    PYPROJECT_SECTION,
    REVIEWER_NAMES,
)
from docxcompare.exceptions import ValidationError

logger = logging.getLogger(__name__)

_BOOL_KEYS = ("semantic_review", "replace_expected", "trace", "rich")
_STR_KEYS = ("log_level", "log_file")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.docxcompare]`` table from a pyproject.toml file."""
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Invalid TOML in {pyproject_path}: {e}", original_error=e) from e
    except OSError as e:
        raise ValidationError(f"Error reading {pyproject_path}: {e}", original_error=e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(config, dict):
        raise ValidationError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ValidationError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Locate the configuration file to use, honouring ``DOCXCOMPARE_CONFIG``."""
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)
    return find_config_in_parents(start_dir)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Raw configuration mapping

    Raises
    ------
    ValidationError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ValidationError(f"Configuration file does not exist: {config_path}", parameter_name="config")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ValidationError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml, or .json", parameter_name="config"
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(f"Invalid config file {config_path}: {e}", original_error=e) from e
    except OSError as e:
        raise ValidationError(f"Error reading config file {config_path}: {e}", original_error=e) from e

    if not isinstance(config, dict):
        raise ValidationError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check types and values of known keys and drop unknown ones.

    Raises
    ------
    ValidationError
        If a known key has a value of the wrong type or out of range

    """
    validated: Dict[str, Any] = {}
    for key, value in config.items():
        if key not in CONFIG_KEYS:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue

        if key in _BOOL_KEYS and not isinstance(value, bool):
            raise ValidationError(f"{key} must be true or false, got {value!r}", key, value)
        if key in _STR_KEYS and not isinstance(value, str):
            raise ValidationError(f"{key} must be a string, got {value!r}", key, value)
        if key == "reviewer" and value not in REVIEWER_NAMES:
            raise ValidationError(f"reviewer must be one of {', '.join(REVIEWER_NAMES)}, got {value!r}", key, value)
        if key == "chunk_size" and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
            raise ValidationError(f"chunk_size must be a positive integer, got {value!r}", key, value)
        if key == "log_level":
            if value.upper() not in LOG_LEVELS:
                raise ValidationError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}", key, value)
            value = value.upper()

        validated[key] = value
    return validated


def load_config(config_path: Path | str | None = None, no_config: bool = False) -> Dict[str, Any]:
    """Load and validate the effective configuration file.

    Parameters
    ----------
    config_path : Path or str, optional
        Explicit configuration file; skips discovery
    no_config : bool, default False
        Ignore configuration files entirely

    Returns
    -------
    dict
        Validated settings, empty when no file applies

    """
    if no_config:
        return {}

    path = Path(config_path) if config_path else discover_config_file()
    if path is None:
        return {}

    logger.debug("Loading configuration from %s", path)
    return validate_config(load_config_file(path))


__all__ = ["discover_config_file", "find_config_in_parents", "load_config", "load_config_file", "validate_config"]
