#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the orgtasks CLI.

Configuration files hold ``OrgTaskParserOptions`` fields at the top level,
for example::

    # .orgtasks.toml
    default_context = "home"
    warn_unknown_keywords = false

    [state_keywords]
    TODO = "not-started"
    STARTED = "actionable"
    DONE = "completed"

Keys may be spelled with dashes or underscores. A ``state_keywords`` table
replaces the built-in vocabulary; ``--keyword`` flags then extend it.
"""

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

from orgtasks.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_SECTION
from orgtasks.exceptions import ConfigError, ValidationError
from orgtasks.options.parser import OrgTaskParserOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.orgtasks]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    Each directory is checked for ``.orgtasks.toml``, ``.orgtasks.yaml``,
    ``.orgtasks.yml``, ``.orgtasks.json`` and finally a ``pyproject.toml``
    that has a ``[tool.orgtasks]`` table. The first match wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory (defaults to the current working directory)

    Returns
    -------
    Path or None
        Path of the first configuration file found

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
            except ConfigError as e:
                logger.debug("Ignoring unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parent directories are searched first (see :func:`find_config_in_parents`),
    then the dedicated config file names in the user's home directory.
    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be parsed, does not hold a
        mapping, or has an unsupported extension

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml, .yml or .json", str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping at top level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> tuple[Dict[str, Any], Optional[Path]]:
    """Load configuration with priority handling.

    Priority order (highest first):

    1. Explicit config file path (``--config``)
    2. Environment variable path (``ORGTASKS_CONFIG``)
    3. Auto-discovered config file

    Only one source is loaded. An explicit or environment path that does
    not exist is an error; discovery that finds nothing yields an empty
    configuration.

    Returns
    -------
    tuple[dict, Path or None]
        Configuration mapping and the file it came from

    """
    if explicit_path:
        path: Optional[Path] = Path(explicit_path)
    elif env_var_path:
        path = Path(env_var_path)
    else:
        path = discover_config_file(start_dir)

    if path is None:
        logger.debug("No configuration file found")
        return {}, None

    logger.debug("Loading configuration from %s", path)
    return load_config_file(path), path


def env_config_path() -> Optional[str]:
    """Return the configuration path named by ``ORGTASKS_CONFIG``, if set."""
    return os.environ.get(CONFIG_ENV_VAR) or None


def options_from_config(config: Dict[str, Any], config_path: Optional[Path] = None) -> OrgTaskParserOptions:
    """Build parser options from a configuration mapping.

    Raises
    ------
    ConfigError
        If the mapping names an unknown option or holds an invalid value

    """
    try:
        return OrgTaskParserOptions.from_mapping(config)
    except ValidationError as e:
        source = f" in {config_path}" if config_path else ""
        raise ConfigError(f"Invalid configuration{source}: {e.message}", str(config_path or ""), e) from e
