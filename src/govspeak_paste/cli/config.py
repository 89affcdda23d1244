#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the govspeak-paste CLI.

Configuration files hold GovspeakOptions field values, keyed by field name
in snake or kebab case:

.. code-block:: toml

    # .govspeak-paste.toml
    bullet-list-marker = "*"
    list-indent = "    "

or, in ``pyproject.toml``:

.. code-block:: toml

    [tool.govspeak-paste]
    bullet-list-marker = "*"
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from govspeak_paste.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_SECTION
from govspeak_paste.exceptions import ConfigError
from govspeak_paste.options import GovspeakOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.govspeak-paste] section from a pyproject.toml file.

    Returns an empty dict when the section is absent.
    """
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` (default: the current directory) to the
    filesystem root. In each directory the dedicated config files are checked
    first, then ``pyproject.toml``, which only counts when it has a
    ``[tool.govspeak-paste]`` section.

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
            if not config_path.is_file():
                continue
            if filename != "pyproject.toml":
                return config_path
            try:
                if _load_pyproject_section(config_path):
                    return config_path
            except (tomllib.TOMLDecodeError, ConfigError, OSError) as e:
                logger.warning("Ignoring unreadable %s: %s", config_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Return the configuration file to use when none was given explicitly.

    The ``GOVSPEAK_PASTE_CONFIG`` environment variable wins; otherwise the
    nearest configuration file in the current directory or its parents.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return find_config_in_parents()


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
            )
    except ConfigError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # TOMLDecodeError and JSONDecodeError are ValueErrors
        raise ConfigError(
            f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            config_path=str(config_path),
        )

    logger.debug("Loaded configuration from %s", config_path)
    return config


def options_from_config(config: Dict[str, Any], base: GovspeakOptions | None = None) -> GovspeakOptions:
    """Build GovspeakOptions from a configuration mapping.

    Keys may use kebab or snake case. Unknown keys are logged and ignored.

    Parameters
    ----------
    config : dict
        Configuration values
    base : GovspeakOptions, optional
        Options to update, defaults to ``GovspeakOptions()``

    Returns
    -------
    GovspeakOptions
        Updated options

    """
    known = set(GovspeakOptions.field_names())
    updates: Dict[str, Any] = {}
    for key, value in config.items():
        field_name = str(key).replace("-", "_")
        if field_name not in known:
            logger.warning("Ignoring unknown configuration option: %s", key)
            continue
        updates[field_name] = value
    return (base or GovspeakOptions()).create_updated(**updates)
