#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/cli/config.py
"""Configuration file discovery and loading for the md2term CLI.

Config files hold default rendering options as a flat table:

.. code-block:: toml

    # .md2term.toml
    symbol = true
    center = 4
    table_style = "box"

Keys are option names (``show_symbols``, ``center_offset``) or their
command-line spellings (``symbol``, ``center``, ``hr-width``). The same
table can live under ``[tool.md2term]`` in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from md2term.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from md2term.exceptions import ConfigError
from md2term.options.terminal import TerminalRendererOptions

logger = logging.getLogger(__name__)

DEDICATED_CONFIG_FILENAMES = [name for name in CONFIG_FILENAMES if name != "pyproject.toml"]


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.md2term]`` table of a pyproject.toml file.

    Returns an empty dict when the section is missing.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", config_path=str(pyproject_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path)) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory
    the dedicated files (``.md2term.toml``, ``.md2term.yaml``,
    ``.md2term.yml``, ``.md2term.json``) are checked first, then a
    ``pyproject.toml`` that has a ``[tool.md2term]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a JSON, TOML, YAML or pyproject.toml configuration file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Raw configuration table

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed or has an unsupported
        extension

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

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
            if config is None:
                config = {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml",
                config_path=str(config_path),
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", config_path=str(config_path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", config_path=str(config_path)) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a table at root level, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def option_key_aliases() -> Dict[str, str]:
    """Map every accepted config key to its option field name."""
    aliases: Dict[str, str] = {}
    for field in fields(TerminalRendererOptions):
        names = {field.name, field.name.replace("_", "-")}
        cli_name = field.metadata.get("cli_name")
        if cli_name:
            names.update({cli_name, cli_name.replace("_", "-"), cli_name.replace("-", "_")})
        for name in names:
            aliases[name] = field.name
    return aliases


def normalize_config(config: Dict[str, Any], config_path: Optional[str] = None) -> Dict[str, Any]:
    """Resolve config keys to option field names and check value types.

    Raises
    ------
    ConfigError
        For unknown keys or values of the wrong type

    Examples
    --------
        >>> normalize_config({"symbol": True, "hr-width": 20})
        {'show_symbols': True, 'hr_width': 20}

    """
    aliases = option_key_aliases()
    field_types = {f.name: type(f.default) for f in fields(TerminalRendererOptions)}
    normalized: Dict[str, Any] = {}

    for key, value in config.items():
        field_name = aliases.get(key)
        if field_name is None:
            raise ConfigError(f"Unknown configuration key: {key!r}", config_path=config_path)

        expected = field_types[field_name]
        # bool is a subclass of int and must not pass as a number
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"Configuration key {key!r} must be of type {expected.__name__}, got {type(value).__name__}",
                config_path=config_path,
            )
        normalized[field_name] = value

    return normalized


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    no_config: bool = False,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load the configuration table that applies to this run.

    An explicit ``--config`` path wins; otherwise the nearest config file
    above ``start_dir`` is used. ``--no-config`` disables discovery but not
    an explicit path.

    Returns
    -------
    dict
        Option field names mapped to configured values

    """
    if explicit_path:
        path: Optional[Path] = Path(explicit_path)
    elif no_config:
        return {}
    else:
        path = find_config_in_parents(start_dir)

    if path is None:
        logger.debug("No configuration file found")
        return {}

    logger.debug(f"Loading configuration from {path}")
    return normalize_config(load_config_file(path), config_path=str(path))
