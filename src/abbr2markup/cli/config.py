#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the abbr2markup CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, reading ``ABBR2MARKUP_*`` environment
variables, and merging them with command-line values.

Priority (highest first): command-line flags, environment variables,
configuration file, built-in defaults.
"""

import argparse
import json
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from abbr2markup.constants import CONFIG_FILENAMES, ENV_PREFIX
from abbr2markup.exceptions import ValidationError
from abbr2markup.options import ExpandOptions, JsonRendererOptions, MarkupRendererOptions, merge_parent_tag_table

# Keys accepted in configuration files and their value types
CONFIG_KEYS: Dict[str, type] = {
    "default_tag": str,
    "parent_tag_table": dict,
    "max_expanded_nodes": int,
    "indent_unit": str,
    "self_closing_style": str,
    "inline_text_max_length": int,
    "escape_text": bool,
    "format": str,
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.abbr2markup] section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.abbr2markup], or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("abbr2markup", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.abbr2markup] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root, checking each
    directory for ``.abbr2markup.toml``, ``.abbr2markup.yaml``,
    ``.abbr2markup.yml``, ``.abbr2markup.json``, then a ``pyproject.toml``
    that has a ``[tool.abbr2markup]`` section.

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
            except argparse.ArgumentTypeError:
                # Invalid pyproject.toml, keep searching
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

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
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

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
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def _coerce_env_value(key: str, raw: str) -> Any:
    expected = CONFIG_KEYS[key]
    if expected is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValidationError(f"{ENV_PREFIX}{key.upper()} must be a boolean, got {raw!r}", key, raw)
    if expected is int:
        try:
            return int(raw)
        except ValueError as e:
            raise ValidationError(
                f"{ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}", key, raw, original_error=e
            ) from e
    if expected is dict:
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"{ENV_PREFIX}{key.upper()} must be a JSON object", key, raw, original_error=e
            ) from e
        return value
    return raw


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read ``ABBR2MARKUP_<KEY>`` environment variables.

    Parameters
    ----------
    environ : Mapping, optional
        Environment to read, defaults to ``os.environ``

    Returns
    -------
    dict
        Configuration values found in the environment, typed per CONFIG_KEYS

    """
    environ = os.environ if environ is None else environ
    config: Dict[str, Any] = {}
    for key in CONFIG_KEYS:
        raw = environ.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is not None:
            config[key] = _coerce_env_value(key, raw)
    return config


def merge_configs(*configs: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge configuration mappings, later ones taking priority.

    ``parent_tag_table`` values are merged key by key rather than replaced.
    """
    merged: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if key == "parent_tag_table" and isinstance(value, Mapping) and key in merged:
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
    return merged


def validate_config(config: Mapping[str, Any]) -> None:
    """Check keys and value types of a merged configuration.

    Raises
    ------
    ValidationError
        On an unknown key or a value of the wrong type

    """
    for key, value in config.items():
        if key not in CONFIG_KEYS:
            raise ValidationError(f"Unknown configuration key: {key!r}", key, value)
        expected = CONFIG_KEYS[key]
        # bool is a subclass of int; reject it for integer settings
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValidationError(
                f"Configuration key {key!r} must be of type {expected.__name__}, got {type(value).__name__}",
                key,
                value,
            )
        if key == "parent_tag_table":
            for parent, child in value.items():
                if not isinstance(parent, str) or not isinstance(child, str):
                    raise ValidationError("parent_tag_table must map tag names to tag names", key, value)


def build_options(
    config: Mapping[str, Any],
) -> tuple[ExpandOptions, MarkupRendererOptions | JsonRendererOptions, str]:
    """Create option objects from a merged configuration.

    ``parent_tag_table`` from configuration extends the built-in table.

    Parameters
    ----------
    config : Mapping
        Merged configuration

    Returns
    -------
    tuple
        (expand options, renderer options, output format)

    Raises
    ------
    ValidationError
        If the configuration is invalid

    """
    validate_config(config)
    output_format = config.get("format", "markup")
    if output_format not in ("markup", "json"):
        raise ValidationError(f"format must be 'markup' or 'json', got {output_format!r}", "format", output_format)

    expand_kwargs: Dict[str, Any] = {}
    for key in ("default_tag", "max_expanded_nodes"):
        if key in config:
            expand_kwargs[key] = config[key]
    if "parent_tag_table" in config:
        expand_kwargs["parent_tag_table"] = merge_parent_tag_table(config["parent_tag_table"])

    renderer_kwargs: Dict[str, Any] = {}
    if output_format == "markup":
        for key in ("indent_unit", "self_closing_style", "inline_text_max_length", "escape_text"):
            if key in config:
                renderer_kwargs[key] = config[key]

    try:
        expand_options = ExpandOptions(**expand_kwargs)
        renderer_options: MarkupRendererOptions | JsonRendererOptions
        if output_format == "markup":
            renderer_options = MarkupRendererOptions(**renderer_kwargs)
        else:
            renderer_options = JsonRendererOptions()
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e

    return expand_options, renderer_options, output_format
