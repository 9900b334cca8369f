"""
nestedtags.config - Configuration loading and defaults

The persisted settings live in a ``.nestedtags.toml`` file. Missing
fields are backfilled from DEFAULT_CONFIG, and any value can be
overridden from the environment:

    NESTEDTAGS_ENABLECUSTOMCOLORS=false
    NESTEDTAGS_COLORS_ROOTTAGS=#00ff00
    NESTEDTAGS_EXPANSION_TARGET=root
    NESTEDTAGS_CUSTOMNODECOLORS='[{"nodeName": "F", "color": "#112233"}]'
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit import TOMLDocument

from nestedtags.config.defaults import CONFIG_FILENAME, DEFAULT_COLORS, DEFAULT_CONFIG, ENV_PREFIX
from nestedtags.graph.colors import ColorRules
from nestedtags.graph.expander import ExpansionOptions


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers."""
    return tomlkit.parse(content).unwrap()


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML text into a tomlkit document, keeping comments and layout."""
    return tomlkit.parse(content)


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the config file in start or any parent directory.

    Args:
        start: Directory to search from (default: current directory).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge overrides into a copy of defaults.

    Nested tables merge key by key; any other value (lists included) in
    overrides replaces the default wholesale.
    """
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value: JSON list/object, boolean, or plain string."""
    stripped = value.strip()
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _match_key(mapping: dict[str, Any], name: str) -> str:
    """Return the key of mapping matching name case-insensitively, or name."""
    for key in mapping:
        if key.lower() == name:
            return key
    return name


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply NESTEDTAGS_* environment variables to config in place.

    ``NESTEDTAGS_<KEY>`` sets a top-level key and
    ``NESTEDTAGS_<SECTION>_<KEY>`` a key of a table. Names are matched
    case-insensitively against existing keys.

    Returns:
        The same config mapping.
    """
    for env_name, raw in sorted(os.environ.items()):
        if not env_name.startswith(ENV_PREFIX):
            continue
        name = env_name[len(ENV_PREFIX) :].lower()
        if not name:
            continue
        value = _try_parse_env_value(raw)

        top_key = _match_key(config, name)
        if top_key in config and not isinstance(config[top_key], dict):
            config[top_key] = value
            continue

        if "_" not in name:
            config[top_key] = value
            continue

        section_name, key_name = name.split("_", 1)
        section_key = _match_key(config, section_name)
        section = config.setdefault(section_key, {})
        if not isinstance(section, dict):
            continue
        section[_match_key(section, key_name)] = value
    return config


def load_config(config_path: Path, apply_env: bool = True) -> dict[str, Any]:
    """Load a config file and backfill defaults for missing fields.

    Args:
        config_path: Path to the TOML file.
        apply_env: Apply NESTEDTAGS_* overrides. Pass False when the result
            will be written back, so overrides never end up in the file.

    Returns:
        Fully resolved configuration mapping.
    """
    user_config = parse_toml(config_path.read_text(encoding="utf-8"))
    config = merge_configs(DEFAULT_CONFIG, user_config)
    return _apply_env_overrides(config) if apply_env else config


def get_config(
    config_path: Path | None = None,
    start: Path | None = None,
    apply_env: bool = True,
) -> dict[str, Any]:
    """Resolve configuration from an explicit path, a discovered file, or defaults."""
    path = config_path or find_config_file(start)
    if path is not None and path.exists():
        return load_config(path, apply_env=apply_env)
    config = copy.deepcopy(DEFAULT_CONFIG)
    return _apply_env_overrides(config) if apply_env else config


def _update_table(table: Any, values: dict[str, Any]) -> None:
    for key, value in values.items():
        if isinstance(value, dict) and key in table and isinstance(table[key], dict):
            _update_table(table[key], value)
        else:
            table[key] = value


def save_config(config: dict[str, Any], config_path: Path) -> None:
    """Write config to config_path.

    An existing file is updated in place so comments and layout survive;
    otherwise a new document is written with plain keys before tables.
    """
    if config_path.exists():
        doc = parse_toml_document(config_path.read_text(encoding="utf-8"))
        scalars = {k: v for k, v in config.items() if k != "customNodeColors"}
        _update_table(doc, scalars)
        if "customNodeColors" in doc:
            del doc["customNodeColors"]
    else:
        doc = tomlkit.document()
        for key, value in config.items():
            if not isinstance(value, (dict, list)):
                doc.add(key, value)
        if not config.get("customNodeColors"):
            doc.add("customNodeColors", tomlkit.array())
        for key, value in config.items():
            if isinstance(value, dict):
                doc.add(key, value)

    rules = config.get("customNodeColors", [])
    if rules:
        array = tomlkit.aot()
        for rule in rules:
            array.append(tomlkit.item(dict(rule)))
        doc.add("customNodeColors", array)
    elif "customNodeColors" not in doc:
        doc.add("customNodeColors", tomlkit.array())

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def default_colors() -> dict[str, str]:
    """Return a fresh copy of the default palette."""
    return dict(DEFAULT_COLORS)


def rules_from_config(config: dict[str, Any]) -> ColorRules:
    """Build the ColorRules a resolved config describes."""
    return ColorRules.from_config(config)


def expansion_options_from_config(config: dict[str, Any]) -> ExpansionOptions:
    """Build ExpansionOptions from the ``[expansion]`` table.

    Raises:
        ValueError: If the table holds an unsupported value.
    """
    return ExpansionOptions.from_dict(config.get("expansion", {}))


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "default_colors",
    "expansion_options_from_config",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "rules_from_config",
    "save_config",
]
