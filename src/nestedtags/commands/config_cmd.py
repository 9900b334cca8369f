"""
nestedtags.commands.config_cmd - Inspect and edit the settings file.

- `nestedtags config path` - Show which config file is in effect
- `nestedtags config show` - Print the resolved configuration
- `nestedtags config init` - Write a config file with the defaults
- `nestedtags config reset-colors` - Restore the default palette
- `nestedtags config set-color KEY COLOR` - Set one palette entry
- `nestedtags config enable|disable FEATURE` - Toggle custom-colors or node-colors

Commands that write the file load it without NESTEDTAGS_* overrides, so an
override in the environment is never persisted.
"""

from __future__ import annotations

import argparse
import copy
import json
import sys
from pathlib import Path

from nestedtags.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    default_colors,
    find_config_file,
    get_config,
    save_config,
)
from nestedtags.graph.colors import is_valid_color

# Palette keys accepted by `config set-color`
PALETTE_KEYS = tuple(DEFAULT_CONFIG["colors"])

# Feature names accepted by `config enable|disable`, and the keys they toggle
FEATURE_KEYS = {
    "custom-colors": "enableCustomColors",
    "node-colors": "enableCustomNodeColors",
}


def resolve_config_path(args: argparse.Namespace) -> Path:
    """Config path to write to: --config, a discovered file, or ./.nestedtags.toml."""
    explicit = getattr(args, "config", None)
    if explicit:
        return explicit
    return find_config_file() or Path.cwd() / CONFIG_FILENAME


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)

    if action == "path":
        return _show_path(args)
    elif action == "show":
        return _show_config(args)
    elif action == "init":
        return _init_config(args)
    elif action == "reset-colors":
        return _reset_colors(args)
    elif action == "set-color":
        return _set_color(args)
    elif action in ("enable", "disable"):
        return _toggle_feature(args, action == "enable")
    else:
        print(
            "Usage: nestedtags config <path|show|init|reset-colors|set-color|enable|disable>",
            file=sys.stderr,
        )
        return 1


def _show_path(args: argparse.Namespace) -> int:
    path = getattr(args, "config", None) or find_config_file()
    if path is None:
        print(f"No {CONFIG_FILENAME} found (using defaults)")
        return 1
    print(path)
    return 0


def _show_config(args: argparse.Namespace) -> int:
    config = get_config(getattr(args, "config", None))
    print(json.dumps(config, indent=2, ensure_ascii=False))
    return 0


def _init_config(args: argparse.Namespace) -> int:
    path = getattr(args, "config", None) or Path.cwd() / CONFIG_FILENAME
    if path.exists() and not getattr(args, "force", False):
        print(f"Error: {path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    if path.exists():
        path.unlink()
    save_config(copy.deepcopy(DEFAULT_CONFIG), path)
    print(f"Created {path}")
    return 0


def _save(args: argparse.Namespace, path: Path, config: dict, message: str) -> int:
    save_config(config, path)
    if not getattr(args, "quiet", False):
        print(f"{message} in {path}")
    return 0


def _reset_colors(args: argparse.Namespace) -> int:
    path = resolve_config_path(args)
    config = get_config(path, apply_env=False)
    config["colors"] = default_colors()
    return _save(args, path, config, "Reset colors")


def _set_color(args: argparse.Namespace) -> int:
    if not is_valid_color(args.color):
        print(f"Error: invalid color {args.color!r} (expected #RRGGBB)", file=sys.stderr)
        return 1

    path = resolve_config_path(args)
    config = get_config(path, apply_env=False)
    config["colors"][args.key] = args.color
    return _save(args, path, config, f"Set {args.key} to {args.color}")


def _toggle_feature(args: argparse.Namespace, enabled: bool) -> int:
    key = FEATURE_KEYS[args.feature]
    path = resolve_config_path(args)
    config = get_config(path, apply_env=False)
    config[key] = enabled
    state = "Enabled" if enabled else "Disabled"
    return _save(args, path, config, f"{state} {args.feature}")
