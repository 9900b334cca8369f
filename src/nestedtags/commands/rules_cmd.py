"""
nestedtags.commands.rules_cmd - Manage custom node color rules.

- `nestedtags rules list` - Show rules with their index
- `nestedtags rules add NAME COLOR` - Append an enabled rule
- `nestedtags rules edit INDEX [--name NAME] [--color COLOR]` - Change a rule
- `nestedtags rules remove INDEX` - Delete a rule
- `nestedtags rules enable|disable INDEX` - Toggle a rule

Rules are stored in the ``customNodeColors`` array of the config file.
Indexes are 1-based, as printed by `rules list`.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from nestedtags.commands.config_cmd import resolve_config_path
from nestedtags.config import get_config, save_config
from nestedtags.graph.colors import CustomNodeColor, is_valid_color


def _check_color(color: str) -> bool:
    if is_valid_color(color):
        return True
    print(f"Error: invalid color {color!r} (expected #RRGGBB)", file=sys.stderr)
    return False


def run(args: argparse.Namespace) -> int:
    """Run the rules command."""
    action = getattr(args, "rules_action", None)
    path = resolve_config_path(args)

    if action == "list":
        config = get_config(path)
        rules = [CustomNodeColor.from_dict(entry) for entry in config.get("customNodeColors", [])]
        return _list_rules(rules, config)

    # Written back to the file, so leave environment overrides out
    config = get_config(path, apply_env=False)
    rules = [CustomNodeColor.from_dict(entry) for entry in config.get("customNodeColors", [])]

    if action == "add":
        if not _check_color(args.color):
            return 1
        rules.append(CustomNodeColor(node_name=args.name, color=args.color, enabled=True))
    elif action in ("edit", "remove", "enable", "disable"):
        index = args.index - 1
        if not 0 <= index < len(rules):
            print(f"Error: no rule #{args.index} ({len(rules)} defined)", file=sys.stderr)
            return 1
        if action == "edit":
            if args.name is None and args.color is None:
                print("Error: nothing to change (use --name and/or --color)", file=sys.stderr)
                return 1
            if args.color is not None:
                if not _check_color(args.color):
                    return 1
                rules[index].color = args.color
            if args.name is not None:
                rules[index].node_name = args.name
        elif action == "remove":
            del rules[index]
        else:
            rules[index].enabled = action == "enable"
    else:
        print("Usage: nestedtags rules <list|add|edit|remove|enable|disable>", file=sys.stderr)
        return 1

    config["customNodeColors"] = [rule.to_dict() for rule in rules]
    save_config(config, path)
    if not getattr(args, "quiet", False):
        print(f"Updated {len(rules)} rule(s) in {path}")
    return 0


def _list_rules(rules: list[CustomNodeColor], config: dict[str, Any]) -> int:
    if not rules:
        print("No custom node color rules defined")
        return 0
    if not config.get("enableCustomNodeColors", True):
        print("(custom node colors are disabled)")
    for i, rule in enumerate(rules, start=1):
        status_icon = "✓" if rule.enabled else "○"
        print(f"{i:3}. {status_icon} {rule.node_name}  {rule.color}")
    return 0
