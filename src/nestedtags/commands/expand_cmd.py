"""
nestedtags.commands.expand_cmd - Rewrite a graph payload offline.

Reads a host payload (``{"nodes": {...}}`` or a bare node mapping) from a
file or stdin, expands compound tags, resolves colors, and writes the
result as JSON.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Any

from nestedtags.config import expansion_options_from_config, get_config, rules_from_config
from nestedtags.graph.expander import RedirectTarget
from nestedtags.host import transform_payload


def load_payload(source: str) -> dict[str, Any]:
    """Read a payload from a path, or stdin for ``-``.

    A bare node mapping is wrapped as ``{"nodes": mapping}``.

    Raises:
        ValueError: If the input is not a JSON object.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("graph payload must be a JSON object")
    if not isinstance(data.get("nodes"), dict):
        data = {"nodes": data}
    return data


def run(args: argparse.Namespace) -> int:
    """Run the expand command."""
    config = get_config(getattr(args, "config", None))
    options = expansion_options_from_config(config)
    rules = rules_from_config(config)

    target = getattr(args, "target", None)
    if target:
        options = dataclasses.replace(options, target=RedirectTarget(target))
    if getattr(args, "no_colors", False):
        rules.enabled = False

    data = load_payload(args.input)
    result = transform_payload(data, rules, options)

    output = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if args.output:
        args.output.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if result is None or result.failed:
        print("Error: rewrite failed; payload written unmodified", file=sys.stderr)
        return 1

    if not getattr(args, "quiet", False):
        print(
            f"Expanded {len(result.expanded)} compound tag(s), skipped {len(result.skipped)}",
            file=sys.stderr,
        )
        for skipped in result.skipped:
            print(f"  skipped {skipped}", file=sys.stderr)
        if getattr(args, "verbose", False):
            created = len(result.log.by_operation("create_node"))
            redirected = len(result.log.by_operation("redirect_link"))
            print(f"  {created} node(s) created, {redirected} link(s) redirected", file=sys.stderr)
            for entry in result.log.iter_entries():
                print(f"  {entry}", file=sys.stderr)
    return 0
