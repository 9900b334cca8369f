"""
nestedtags.commands.check_cmd - Check a payload against the expanded-graph invariants.

Reports:
- Compound tags still present
- Links to nodes that do not exist
- Links that are not mirrored on the other side
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field

from nestedtags.commands.expand_cmd import load_payload
from nestedtags.config import expansion_options_from_config, get_config
from nestedtags.graph.document import GraphDocument
from nestedtags.graph.serialize import deserialize_document


@dataclass
class CheckReport:
    """Invariant violations found in one document."""

    compound_ids: list[str] = field(default_factory=list)
    broken: list[str] = field(default_factory=list)
    asymmetric: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.compound_ids or self.broken or self.asymmetric)

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "compound_ids": self.compound_ids,
            "broken_references": self.broken,
            "asymmetric_links": self.asymmetric,
        }


def check_document(document: GraphDocument, separator: str) -> CheckReport:
    """Collect invariant violations of an expanded document."""
    return CheckReport(
        compound_ids=document.compound_ids(separator),
        broken=[str(ref) for ref in document.broken_references()],
        asymmetric=[f"{a} -> {b}" for a, b in document.asymmetric_links()],
    )


def run(args: argparse.Namespace) -> int:
    """Run the check command."""
    config = get_config(getattr(args, "config", None))
    options = expansion_options_from_config(config)

    data = load_payload(args.input)
    report = check_document(deserialize_document(data["nodes"]), options.separator)

    if getattr(args, "json", False):
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.ok else 1

    sections = [
        ("Compound tags", report.compound_ids),
        ("Broken references", report.broken),
        ("Asymmetric links", report.asymmetric),
    ]
    for title, items in sections:
        if items:
            print(f"{title} ({len(items)}):")
            for item in items:
                print(f"  {item}")

    if report.ok:
        print("✓ Graph is fully expanded and consistent")
        return 0
    return 1
