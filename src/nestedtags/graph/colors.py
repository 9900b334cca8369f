"""Color Resolver - Assign fill and stroke colors to graph nodes.

Colors are resolved per node from a layered rule set, first match wins:

1. Custom node rules, in list order (when enabled).
2. Shallow depth markers: a tag named ``1``, ``2`` or ``3`` always uses
   the matching child-level palette entry.
3. The role palette (root tag, child level N, file).
4. DEFAULT_COLOR.

Every resolved value is validated; anything that is not ``#RRGGBB``
becomes DEFAULT_COLOR. The stroke color is the fill darkened by
STROKE_DELTA per channel.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from nestedtags.graph.document import GraphDocument
from nestedtags.graph.expander import DEFAULT_MARKER, strip_marker
from nestedtags.graph.GraphNode import GraphNode, NodeRole

DEFAULT_COLOR = "#999999"
STROKE_DELTA = 30
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# Bare tag names that always get a fixed child-level color
DEPTH_MARKER_LEVELS = {"1": 1, "2": 2, "3": 3}

# Suffix stripped from file node IDs when matching rule names
FILE_EXTENSION = ".md"


def is_valid_color(value: Any) -> bool:
    """Check that value is a ``#RRGGBB`` string."""
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None


def validate_color(value: Any, default: str = DEFAULT_COLOR) -> str:
    """Return value if it is a valid color, otherwise the default."""
    return value if is_valid_color(value) else default


def derive_stroke_color(color: str, delta: int = STROKE_DELTA) -> str:
    """Darken a ``#RRGGBB`` color by delta on every channel, clamped at 0.

    Example:
        >>> derive_stroke_color("#112233")
        '#000415'
    """
    color = validate_color(color)
    channels = [int(color[i : i + 2], 16) for i in (1, 3, 5)]
    return "#" + "".join(f"{max(0, c - delta):02x}" for c in channels)


@dataclass
class CustomNodeColor:
    """A color rule for nodes matching a name.

    Attributes:
        node_name: Name to match against node IDs and display names.
        color: ``#RRGGBB`` color applied on match.
        enabled: Disabled rules are ignored.
    """

    node_name: str
    color: str
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomNodeColor:
        """Create from a ``customNodeColors`` entry."""
        return cls(
            node_name=str(data.get("nodeName", "")),
            color=str(data.get("color", "")),
            enabled=bool(data.get("enabled", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a ``customNodeColors`` entry."""
        return {"nodeName": self.node_name, "color": self.color, "enabled": self.enabled}

    def matches(self, node: GraphNode) -> bool:
        """Check whether this rule applies to a node.

        A rule matches if its name equals the node ID, equals the ID with
        the ``.md`` suffix stripped, is a substring of the ID, or equals
        the display name. Rules with an empty name match nothing.
        """
        name = self.node_name
        if not name:
            return False
        node_id = node.id
        if name == node_id:
            return True
        if node_id.endswith(FILE_EXTENSION) and name == node_id[: -len(FILE_EXTENSION)]:
            return True
        if name in node_id:
            return True
        return name == node.display_name


@dataclass
class RoleColors:
    """Fallback palette keyed by structural role and level."""

    file: str = "#2563eb"
    root_tag: str = "#16a34a"
    child_level1: str = "#fb923c"
    child_level2: str = "#ea580c"
    child_level3: str = "#dc2626"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoleColors:
        """Create from the ``colors`` config table, defaults for missing keys."""
        defaults = cls()
        return cls(
            file=data.get("fileNodes", defaults.file),
            root_tag=data.get("rootTags", defaults.root_tag),
            child_level1=data.get("childLevel1", defaults.child_level1),
            child_level2=data.get("childLevel2", defaults.child_level2),
            child_level3=data.get("childLevel3", defaults.child_level3),
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize to the ``colors`` config table."""
        return {
            "fileNodes": self.file,
            "rootTags": self.root_tag,
            "childLevel1": self.child_level1,
            "childLevel2": self.child_level2,
            "childLevel3": self.child_level3,
        }

    def for_child_level(self, level: int) -> str:
        """Palette entry for a child level; deeper levels reuse level 3."""
        if level <= 1:
            return self.child_level1
        if level == 2:
            return self.child_level2
        return self.child_level3


@dataclass
class ColorRules:
    """Everything the resolver needs, passed in explicitly.

    Attributes:
        enabled: Master switch (``enableCustomColors``).
        node_rules_enabled: Switch for node_rules (``enableCustomNodeColors``).
        node_rules: Ordered custom rules (``customNodeColors``).
        role_colors: Fallback palette (``colors``).
        marker: Hierarchy marker stripped before depth-marker matching.
    """

    enabled: bool = True
    node_rules_enabled: bool = True
    node_rules: list[CustomNodeColor] = field(default_factory=list)
    role_colors: RoleColors = field(default_factory=RoleColors)
    marker: str = DEFAULT_MARKER

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ColorRules:
        """Create ColorRules from a resolved configuration mapping."""
        expansion = config.get("expansion", {})
        return cls(
            enabled=bool(config.get("enableCustomColors", True)),
            node_rules_enabled=bool(config.get("enableCustomNodeColors", True)),
            node_rules=[
                CustomNodeColor.from_dict(entry)
                for entry in config.get("customNodeColors", [])
                if isinstance(entry, dict)
            ],
            role_colors=RoleColors.from_dict(config.get("colors", {})),
            marker=expansion.get("marker", DEFAULT_MARKER),
        )


def resolve_node_color(node: GraphNode, rules: ColorRules) -> str:
    """Resolve the validated fill color of a single node."""
    color: str | None = None

    if rules.node_rules_enabled:
        for rule in rules.node_rules:
            if rule.enabled and rule.matches(node):
                color = rule.color
                break

    if color is None and node.is_tag:
        level = DEPTH_MARKER_LEVELS.get(strip_marker(node.id, rules.marker))
        if level is not None:
            color = rules.role_colors.for_child_level(level)

    if color is None:
        palette = rules.role_colors
        if node.role == NodeRole.CHILD_NODE:
            color = palette.for_child_level(node.level or 1)
        elif node.role == NodeRole.ROOT_TAG or (node.role is None and node.is_tag):
            # Unexpanded tags render flat, like roots
            color = palette.root_tag
        else:
            color = palette.file

    return validate_color(color)


def annotate_colors(node: GraphNode, rules: ColorRules) -> None:
    """Set color and stroke_color on one node."""
    node.color = resolve_node_color(node, rules)
    node.stroke_color = derive_stroke_color(node.color)


def resolve_colors(document: GraphDocument, rules: ColorRules) -> None:
    """Resolve colors for every node of an expanded document.

    When rules.enabled is False no colors are assigned, and any left over
    from an earlier render are cleared.
    """
    for node in document.all_nodes():
        if rules.enabled:
            annotate_colors(node, rules)
        else:
            node.color = None
            node.stroke_color = None


__all__ = [
    "DEFAULT_COLOR",
    "STROKE_DELTA",
    "ColorRules",
    "CustomNodeColor",
    "RoleColors",
    "annotate_colors",
    "derive_stroke_color",
    "is_valid_color",
    "resolve_colors",
    "resolve_node_color",
    "validate_color",
]
