"""GraphNode - Node representation for the tag/file graph.

This module provides the core data structures of a graph document:
- NodeKind: Enum of node types
- NodeRole: Derived structural role of a node
- GraphNode: Node with embedded, undirected links
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class NodeKind(Enum):
    """Types of nodes in the graph document."""

    TAG = "tag"
    FILE = "file"


class NodeRole(Enum):
    """Structural role of a node, derived during expansion.

    The role drives the default palette entry a node is painted with.
    """

    ROOT_TAG = "root-tag"
    CHILD_NODE = "child-node"
    FILE = "file"

    @classmethod
    def for_level(cls, level: int) -> NodeRole:
        """Return the tag role for a hierarchy depth."""
        return cls.ROOT_TAG if level == 0 else cls.CHILD_NODE


@dataclass
class GraphNode:
    """A node in the graph document.

    Links are stored on the node itself as a mapping of neighbor ID to an
    opaque payload supplied by the host. Payloads are carried along when a
    link moves but never reinterpreted.

    Attributes:
        id: Unique identifier for this node.
        kind: The type of node (tag or file).
        display_name: Canonical display text. Alias fields read by the
            host are projected from it at serialization time once the
            node is normalized.
        level: Hierarchy depth for tag nodes (0 = root tag).
        role: Derived structural role.
        related_files: File IDs aggregated across compound paths.
        aliases: Mirror of related_files exposed under the host's name.
        color: Resolved fill color.
        stroke_color: Outline color derived from the fill.
        host_type: Raw ``type`` value from the host, when it was not one of
            the NodeKind values (e.g. ``"attachment"``).
    """

    id: str
    kind: NodeKind
    display_name: str = ""
    level: int | None = None
    role: NodeRole | None = None
    related_files: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    color: str | None = None
    stroke_color: str | None = None
    host_type: str | None = None
    links: dict[str, Any] = field(default_factory=dict)

    # Host fields we do not model, preserved verbatim
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    # Set once expansion has normalized the display name; only then are
    # alias fields rewritten on serialization
    normalized: bool = field(default=False, repr=False)

    @property
    def is_tag(self) -> bool:
        """True for tag nodes."""
        return self.kind == NodeKind.TAG

    # Link access
    def iter_links(self) -> Iterator[tuple[str, Any]]:
        """Iterate over (neighbor_id, payload) pairs."""
        yield from self.links.items()

    def has_link(self, node_id: str) -> bool:
        """Check if this node holds a link to node_id."""
        return node_id in self.links

    def link(self, other: GraphNode, payload: Any = True) -> Any:
        """Link two nodes symmetrically.

        An existing payload on either side wins over the given one, so
        linking an already-linked pair never overwrites what the host
        supplied. Both sides end up with the same payload.

        Args:
            other: The node to link to.
            payload: Payload to use when neither side has one yet.

        Returns:
            The payload stored on both sides.
        """
        if other.id == self.id:
            raise ValueError(f"Cannot link node {self.id} to itself")

        if other.id in self.links:
            payload = self.links[other.id]
        elif self.id in other.links:
            payload = other.links[self.id]

        self.links[other.id] = payload
        other.links[self.id] = payload
        return payload

    def unlink(self, node_id: str) -> Any:
        """Remove this node's link to node_id and return its payload."""
        return self.links.pop(node_id, None)

    def merge_related_files(self, file_ids: list[str]) -> None:
        """Add file IDs to related_files/aliases without dropping any."""
        for file_id in file_ids:
            if file_id not in self.related_files:
                self.related_files.append(file_id)
            if file_id not in self.aliases:
                self.aliases.append(file_id)
