"""Graph Document - Container for the nodes handed over by the host.

The document is an ordered mapping of node ID to GraphNode. There is no
separate edge list; edges live in each node's ``links`` mapping.
"""

from __future__ import annotations

import copy
from typing import Iterator

from nestedtags.graph.GraphNode import GraphNode, NodeKind
from nestedtags.graph.mutations import BrokenReference


class GraphDocument:
    """Indexed access to every node of a graph document.

    Insertion order is preserved and is the order in which nodes are
    visited by all iterators, which keeps rewrites deterministic.
    """

    def __init__(self, nodes: list[GraphNode] | None = None) -> None:
        self._index: dict[str, GraphNode] = {}
        for node in nodes or []:
            self.add_node(node)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self._index)

    def find_by_id(self, node_id: str) -> GraphNode | None:
        """Find node by ID.

        Args:
            node_id: The node ID to find.

        Returns:
            The GraphNode if found, None otherwise.
        """
        return self._index.get(node_id)

    def all_nodes(self) -> Iterator[GraphNode]:
        """Iterate over all nodes in insertion order."""
        yield from list(self._index.values())

    def nodes_by_kind(self, kind: NodeKind) -> Iterator[GraphNode]:
        """Iterate nodes of a specific kind."""
        for node in list(self._index.values()):
            if node.kind == kind:
                yield node

    def node_ids(self) -> list[str]:
        """Return all node IDs in insertion order."""
        return list(self._index)

    def add_node(self, node: GraphNode) -> None:
        """Add a node, replacing any node with the same ID."""
        self._index[node.id] = node

    def remove_node(self, node_id: str) -> GraphNode | None:
        """Remove a node from the index.

        Links other nodes hold to it are left alone; callers redirect
        them first.

        Returns:
            The removed node, or None if it was not present.
        """
        return self._index.pop(node_id, None)

    def holders_of(self, node_id: str) -> list[GraphNode]:
        """Return every node holding a link to node_id."""
        return [n for n in self._index.values() if n.has_link(node_id)]

    def compound_ids(self, separator: str) -> list[str]:
        """Return IDs of tag nodes that contain the separator."""
        return [
            node.id
            for node in self._index.values()
            if node.kind == NodeKind.TAG and separator in node.id
        ]

    def clone(self) -> GraphDocument:
        """Create a deep copy of this document.

        The new document is completely independent - mutations to one
        do not affect the other.
        """
        return copy.deepcopy(self)

    def restore(self, snapshot: GraphDocument) -> None:
        """Replace this document's contents with those of a snapshot.

        Used to roll back a failed rewrite while keeping the caller's
        reference to this document valid.
        """
        self._index = snapshot.clone()._index

    # ─────────────────────────────────────────────────────────────────────────
    # Detection API: Broken and one-sided links
    # ─────────────────────────────────────────────────────────────────────────

    def broken_references(self) -> list[BrokenReference]:
        """Find links whose target is not in the document."""
        broken = []
        for node in self._index.values():
            for target_id in node.links:
                if target_id not in self._index:
                    broken.append(BrokenReference(source_id=node.id, target_id=target_id))
        return broken

    def asymmetric_links(self) -> list[tuple[str, str]]:
        """Find (a, b) pairs where a links b but b lacks the same link back.

        A pair whose payloads differ on the two sides is reported too.
        Links to missing nodes are reported by broken_references() instead.
        """
        pairs = []
        for node in self._index.values():
            for target_id, payload in node.links.items():
                target = self._index.get(target_id)
                if target is None:
                    continue
                if node.id not in target.links or target.links[node.id] != payload:
                    pairs.append((node.id, target_id))
        return pairs


__all__ = ["GraphDocument"]
