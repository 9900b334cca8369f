"""Test helpers for black-box graph testing.

This module provides factories and string conversion helpers for testing
the graph through observable output rather than internal state.
"""

from __future__ import annotations

from typing import Any

from nestedtags.graph import GraphDocument, GraphNode
from nestedtags.graph.serialize import deserialize_document


# === Record Factories ===


def tag_record(links: list[str] | None = None, **fields: Any) -> dict[str, Any]:
    """Host record for a tag node linking to the given IDs."""
    return {"type": "tag", "links": {target: True for target in links or []}, **fields}


def file_record(links: list[str] | None = None, **fields: Any) -> dict[str, Any]:
    """Host record for a file node linking to the given IDs."""
    return {"type": "", "links": {target: True for target in links or []}, **fields}


def build_document(records: dict[str, dict[str, Any]]) -> GraphDocument:
    """Deserialize a host node mapping into a GraphDocument."""
    return deserialize_document(records)


def make_node(node: GraphNode) -> GraphDocument:
    """Wrap a single node in a document."""
    return GraphDocument([node])


# === String Conversion Helpers ===


def links_string(document: GraphDocument, node_id: str) -> str:
    """Sorted, comma-separated link targets of a node."""
    node = document.find_by_id(node_id)
    if node is None:
        return "<missing>"
    return ",".join(sorted(node.links))


def ids_string(document: GraphDocument) -> str:
    """Sorted, comma-separated node IDs of a document."""
    return ",".join(sorted(document.node_ids()))


def assert_no_broken_links(document: GraphDocument) -> None:
    """Every link must reference an existing node."""
    broken = document.broken_references()
    assert broken == [], f"broken references: {[str(b) for b in broken]}"


def assert_symmetric(document: GraphDocument) -> None:
    """Every link must be mirrored with an equal payload."""
    pairs = document.asymmetric_links()
    assert pairs == [], f"asymmetric links: {pairs}"
