"""Graph Serialization - Convert between host records and GraphDocument.

The host hands over ``{node_id: record}`` where each record carries a
``type`` and a ``links`` mapping. Its rendering surface reads several
display-text fields interchangeably; we keep a single ``display_name`` on
GraphNode and project it onto every alias field when serializing a tag
node the expander normalized, so the aliases can never drift apart. Tags
left alone (skipped compounds) keep their alias fields exactly as received.
"""

from __future__ import annotations

from typing import Any

from nestedtags.graph.document import GraphDocument
from nestedtags.graph.GraphNode import GraphNode, NodeKind, NodeRole

# Display-text fields the host reads interchangeably
DISPLAY_ALIAS_FIELDS = (
    "path",
    "name",
    "displayText",
    "title",
    "label",
    "text",
    "displayName",
)

# Record keys mapped onto GraphNode attributes
_MODELLED_FIELDS = {
    "type",
    "links",
    "level",
    "role",
    "relatedFiles",
    "aliases",
    "color",
    "strokeColor",
}


def _parse_kind(raw_type: Any) -> tuple[NodeKind, str | None]:
    """Map a host ``type`` onto NodeKind, keeping unknown raw values."""
    if raw_type == NodeKind.TAG.value:
        return NodeKind.TAG, None
    if raw_type == NodeKind.FILE.value:
        return NodeKind.FILE, None
    # Anything that is not a tag is treated as a file-like node
    return NodeKind.FILE, raw_type if raw_type is not None else None


def _copy_value(value: Any) -> Any:
    """Shallow-copy containers so the host record is never shared."""
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list):
        return list(value)
    return value


def _parse_role(raw_role: Any) -> NodeRole | None:
    try:
        return NodeRole(raw_role)
    except ValueError:
        return None


def deserialize_node(node_id: str, record: dict[str, Any]) -> GraphNode:
    """Build a GraphNode from one host record.

    Args:
        node_id: Key of the record in the host mapping.
        record: The host record.

    Returns:
        A new GraphNode. The record itself is not modified.
    """
    kind, host_type = _parse_kind(record.get("type"))
    extra = {k: _copy_value(v) for k, v in record.items() if k not in _MODELLED_FIELDS}

    display_name = ""
    for key in ("displayName", "displayText", "name", "title", "label", "text", "path"):
        if isinstance(record.get(key), str) and record[key]:
            display_name = record[key]
            break

    level = record.get("level")
    links = record.get("links")

    return GraphNode(
        id=node_id,
        kind=kind,
        display_name=display_name or node_id,
        level=level if isinstance(level, int) and not isinstance(level, bool) else None,
        role=_parse_role(record.get("role")),
        related_files=list(record.get("relatedFiles") or []),
        aliases=list(record.get("aliases") or []),
        color=record.get("color"),
        stroke_color=record.get("strokeColor"),
        host_type=host_type,
        links=dict(links) if isinstance(links, dict) else {},
        extra=extra,
    )


def deserialize_document(records: dict[str, dict[str, Any]]) -> GraphDocument:
    """Build a GraphDocument from the host's node mapping.

    Records that are not mappings are skipped.
    """
    document = GraphDocument()
    for node_id, record in records.items():
        if isinstance(record, dict):
            document.add_node(deserialize_node(node_id, record))
    return document


def serialize_node(node: GraphNode) -> dict[str, Any]:
    """Serialize a GraphNode to a host record.

    Args:
        node: The node to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = dict(node.extra)
    result["type"] = node.host_type if node.host_type is not None else node.kind.value
    result["links"] = dict(node.links)

    if node.is_tag and node.normalized:
        for key in DISPLAY_ALIAS_FIELDS:
            result[key] = node.display_name

    if node.level is not None:
        result["level"] = node.level
    if node.role is not None:
        result["role"] = node.role.value
    if node.related_files:
        result["relatedFiles"] = list(node.related_files)
    if node.aliases:
        result["aliases"] = list(node.aliases)
    if node.color is not None:
        result["color"] = node.color
    if node.stroke_color is not None:
        result["strokeColor"] = node.stroke_color

    return result


def serialize_document(document: GraphDocument) -> dict[str, dict[str, Any]]:
    """Serialize a GraphDocument to the host's node mapping."""
    return {node.id: serialize_node(node) for node in document.all_nodes()}


__all__ = [
    "DISPLAY_ALIAS_FIELDS",
    "deserialize_node",
    "deserialize_document",
    "serialize_node",
    "serialize_document",
]
