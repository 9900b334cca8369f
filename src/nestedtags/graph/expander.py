"""Hierarchy Expander - Rewrite compound tags into a chain of tag nodes.

A compound tag such as ``#Root|Mid|Leaf`` is a single tag node whose ID
encodes a hierarchy path. Expansion replaces it with one node per level,
links consecutive levels to each other, moves every link that pointed at
the compound ID onto the designated target level, and deletes the
compound node.

Usage:
    from nestedtags.graph.expander import HierarchyExpander

    expander = HierarchyExpander()
    result = expander.run(document)
    for skipped in result.skipped:
        print(skipped)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from nestedtags.graph.document import GraphDocument
from nestedtags.graph.GraphNode import GraphNode, NodeKind, NodeRole
from nestedtags.graph.mutations import MutationLog, SkippedCompound

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "|"
DEFAULT_MARKER = "#"


class HierarchyError(ValueError):
    """Raised when a compound tag cannot be expanded."""


class RedirectTarget(Enum):
    """Which level of a compound tag receives its former connections."""

    LEAF = "leaf"
    ROOT = "root"


@dataclass(frozen=True)
class ExpansionOptions:
    """Expansion policy.

    Attributes:
        separator: Character joining segments of a compound tag.
        marker: Hierarchy-marker prefix stripped from display names.
        target: Level that receives redirected connections.
    """

    separator: str = DEFAULT_SEPARATOR
    marker: str = DEFAULT_MARKER
    target: RedirectTarget = RedirectTarget.LEAF

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExpansionOptions:
        """Create ExpansionOptions from the ``[expansion]`` config table.

        Raises:
            ValueError: If ``target`` is not "leaf" or "root", or the
                separator is not a single character.
        """
        separator = data.get("separator", DEFAULT_SEPARATOR)
        if not isinstance(separator, str) or len(separator) != 1:
            raise ValueError(f"expansion.separator must be a single character, got {separator!r}")

        target = data.get("target", RedirectTarget.LEAF.value)
        try:
            redirect = RedirectTarget(target)
        except ValueError:
            raise ValueError(
                f"expansion.target must be 'leaf' or 'root', got {target!r}"
            ) from None

        return cls(
            separator=separator,
            marker=data.get("marker", DEFAULT_MARKER),
            target=redirect,
        )


@dataclass
class ExpansionResult:
    """Outcome of one expansion run.

    Attributes:
        expanded: Compound IDs that were rewritten, in processing order.
        skipped: Compound IDs left untouched and why.
        log: Applied mutations.
        failed: True if the run aborted and the document was restored.
    """

    expanded: list[str] = field(default_factory=list)
    skipped: list[SkippedCompound] = field(default_factory=list)
    log: MutationLog = field(default_factory=MutationLog)
    failed: bool = False

    @property
    def changed(self) -> bool:
        """True if the document was modified."""
        return not self.failed and len(self.log) > 0


def strip_marker(node_id: str, marker: str = DEFAULT_MARKER) -> str:
    """Return node_id without a leading hierarchy marker."""
    if marker and node_id.startswith(marker):
        return node_id[len(marker) :]
    return node_id


def split_compound_id(compound_id: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split a compound tag ID into its segments.

    Args:
        compound_id: The compound tag ID, e.g. ``#Root|Mid|Leaf``.
        separator: Segment separator.

    Returns:
        Segments in order, root first.

    Raises:
        HierarchyError: If there are fewer than two segments, a segment
            is empty, or a segment repeats.
    """
    segments = compound_id.split(separator)
    if len(segments) < 2:
        raise HierarchyError(f"not a compound tag (no {separator!r})")
    if any(not segment for segment in segments):
        raise HierarchyError("empty segment")
    if len(set(segments)) != len(segments):
        raise HierarchyError("repeated segment")
    return segments


class HierarchyExpander:
    """Expands every compound tag of a document in one pass.

    The expander holds no state between runs other than its options.
    """

    def __init__(self, options: ExpansionOptions | None = None) -> None:
        self.options = options or ExpansionOptions()

    def expand(self, document: GraphDocument) -> GraphDocument:
        """Expand the document in place and return it.

        Never raises for malformed input; see run().
        """
        self.run(document)
        return document

    def run(self, document: GraphDocument) -> ExpansionResult:
        """Expand the document in place.

        Malformed or colliding compound tags are skipped individually.
        Any other failure restores the document to its original state.

        Returns:
            ExpansionResult describing what happened.
        """
        result = ExpansionResult()
        snapshot = document.clone()
        try:
            self._run(document, result)
        except Exception:
            logger.exception("Hierarchy expansion failed; document left unmodified")
            document.restore(snapshot)
            return ExpansionResult(skipped=result.skipped, failed=True)
        return result

    def _run(self, document: GraphDocument, result: ExpansionResult) -> None:
        plans = self._plan(document, result)
        cross_refs = self._index_cross_references(document, plans)

        for compound_id, segments in plans.items():
            self._materialize_chain(document, segments, cross_refs, result.log)
            target_id = segments[-1] if self.options.target == RedirectTarget.LEAF else segments[0]
            self._redirect_links(document, compound_id, target_id, result.log)
            document.remove_node(compound_id)
            result.log.record("delete_node", compound_id, before_state={"id": compound_id})
            result.expanded.append(compound_id)

        skipped_ids = {s.compound_id for s in result.skipped}
        self._normalize_tags(document, skipped_ids)

    def _plan(self, document: GraphDocument, result: ExpansionResult) -> dict[str, list[str]]:
        """Discover compound tags and validate them before anything mutates."""
        plans: dict[str, list[str]] = {}
        for compound_id in document.compound_ids(self.options.separator):
            try:
                segments = split_compound_id(compound_id, self.options.separator)
                for segment in segments:
                    existing = document.find_by_id(segment)
                    if existing is not None and existing.kind != NodeKind.TAG:
                        raise HierarchyError(f"segment {segment!r} is already a file node")
            except HierarchyError as e:
                logger.warning("Skipping compound tag %r: %s", compound_id, e)
                result.skipped.append(SkippedCompound(compound_id=compound_id, reason=str(e)))
                continue
            plans[compound_id] = segments
        return plans

    def _index_cross_references(
        self, document: GraphDocument, plans: dict[str, list[str]]
    ) -> dict[str, list[str]]:
        """Map each non-root segment to the files linked to any path containing it.

        A file counts when either side holds the link. A segment shared by
        several compound tags is one node, so its related files are the
        union across all of them.
        """
        compounds = {c: document.find_by_id(c) for c in plans}
        containing: dict[str, list[str]] = {}
        for compound_id, segments in plans.items():
            for segment in segments[1:]:
                containing.setdefault(segment, []).append(compound_id)

        cross_refs: dict[str, list[str]] = {}
        for segment, compound_ids in containing.items():
            files: list[str] = []
            for node in document.nodes_by_kind(NodeKind.FILE):
                if node.id not in files and any(
                    node.has_link(c) or compounds[c].has_link(node.id) for c in compound_ids
                ):
                    files.append(node.id)
            cross_refs[segment] = files
        return cross_refs

    def _materialize_chain(
        self,
        document: GraphDocument,
        segments: list[str],
        cross_refs: dict[str, list[str]],
        log: MutationLog,
    ) -> None:
        parent: GraphNode | None = None
        for depth, segment in enumerate(segments):
            node = document.find_by_id(segment)
            if node is None:
                node = GraphNode(
                    id=segment,
                    kind=NodeKind.TAG,
                    display_name=strip_marker(segment, self.options.marker),
                    level=depth,
                    role=NodeRole.for_level(depth),
                )
                document.add_node(node)
                log.record(
                    "create_node",
                    segment,
                    after_state={"level": depth, "role": node.role.value},
                )
            else:
                before = {"display_name": node.display_name, "level": node.level}
                node.display_name = strip_marker(segment, self.options.marker)
                if node.level is None:
                    node.level = depth
                    node.role = NodeRole.for_level(depth)
                elif node.role is None:
                    node.role = NodeRole.for_level(node.level)
                log.record(
                    "update_node",
                    segment,
                    before_state=before,
                    after_state={"display_name": node.display_name, "level": node.level},
                )

            if depth > 0:
                node.merge_related_files(cross_refs.get(segment, []))

            if parent is not None:
                payload = parent.link(node)
                log.record("link", parent.id, after_state={"child": node.id, "payload": payload})
            parent = node

    def _redirect_links(
        self, document: GraphDocument, compound_id: str, target_id: str, log: MutationLog
    ) -> None:
        """Move every link touching compound_id onto target_id, on both sides."""
        target = document.find_by_id(target_id)
        if target is None:
            raise HierarchyError(f"redirect target {target_id!r} was not materialized")

        for holder in document.holders_of(compound_id):
            payload = holder.unlink(compound_id)
            if holder is target:
                continue
            holder.links.setdefault(target_id, payload)
            target.links.setdefault(holder.id, holder.links[target_id])
            log.record(
                "redirect_link",
                holder.id,
                before_state={"target": compound_id},
                after_state={"target": target_id, "payload": holder.links[target_id]},
            )

        # Links the compound node held itself, where the far side did not link back
        compound = document.find_by_id(compound_id)
        if compound is None:
            return
        for neighbor_id, payload in list(compound.iter_links()):
            neighbor = document.find_by_id(neighbor_id)
            if neighbor is None or neighbor is target:
                continue
            neighbor.links.setdefault(target_id, payload)
            target.links.setdefault(neighbor_id, neighbor.links[target_id])

    def _normalize_tags(self, document: GraphDocument, skipped_ids: set[str]) -> None:
        """Give every tag a marker-free display name and a role."""
        for node in document.nodes_by_kind(NodeKind.TAG):
            if node.id in skipped_ids:
                continue
            node.display_name = strip_marker(node.id, self.options.marker)
            node.normalized = True
            if node.level is None:
                node.level = 0
            if node.role is None:
                node.role = NodeRole.for_level(node.level)

        for node in document.nodes_by_kind(NodeKind.FILE):
            if node.role is None:
                node.role = NodeRole.FILE


def expand(document: GraphDocument, options: ExpansionOptions | None = None) -> GraphDocument:
    """Expand all compound tags of a document in place.

    Args:
        document: The document to rewrite.
        options: Expansion policy; defaults to leaf targeting with ``|``.

    Returns:
        The same document.
    """
    return HierarchyExpander(options).expand(document)


__all__ = [
    "DEFAULT_MARKER",
    "DEFAULT_SEPARATOR",
    "ExpansionOptions",
    "ExpansionResult",
    "HierarchyError",
    "HierarchyExpander",
    "RedirectTarget",
    "expand",
    "split_compound_id",
    "strip_marker",
]
