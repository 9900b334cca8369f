"""Mutation types for graph document rewrites.

This module provides dataclasses for tracking what an expansion did to
a document: applied operations, skipped compound tags, and broken
references found when inspecting a document.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class BrokenReference:
    """A link whose target is not a node of the document.

    Attributes:
        source_id: ID of the node holding the link.
        target_id: ID that was linked but doesn't exist.
    """

    source_id: str
    target_id: str

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.source_id} --> {self.target_id} (missing)"


@dataclass(frozen=True)
class SkippedCompound:
    """A compound tag that was left unexpanded.

    Attributes:
        compound_id: The compound tag identifier.
        reason: Why it was skipped.
    """

    compound_id: str
    reason: str

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.compound_id}: {self.reason}"


@dataclass
class MutationEntry:
    """Single mutation operation record.

    Attributes:
        id: Unique mutation ID (UUID4).
        timestamp: When the mutation occurred.
        operation: Operation type (e.g., "create_node", "redirect_link").
        target_id: Primary target of the mutation.
        before_state: State before mutation.
        after_state: State after mutation.
    """

    operation: str
    target_id: str
    before_state: dict[str, Any]
    after_state: dict[str, Any]
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.id[:8]}] {self.operation}({self.target_id})"


class MutationLog:
    """Append-only mutation history.

    Entries are stored in chronological order.

    Example:
        >>> log = MutationLog()
        >>> log.record("delete_node", "#Root|Leaf")
        >>> len(log)
        1
    """

    def __init__(self) -> None:
        """Initialize an empty mutation log."""
        self._entries: list[MutationEntry] = []

    def record(
        self,
        operation: str,
        target_id: str,
        before_state: dict[str, Any] | None = None,
        after_state: dict[str, Any] | None = None,
    ) -> MutationEntry:
        """Create and append an entry in one step.

        Returns:
            The appended MutationEntry.
        """
        entry = MutationEntry(
            operation=operation,
            target_id=target_id,
            before_state=before_state or {},
            after_state=after_state or {},
        )
        self._entries.append(entry)
        return entry

    def iter_entries(self) -> Iterator[MutationEntry]:
        """Iterate over all entries in chronological order."""
        yield from self._entries

    def by_operation(self, operation: str) -> list[MutationEntry]:
        """Return all entries of one operation type, in order."""
        return [e for e in self._entries if e.operation == operation]

    def __len__(self) -> int:
        """Return the number of entries in the log."""
        return len(self._entries)


__all__ = ["BrokenReference", "MutationEntry", "MutationLog", "SkippedCompound"]
