"""Graph module - Graph document data structures and rewrites.

Exports:
- NodeKind: Enum of node types
- NodeRole: Enum of derived structural roles
- GraphNode: Node with embedded links
- GraphDocument: Ordered node container
- BrokenReference: Link to a non-existent node (detection)
- SkippedCompound: Compound tag left unexpanded
- MutationEntry / MutationLog: Record of applied rewrites
- HierarchyExpander / expand: Compound tag expansion
- ColorRules / resolve_colors: Color resolution
"""

from nestedtags.graph.colors import ColorRules, CustomNodeColor, RoleColors, resolve_colors
from nestedtags.graph.document import GraphDocument
from nestedtags.graph.expander import (
    ExpansionOptions,
    ExpansionResult,
    HierarchyExpander,
    RedirectTarget,
    expand,
)
from nestedtags.graph.GraphNode import GraphNode, NodeKind, NodeRole
from nestedtags.graph.mutations import (
    BrokenReference,
    MutationEntry,
    MutationLog,
    SkippedCompound,
)

__all__ = [
    "NodeKind",
    "NodeRole",
    "GraphNode",
    "GraphDocument",
    "BrokenReference",
    "SkippedCompound",
    "MutationEntry",
    "MutationLog",
    "ExpansionOptions",
    "ExpansionResult",
    "HierarchyExpander",
    "RedirectTarget",
    "expand",
    "ColorRules",
    "CustomNodeColor",
    "RoleColors",
    "resolve_colors",
]
