"""
nestedtags - Nested tag hierarchies for graph views

Rewrites a flat tag/file graph, where tags such as ``#Root|Mid|Leaf``
encode a hierarchy path, into one tag node per level, and assigns every
node a display color from a configurable palette.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nestedtags")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from nestedtags.graph import (
    ColorRules,
    ExpansionOptions,
    GraphDocument,
    GraphNode,
    HierarchyExpander,
    RedirectTarget,
    expand,
    resolve_colors,
)
from nestedtags.host import RendererHook, transform_payload

__all__ = [
    "__version__",
    "ColorRules",
    "ExpansionOptions",
    "GraphDocument",
    "GraphNode",
    "HierarchyExpander",
    "RedirectTarget",
    "RendererHook",
    "expand",
    "resolve_colors",
    "transform_payload",
]
