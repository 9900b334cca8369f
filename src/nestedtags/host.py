"""
nestedtags.host - Attach the rewrite to a host's graph renderer.

The host owns one renderer per graph view. Each renderer exposes a
``set_data(data)`` callback that receives ``{"nodes": {...}}`` and draws
it. RendererHook wraps that callback so every payload is expanded and
colored before the original callback sees it, and restores the original
on teardown.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from nestedtags.graph.colors import ColorRules, resolve_colors
from nestedtags.graph.expander import ExpansionOptions, ExpansionResult, HierarchyExpander
from nestedtags.graph.serialize import deserialize_document, serialize_document

logger = logging.getLogger(__name__)


def transform_payload(
    data: dict[str, Any],
    rules: ColorRules,
    options: ExpansionOptions | None = None,
) -> ExpansionResult | None:
    """Expand and color a host payload in place.

    The payload's ``nodes`` mapping is only replaced once the whole
    rewrite has succeeded, so on any failure the caller still holds the
    original, unmodified payload.

    Args:
        data: Host payload with a ``nodes`` mapping.
        rules: Color rules to apply.
        options: Expansion policy.

    Returns:
        The ExpansionResult, or None if the payload has no node mapping.
    """
    nodes = data.get("nodes")
    if not isinstance(nodes, dict):
        return None

    document = deserialize_document(nodes)
    result = HierarchyExpander(options).run(document)
    if result.failed:
        return result
    resolve_colors(document, rules)

    rewritten = serialize_document(document)
    # Records we could not model pass through as-is
    for node_id, record in nodes.items():
        if not isinstance(record, dict):
            rewritten[node_id] = record

    nodes.clear()
    nodes.update(rewritten)
    return result


class RendererHook:
    """Installs and removes the rewrite wrapper on host renderers.

    Args:
        rules_provider: Called on every payload to get the current rules,
            so configuration changes apply to the next render.
        options: Expansion policy.
    """

    def __init__(
        self,
        rules_provider: Callable[[], ColorRules],
        options: ExpansionOptions | None = None,
    ) -> None:
        self.rules_provider = rules_provider
        self.options = options

    @staticmethod
    def is_installed(renderer: Any) -> bool:
        """True if renderer already carries our wrapper."""
        return getattr(renderer, "original_set_data", None) is not None

    def install(self, renderer: Any) -> bool:
        """Wrap renderer.set_data once.

        Returns:
            True if the wrapper was installed, False if already present.
        """
        if self.is_installed(renderer):
            return False

        original = renderer.set_data
        renderer.original_set_data = original

        def set_data(data: Any) -> Any:
            renderer.last_data = data
            try:
                if isinstance(data, dict):
                    transform_payload(data, self.rules_provider(), self.options)
            except Exception:
                logger.exception("Graph rewrite failed; rendering original data")
            return original(data)

        renderer.set_data = set_data
        return True

    def uninstall(self, renderer: Any) -> bool:
        """Restore the original set_data.

        Returns:
            True if a wrapper was removed.
        """
        if not self.is_installed(renderer):
            return False
        renderer.set_data = renderer.original_set_data
        renderer.original_set_data = None
        return True

    def on_layout_change(self, views: Iterable[Any]) -> int:
        """Install on every graph view that is not hooked yet.

        Returns:
            Number of views newly hooked.
        """
        return sum(1 for view in views if self.install(view.renderer))

    def refresh(self, views: Iterable[Any]) -> int:
        """Re-render hooked views with their last payload.

        Re-running on an already rewritten payload only re-resolves
        colors, since expansion is idempotent.

        Returns:
            Number of views re-rendered.
        """
        count = 0
        for view in views:
            renderer = view.renderer
            data = getattr(renderer, "last_data", None)
            if self.is_installed(renderer) and data is not None:
                renderer.set_data(data)
                count += 1
        return count

    def teardown(self, views: Iterable[Any]) -> int:
        """Uninstall from every view and reload it so it redraws unmodified.

        Returns:
            Number of views restored.
        """
        count = 0
        for view in views:
            if not self.uninstall(view.renderer):
                continue
            count += 1
            unload = getattr(view, "unload", None)
            load = getattr(view, "load", None)
            if callable(unload) and callable(load):
                unload()
                load()
        return count


__all__ = ["RendererHook", "transform_payload"]
