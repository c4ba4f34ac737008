from __future__ import annotations

from ..core.nodes import NavigationEntry
from ..core.types import Page, ResolvedNode, TaxonomyTerm


def create_navigation(node: ResolvedNode) -> tuple[NavigationEntry, ...] | None:
    """Secondary navigation for pages and taxonomy terms mounted in a tree.

    Only the first level of the tree is shown; the entry pointing at the
    node itself is marked active.
    """
    if not isinstance(node, (Page, TaxonomyTerm)) or node.navigation is None:
        return None
    entries = tuple(
        NavigationEntry(label=child.label, url=child.url, id=child.id, active=child.id == node.id)
        for child in node.navigation.children
    )
    return entries or None
