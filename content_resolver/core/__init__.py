"""
Core data model.

This package contains the typed API node union, the content tree and the
page view models. It is independent of any specific pipeline stage.
"""

from .nodes import BreadcrumbEntry, ContentNode, NavigationEntry
from .parse import parse_node
from .types import Instance, ResolvedNode
from .view_models import ErrorPage, PageViewModel, RedirectPage

__all__ = [
    "BreadcrumbEntry",
    "ContentNode",
    "NavigationEntry",
    "parse_node",
    "Instance",
    "ResolvedNode",
    "ErrorPage",
    "PageViewModel",
    "RedirectPage",
]
