"""Metadata, breadcrumbs, navigation, taxonomy and horizon derivation."""

from .breadcrumbs import create_breadcrumbs
from .horizon import create_horizon
from .meta import MetaImageTable, get_meta_description
from .navigation import create_navigation
from .strings import entity_meta_description, get_string
from .taxonomy import build_taxonomy_data
from .title import create_title

__all__ = [
    "create_breadcrumbs",
    "create_horizon",
    "MetaImageTable",
    "get_meta_description",
    "create_navigation",
    "entity_meta_description",
    "get_string",
    "build_taxonomy_data",
    "create_title",
]
