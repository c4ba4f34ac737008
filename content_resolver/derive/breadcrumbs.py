from __future__ import annotations

from ..core.nodes import BreadcrumbEntry
from ..core.types import (
    Applet,
    Article,
    Course,
    CoursePage,
    Event,
    Exercise,
    ExerciseGroup,
    GroupedExercise,
    NavigationLink,
    Page,
    ResolvedNode,
    TaxonomyTerm,
    Video,
)

MAX_ENTRIES = 5
TAIL_ENTRIES = 3

_ENTITIES = (Article, Video, Applet, Event, Page, CoursePage, Course, Exercise, GroupedExercise, ExerciseGroup)


def create_breadcrumbs(node: ResolvedNode) -> tuple[BreadcrumbEntry, ...] | None:
    """Breadcrumbs from the node's first taxonomy path.

    A taxonomy term uses its own path without itself. Entries without a url
    are dropped; paths longer than MAX_ENTRIES keep the root and the last
    TAIL_ENTRIES with an ellipsis entry in between.
    """
    if isinstance(node, TaxonomyTerm):
        links = list(node.path.nodes) if node.path else []
        if links and links[-1].id == node.id:
            links.pop()
    elif isinstance(node, _ENTITIES) and node.taxonomy_paths:
        links = list(node.taxonomy_paths[0].nodes)
    else:
        return None

    entries = [_entry(link) for link in links if link.url and link.label]
    if not entries:
        return None
    if len(entries) > MAX_ENTRIES:
        entries = [entries[0], BreadcrumbEntry(label="", ellipsis=True), *entries[-TAIL_ENTRIES:]]
    return tuple(entries)


def _entry(link: NavigationLink) -> BreadcrumbEntry:
    return BreadcrumbEntry(label=link.label, url=link.url)
