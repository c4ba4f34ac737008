from __future__ import annotations

from typing import assert_never

from ..core.types import (
    Applet,
    Article,
    Course,
    CoursePage,
    Event,
    Exercise,
    ExerciseGroup,
    GroupedExercise,
    Instance,
    Page,
    ResolvedNode,
    Revision,
    Solution,
    TaxonomyTerm,
    User,
    Video,
)
from ..core.revisions import revision_title
from .strings import get_string

FALLBACK_TITLE = "Serlo"
TOPIC_TYPES = ("topic", "curriculumTopic")


def create_title(node: ResolvedNode, instance: Instance | str) -> str:
    """Build the HTML `<title>` for a node.

    Taxonomy terms use their name, exercises the subject (root label) of
    their first taxonomy path, everything else the meta title or title of
    its current revision.
    """
    suffix = f" - {get_string(instance, 'title')}"

    if isinstance(node, TaxonomyTerm):
        affix = f" ({get_string(instance, 'topic_title_affix')})" if node.term_type in TOPIC_TYPES else ""
        return f"{node.name}{affix}{suffix}"

    if isinstance(node, (Exercise, GroupedExercise, ExerciseGroup)):
        label = get_string(instance, "entities", "exercise")
        subject = _subject_label(node)
        return f"{subject} - {label}{suffix}" if subject else f"{label}{suffix}"

    if isinstance(node, Revision):
        title = revision_title(node)
        if title:
            return f"{title}{suffix}"
        return f"{get_string(instance, 'entities', 'revision')} {node.id}{suffix}"

    if isinstance(node, User):
        return f"{node.username}{suffix}"

    if isinstance(node, Solution):
        return FALLBACK_TITLE

    if isinstance(node, (Article, Page, CoursePage, Course, Video, Applet, Event)):
        revision = node.current_revision
        if revision is None:
            return FALLBACK_TITLE
        title = revision.meta_title or revision.title
        return f"{title}{suffix}" if title else FALLBACK_TITLE

    assert_never(node)


def _subject_label(node: Exercise | GroupedExercise | ExerciseGroup) -> str | None:
    """Root label of the first taxonomy path."""
    if not node.taxonomy_paths or not node.taxonomy_paths[0].nodes:
        return None
    return node.taxonomy_paths[0].nodes[0].label or None
