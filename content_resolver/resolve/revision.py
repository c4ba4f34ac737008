"""
Revision page assembly.

A revision page shows one revision next to the repository's current
revision. Optional attributes are read through the per-tag accessors, so a
tag that lacks an attribute yields None on both sides. A repository that
was never checked out yields a current side that is entirely None.
"""

from __future__ import annotations

from ..convert import convert_state, create_exercise
from ..core.revisions import (
    current_meta_description,
    current_meta_title,
    current_title,
    current_url,
    revision_changes,
    revision_meta_description,
    revision_meta_title,
    revision_title,
    revision_url,
)
from ..core.types import Exercise, ExerciseNode, GroupedExercise, Instance, Revision
from ..core.view_models import MetaData, RevisionData, RevisionPage, RevisionUser, RevisionView
from ..derive import create_title

EXERCISE_REVISIONS = ("ExerciseRevision", "GroupedExerciseRevision")


def revision_cache_key(revision_id: int, instance: Instance | str) -> str:
    lang = instance.value if isinstance(instance, Instance) else instance
    return f"/{lang}/{revision_id}"


def build_revision_page(revision: Revision, instance: Instance | str) -> RevisionPage:
    return RevisionPage(
        revision_data=RevisionData(
            type=revision.typename.removesuffix("Revision").lower(),
            repository_id=revision.repository.id,
            typename=revision.typename,
            this_revision=_this_revision(revision),
            current_revision=_current_revision(revision),
            changes=revision_changes(revision),
            user=_user(revision),
            date=revision.date,
        ),
        meta_data=MetaData(
            title=create_title(revision, instance),
            content_type="revision",
            meta_description="",
        ),
        cache_key=revision_cache_key(revision.id, instance),
    )


def _this_revision(revision: Revision) -> RevisionView:
    if revision.typename in EXERCISE_REVISIONS:
        content = (create_exercise(_repository_exercise(revision), content=revision.content),)
    else:
        content = convert_state(revision.content)
    return RevisionView(
        id=revision.id,
        title=revision_title(revision),
        meta_title=revision_meta_title(revision),
        meta_description=revision_meta_description(revision),
        content=content,
        url=revision_url(revision),
    )


def _current_revision(revision: Revision) -> RevisionView:
    current = revision.repository.current_revision
    if current is None:
        return RevisionView()
    if revision.typename in EXERCISE_REVISIONS:
        content = (create_exercise(_repository_exercise(revision)),)
    else:
        content = convert_state(current.content)
    return RevisionView(
        id=current.id,
        title=current_title(revision, current),
        meta_title=current_meta_title(revision, current),
        meta_description=current_meta_description(revision, current),
        content=content,
        url=current_url(revision, current),
    )


def _repository_exercise(revision: Revision) -> ExerciseNode:
    repository = revision.repository
    fields = dict(
        id=repository.id,
        alias=repository.alias,
        current_revision=repository.current_revision,
        license=repository.license,
        taxonomy_paths=repository.taxonomy_paths,
        solution=repository.solution,
    )
    if revision.typename == "GroupedExerciseRevision":
        return GroupedExercise(**fields)
    return Exercise(**fields)


def _user(revision: Revision) -> RevisionUser | None:
    author = revision.author
    if author is None:
        return None
    return RevisionUser(
        id=author.id,
        username=author.username,
        active_author=author.active_author,
        active_donor=author.active_donor,
        active_reviewer=author.active_reviewer,
    )
