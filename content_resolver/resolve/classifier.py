"""
Entity classification.

Every resolved node maps to exactly one branch. Redirect branches point
somewhere else (a compare route, a course's first page, the exercise of a
solution, a profile route); terminal branches produce a page of their own.
"""

from __future__ import annotations

from enum import Enum
from typing import assert_never

from ..core.types import (
    REVISION_TYPENAMES,
    Applet,
    Article,
    Course,
    CoursePage,
    Event,
    Exercise,
    ExerciseGroup,
    GroupedExercise,
    Page,
    ResolvedNode,
    Revision,
    Solution,
    TaxonomyTerm,
    User,
    Video,
)
from ..errors import UnknownEntityType


class Branch(str, Enum):
    REVISION = "revision"
    COURSE = "course"
    SOLUTION = "solution"
    USER = "user"
    TAXONOMY = "taxonomy"
    EXERCISE = "exercise"
    EXERCISE_GROUP = "exercise-group"
    EVENT = "event"
    PAGE = "page"
    ARTICLE = "article"
    VIDEO = "video"
    APPLET = "applet"
    COURSE_PAGE = "course-page"

    @property
    def is_redirect(self) -> bool:
        return self in _REDIRECT_BRANCHES


_REDIRECT_BRANCHES = frozenset({Branch.REVISION, Branch.COURSE, Branch.SOLUTION, Branch.USER})

_TYPENAME_BRANCHES: dict[str, Branch] = {
    "Course": Branch.COURSE,
    "Solution": Branch.SOLUTION,
    "User": Branch.USER,
    "TaxonomyTerm": Branch.TAXONOMY,
    "Exercise": Branch.EXERCISE,
    "GroupedExercise": Branch.EXERCISE,
    "ExerciseGroup": Branch.EXERCISE_GROUP,
    "Event": Branch.EVENT,
    "Page": Branch.PAGE,
    "Article": Branch.ARTICLE,
    "Video": Branch.VIDEO,
    "Applet": Branch.APPLET,
    "CoursePage": Branch.COURSE_PAGE,
}


def classify_typename(typename: str) -> Branch:
    """Branch for a raw `__typename`.

    Raises:
        UnknownEntityType: If the tag is not part of the closed set
    """
    if typename in REVISION_TYPENAMES:
        return Branch.REVISION
    try:
        return _TYPENAME_BRANCHES[typename]
    except KeyError:
        raise UnknownEntityType(typename) from None


def classify(node: ResolvedNode) -> Branch:
    if isinstance(node, Revision):
        return Branch.REVISION
    if isinstance(node, Course):
        return Branch.COURSE
    if isinstance(node, Solution):
        return Branch.SOLUTION
    if isinstance(node, User):
        return Branch.USER
    if isinstance(node, TaxonomyTerm):
        return Branch.TAXONOMY
    if isinstance(node, (Exercise, GroupedExercise)):
        return Branch.EXERCISE
    if isinstance(node, ExerciseGroup):
        return Branch.EXERCISE_GROUP
    if isinstance(node, Event):
        return Branch.EVENT
    if isinstance(node, Page):
        return Branch.PAGE
    if isinstance(node, Article):
        return Branch.ARTICLE
    if isinstance(node, Video):
        return Branch.VIDEO
    if isinstance(node, Applet):
        return Branch.APPLET
    if isinstance(node, CoursePage):
        return Branch.COURSE_PAGE
    assert_never(node)
