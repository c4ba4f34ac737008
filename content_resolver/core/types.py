"""
Typed model of the GraphQL `uuid` answer.

Every variant of `ResolvedNode` is a frozen dataclass that only carries the
attributes its `__typename` guarantees. Raw API payloads are turned into
these by `core.parse.parse_node`; nothing downstream touches raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union, get_args


class Instance(str, Enum):
    """Locale tag of a platform instance."""

    DE = "de"
    EN = "en"
    ES = "es"
    FR = "fr"
    HI = "hi"
    TA = "ta"


RevisionTypename = Literal[
    "ArticleRevision",
    "PageRevision",
    "CoursePageRevision",
    "VideoRevision",
    "EventRevision",
    "AppletRevision",
    "GroupedExerciseRevision",
    "ExerciseRevision",
    "ExerciseGroupRevision",
    "SolutionRevision",
    "CourseRevision",
]

REVISION_TYPENAMES: frozenset[str] = frozenset(get_args(RevisionTypename))

# Optional revision attributes and the revision tags that carry them.
REVISION_FIELDS: dict[str, frozenset[str]] = {
    "title": frozenset(
        {
            "ArticleRevision",
            "PageRevision",
            "CoursePageRevision",
            "VideoRevision",
            "EventRevision",
            "AppletRevision",
            "CourseRevision",
        }
    ),
    "meta_title": frozenset({"ArticleRevision", "AppletRevision", "EventRevision"}),
    "meta_description": frozenset(
        {"ArticleRevision", "AppletRevision", "EventRevision", "CourseRevision"}
    ),
    "url": frozenset({"VideoRevision", "AppletRevision"}),
    "changes": frozenset(get_args(RevisionTypename)) - {"PageRevision"},
}


@dataclass(frozen=True)
class License:
    id: int
    url: str = ""
    title: str = ""
    short_title: str | None = None
    default: bool = False


@dataclass(frozen=True)
class EntityRevision:
    """The checked-out revision of an entity.

    Which of the optional attributes are filled depends on the owning
    entity's type; the parser leaves the rest as None.
    """

    id: int | None = None
    title: str | None = None
    content: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    url: str | None = None
    trashed: bool = False


@dataclass(frozen=True)
class NavigationLink:
    label: str
    url: str | None = None
    id: int | None = None


@dataclass(frozen=True)
class TaxonomyPath:
    """Root-first path of a taxonomy term through the navigation tree."""

    nodes: tuple[NavigationLink, ...] = ()


@dataclass(frozen=True)
class NavigationTree:
    """Secondary navigation a page or term is mounted in."""

    label: str = ""
    children: tuple[NavigationTreeEntry, ...] = ()


@dataclass(frozen=True)
class NavigationTreeEntry:
    label: str
    url: str | None = None
    id: int | None = None
    children: tuple[NavigationTreeEntry, ...] = ()


@dataclass(frozen=True)
class CoursePageLink:
    id: int
    alias: str | None = None
    trashed: bool = False
    title: str | None = None
    revision_trashed: bool = False


@dataclass(frozen=True)
class CourseLink:
    id: int
    title: str | None = None
    pages: tuple[CoursePageLink, ...] = ()


@dataclass(frozen=True)
class SolutionLink:
    id: int
    trashed: bool = False
    content: str | None = None
    has_current_revision: bool = False
    license: License | None = None


@dataclass(frozen=True)
class Author:
    id: int
    username: str
    active_author: bool = False
    active_donor: bool = False
    active_reviewer: bool = False


@dataclass(frozen=True)
class TaxonomyChild:
    """A child of a taxonomy term: either an entity or a sub-term."""

    typename: str
    id: int
    alias: str | None = None
    title: str = ""
    trashed: bool = False
    term_type: str | None = None
    children: tuple[TaxonomyChild, ...] = ()
    exercise: Exercise | GroupedExercise | ExerciseGroup | None = None


# ---------------------------------------------------------------------------
# ResolvedNode variants


@dataclass(frozen=True)
class _Entity:
    id: int
    alias: str | None = None
    trashed: bool = False
    current_revision: EntityRevision | None = None
    license: License | None = None
    unrevised_revisions: int | None = None
    taxonomy_paths: tuple[TaxonomyPath, ...] = ()


@dataclass(frozen=True)
class Article(_Entity):
    typename: Literal["Article"] = "Article"


@dataclass(frozen=True)
class Video(_Entity):
    typename: Literal["Video"] = "Video"


@dataclass(frozen=True)
class Applet(_Entity):
    typename: Literal["Applet"] = "Applet"


@dataclass(frozen=True)
class Event(_Entity):
    typename: Literal["Event"] = "Event"


@dataclass(frozen=True)
class Page(_Entity):
    navigation: NavigationTree | None = None
    typename: Literal["Page"] = "Page"


@dataclass(frozen=True)
class CoursePage(_Entity):
    course: CourseLink = field(default_factory=lambda: CourseLink(id=0))
    typename: Literal["CoursePage"] = "CoursePage"


@dataclass(frozen=True)
class Course(_Entity):
    pages: tuple[CoursePageLink, ...] = ()
    typename: Literal["Course"] = "Course"


@dataclass(frozen=True)
class Exercise(_Entity):
    solution: SolutionLink | None = None
    typename: Literal["Exercise"] = "Exercise"


@dataclass(frozen=True)
class GroupedExercise(_Entity):
    solution: SolutionLink | None = None
    group_id: int | None = None
    typename: Literal["GroupedExercise"] = "GroupedExercise"


@dataclass(frozen=True)
class ExerciseGroup(_Entity):
    exercises: tuple[GroupedExercise, ...] = ()
    typename: Literal["ExerciseGroup"] = "ExerciseGroup"


@dataclass(frozen=True)
class Solution:
    id: int
    exercise_id: int
    alias: str | None = None
    trashed: bool = False
    typename: Literal["Solution"] = "Solution"


@dataclass(frozen=True)
class TaxonomyTerm:
    id: int
    name: str
    term_type: str
    alias: str | None = None
    trashed: bool = False
    description: str | None = None
    path: TaxonomyPath | None = None
    navigation: NavigationTree | None = None
    children: tuple[TaxonomyChild, ...] = ()
    typename: Literal["TaxonomyTerm"] = "TaxonomyTerm"


@dataclass(frozen=True)
class User:
    id: int
    username: str
    alias: str | None = None
    description: str | None = None
    last_login: str | None = None
    date: str | None = None
    active_author: bool = False
    active_donor: bool = False
    active_reviewer: bool = False
    typename: Literal["User"] = "User"


@dataclass(frozen=True)
class RevisionRepository:
    """The entity a revision belongs to.

    `current_revision` is None when nothing was ever checked out.
    """

    id: int
    typename: str
    alias: str | None = None
    current_revision: EntityRevision | None = None
    license: License | None = None
    solution: SolutionLink | None = None
    taxonomy_paths: tuple[TaxonomyPath, ...] = ()


@dataclass(frozen=True)
class Revision:
    """Any of the eleven revision variants.

    Optional attributes exist only on some revision tags; read them via the
    accessors in `core.revisions`, which consult `REVISION_FIELDS`.
    """

    id: int
    typename: RevisionTypename
    repository: RevisionRepository
    alias: str | None = None
    trashed: bool = False
    content: str | None = None
    date: str | None = None
    author: Author | None = None
    title: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    url: str | None = None
    changes: str | None = None


ResolvedNode = Union[
    Article,
    Page,
    CoursePage,
    Course,
    Video,
    Applet,
    Event,
    Exercise,
    GroupedExercise,
    ExerciseGroup,
    Solution,
    TaxonomyTerm,
    User,
    Revision,
]

ExerciseNode = Union[Exercise, GroupedExercise]
