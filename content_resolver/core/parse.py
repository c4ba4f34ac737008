"""
Parser from raw GraphQL `uuid` payloads to `ResolvedNode` variants.

The raw payload is a JSON object discriminated by `__typename`. For every
tag the parser reads exactly the attributes that tag guarantees (see
`CURRENT_REVISION_FIELDS` and `REVISION_FIELDS`); anything else in the
payload is ignored. Unknown tags raise `UnknownEntityType`.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from ..errors import UnknownEntityType
from .types import (
    REVISION_FIELDS,
    REVISION_TYPENAMES,
    Applet,
    Article,
    Author,
    Course,
    CourseLink,
    CoursePage,
    CoursePageLink,
    EntityRevision,
    Event,
    Exercise,
    ExerciseGroup,
    GroupedExercise,
    License,
    NavigationLink,
    NavigationTree,
    NavigationTreeEntry,
    Page,
    ResolvedNode,
    Revision,
    RevisionRepository,
    Solution,
    SolutionLink,
    TaxonomyChild,
    TaxonomyPath,
    TaxonomyTerm,
    User,
    Video,
)


# Attributes of `currentRevision` that each entity type exposes.
CURRENT_REVISION_FIELDS: dict[str, frozenset[str]] = {
    "Article": frozenset({"title", "content", "meta_title", "meta_description"}),
    "Page": frozenset({"title", "content"}),
    "CoursePage": frozenset({"title", "content"}),
    "Course": frozenset({"title", "meta_description"}),
    "Video": frozenset({"title", "content", "url"}),
    "Applet": frozenset({"title", "content", "url", "meta_title", "meta_description"}),
    "Event": frozenset({"title", "content", "meta_title", "meta_description"}),
    "Exercise": frozenset({"content"}),
    "GroupedExercise": frozenset({"content"}),
    "ExerciseGroup": frozenset({"content"}),
}

_RAW_REVISION_KEYS = {
    "title": "title",
    "content": "content",
    "meta_title": "metaTitle",
    "meta_description": "metaDescription",
    "url": "url",
}


def parse_node(raw: dict[str, Any]) -> ResolvedNode:
    """Parse one `uuid` payload into its typed variant.

    Raises:
        UnknownEntityType: If `__typename` is missing or not supported
    """
    typename = raw.get("__typename")
    if typename in REVISION_TYPENAMES:
        return parse_revision(raw)
    parser = _PARSERS.get(typename or "")
    if parser is None:
        raise UnknownEntityType(typename)
    return parser(raw)


def parse_revision(raw: dict[str, Any]) -> Revision:
    typename = raw.get("__typename")
    if typename not in REVISION_TYPENAMES:
        raise UnknownEntityType(typename)

    def optional(name: str) -> str | None:
        if typename not in REVISION_FIELDS[name]:
            return None
        return raw.get(_RAW_REVISION_KEYS.get(name, name))

    repository_raw = raw.get("repository") or {}
    repository_typename = repository_raw.get("__typename") or typename.removesuffix("Revision")
    repository = RevisionRepository(
        id=int(repository_raw.get("id") or 0),
        typename=repository_typename,
        alias=repository_raw.get("alias"),
        current_revision=_entity_revision(repository_raw.get("currentRevision"), repository_typename),
        license=_license(repository_raw.get("license")),
        solution=_solution_link(repository_raw.get("solution")),
        taxonomy_paths=_taxonomy_paths(repository_raw.get("taxonomyTerms")),
    )
    return Revision(
        id=int(raw["id"]),
        typename=typename,
        repository=repository,
        alias=raw.get("alias"),
        trashed=bool(raw.get("trashed", False)),
        content=raw.get("content"),
        date=raw.get("date"),
        author=_author(raw.get("author")),
        title=optional("title"),
        meta_title=optional("meta_title"),
        meta_description=optional("meta_description"),
        url=optional("url"),
        changes=optional("changes"),
    )


def _entity_kwargs(raw: dict[str, Any], typename: str) -> dict[str, Any]:
    return {
        "id": int(raw["id"]),
        "alias": raw.get("alias"),
        "trashed": bool(raw.get("trashed", False)),
        "current_revision": _entity_revision(raw.get("currentRevision"), typename),
        "license": _license(raw.get("license")),
        "unrevised_revisions": _total_count(raw.get("revisions")),
        "taxonomy_paths": _taxonomy_paths(raw.get("taxonomyTerms")),
    }


def _parse_article(raw: dict[str, Any]) -> Article:
    return Article(**_entity_kwargs(raw, "Article"))


def _parse_video(raw: dict[str, Any]) -> Video:
    return Video(**_entity_kwargs(raw, "Video"))


def _parse_applet(raw: dict[str, Any]) -> Applet:
    return Applet(**_entity_kwargs(raw, "Applet"))


def _parse_event(raw: dict[str, Any]) -> Event:
    return Event(**_entity_kwargs(raw, "Event"))


def _parse_page(raw: dict[str, Any]) -> Page:
    return Page(**_entity_kwargs(raw, "Page"), navigation=_navigation_tree(raw.get("navigation")))


def _parse_course_page(raw: dict[str, Any]) -> CoursePage:
    course_raw = raw.get("course") or {}
    course = CourseLink(
        id=int(course_raw.get("id") or 0),
        title=(course_raw.get("currentRevision") or {}).get("title"),
        pages=tuple(_course_page_link(page) for page in course_raw.get("pages") or []),
    )
    return CoursePage(**_entity_kwargs(raw, "CoursePage"), course=course)


def _parse_course(raw: dict[str, Any]) -> Course:
    pages = tuple(_course_page_link(page) for page in raw.get("pages") or [])
    return Course(**_entity_kwargs(raw, "Course"), pages=pages)


def _parse_exercise(raw: dict[str, Any]) -> Exercise:
    return Exercise(**_entity_kwargs(raw, "Exercise"), solution=_solution_link(raw.get("solution")))


def _parse_grouped_exercise(raw: dict[str, Any]) -> GroupedExercise:
    group = raw.get("exerciseGroup") or {}
    return GroupedExercise(
        **_entity_kwargs(raw, "GroupedExercise"),
        solution=_solution_link(raw.get("solution")),
        group_id=group.get("id"),
    )


def _parse_exercise_group(raw: dict[str, Any]) -> ExerciseGroup:
    exercises = tuple(_parse_grouped_exercise(item) for item in raw.get("exercises") or [])
    return ExerciseGroup(**_entity_kwargs(raw, "ExerciseGroup"), exercises=exercises)


def _parse_solution(raw: dict[str, Any]) -> Solution:
    exercise = raw.get("exercise") or {}
    return Solution(
        id=int(raw["id"]),
        exercise_id=int(exercise.get("id") or 0),
        alias=raw.get("alias"),
        trashed=bool(raw.get("trashed", False)),
    )


def _parse_taxonomy_term(raw: dict[str, Any]) -> TaxonomyTerm:
    navigation = raw.get("navigation") or {}
    return TaxonomyTerm(
        id=int(raw["id"]),
        name=raw.get("name") or "",
        term_type=raw.get("type") or "topic",
        alias=raw.get("alias"),
        trashed=bool(raw.get("trashed", False)),
        description=raw.get("description"),
        path=_taxonomy_path(navigation.get("path")),
        navigation=_navigation_tree(navigation),
        children=tuple(_taxonomy_children(raw.get("children"))),
    )


def _parse_user(raw: dict[str, Any]) -> User:
    return User(
        id=int(raw["id"]),
        username=raw.get("username") or "",
        alias=raw.get("alias"),
        description=raw.get("description"),
        last_login=raw.get("lastLogin"),
        date=raw.get("date"),
        active_author=bool(raw.get("activeAuthor", False)),
        active_donor=bool(raw.get("activeDonor", False)),
        active_reviewer=bool(raw.get("activeReviewer", False)),
    )


_PARSERS: dict[str, Callable[[dict[str, Any]], ResolvedNode]] = {
    "Article": _parse_article,
    "Page": _parse_page,
    "CoursePage": _parse_course_page,
    "Course": _parse_course,
    "Video": _parse_video,
    "Applet": _parse_applet,
    "Event": _parse_event,
    "Exercise": _parse_exercise,
    "GroupedExercise": _parse_grouped_exercise,
    "ExerciseGroup": _parse_exercise_group,
    "Solution": _parse_solution,
    "TaxonomyTerm": _parse_taxonomy_term,
    "User": _parse_user,
}


# ---------------------------------------------------------------------------
# Shared sub-records


def _entity_revision(raw: dict[str, Any] | None, typename: str) -> EntityRevision | None:
    if not raw:
        return None
    allowed = CURRENT_REVISION_FIELDS.get(typename, frozenset({"content"}))
    values = {name: raw.get(key) for name, key in _RAW_REVISION_KEYS.items() if name in allowed}
    revision_id = raw.get("id")
    return EntityRevision(
        id=int(revision_id) if revision_id is not None else None,
        trashed=bool(raw.get("trashed", False)),
        **values,
    )


def _license(raw: dict[str, Any] | None) -> License | None:
    if not raw or raw.get("id") is None:
        return None
    return License(
        id=int(raw["id"]),
        url=raw.get("url") or "",
        title=raw.get("title") or "",
        short_title=raw.get("shortTitle"),
        default=bool(raw.get("default", False)),
    )


def _total_count(raw: dict[str, Any] | None) -> int | None:
    if not raw:
        return None
    count = raw.get("totalCount")
    return int(count) if count is not None else None


def _solution_link(raw: dict[str, Any] | None) -> SolutionLink | None:
    if not raw or raw.get("id") is None:
        return None
    current = raw.get("currentRevision")
    return SolutionLink(
        id=int(raw["id"]),
        trashed=bool(raw.get("trashed", False)),
        content=(current or {}).get("content"),
        has_current_revision=current is not None,
        license=_license(raw.get("license")),
    )


def _author(raw: dict[str, Any] | None) -> Author | None:
    if not raw or raw.get("id") is None:
        return None
    return Author(
        id=int(raw["id"]),
        username=raw.get("username") or "",
        active_author=bool(raw.get("activeAuthor", False)),
        active_donor=bool(raw.get("activeDonor", False)),
        active_reviewer=bool(raw.get("activeReviewer", False)),
    )


def _course_page_link(raw: dict[str, Any]) -> CoursePageLink:
    current = raw.get("currentRevision") or {}
    return CoursePageLink(
        id=int(raw["id"]),
        alias=raw.get("alias"),
        trashed=bool(raw.get("trashed", False)),
        title=current.get("title"),
        revision_trashed=bool(current.get("trashed", False)),
    )


def _taxonomy_path(raw: dict[str, Any] | None) -> TaxonomyPath | None:
    if not raw:
        return None
    nodes = []
    for item in raw.get("nodes") or []:
        if not item.get("label"):
            continue
        nodes.append(NavigationLink(label=item["label"], url=item.get("url"), id=item.get("id")))
    return TaxonomyPath(nodes=tuple(nodes))


def _taxonomy_paths(raw: dict[str, Any] | None) -> tuple[TaxonomyPath, ...]:
    if not raw:
        return ()
    paths = []
    for term in raw.get("nodes") or []:
        path = _taxonomy_path((term.get("navigation") or {}).get("path"))
        if path is not None and path.nodes:
            paths.append(path)
    return tuple(paths)


def _navigation_tree(raw: dict[str, Any] | None) -> NavigationTree | None:
    """Parse `navigation.data`, which the API delivers as a JSON scalar."""
    if not raw:
        return None
    data = raw.get("data")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError:
            return None
    if not isinstance(data, dict):
        return None
    return NavigationTree(
        label=data.get("label") or "",
        children=tuple(_navigation_entry(child) for child in data.get("children") or []),
    )


def _navigation_entry(raw: dict[str, Any]) -> NavigationTreeEntry:
    return NavigationTreeEntry(
        label=raw.get("label") or "",
        url=raw.get("url"),
        id=raw.get("id"),
        children=tuple(_navigation_entry(child) for child in raw.get("children") or []),
    )


_EXERCISE_CHILD_PARSERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "Exercise": _parse_exercise,
    "GroupedExercise": _parse_grouped_exercise,
    "ExerciseGroup": _parse_exercise_group,
}


def _taxonomy_children(raw: dict[str, Any] | None) -> list[TaxonomyChild]:
    if not raw:
        return []
    children = []
    for item in raw.get("nodes") or []:
        typename = item.get("__typename")
        if not typename or item.get("id") is None:
            continue
        exercise_parser = _EXERCISE_CHILD_PARSERS.get(typename)
        if typename == "TaxonomyTerm":
            title = item.get("name") or ""
        else:
            title = (item.get("currentRevision") or {}).get("title") or ""
        children.append(
            TaxonomyChild(
                typename=typename,
                id=int(item["id"]),
                alias=item.get("alias"),
                title=title,
                trashed=bool(item.get("trashed", False)),
                term_type=item.get("type") if typename == "TaxonomyTerm" else None,
                children=tuple(_taxonomy_children(item.get("children"))),
                exercise=exercise_parser(item) if exercise_parser else None,
            )
        )
    return children
