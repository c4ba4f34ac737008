"""
Taxonomy page data.

A term's children are sorted into link lists by type. Folder terms (the
exercise collections of a topic) are listed as exercises, other sub-terms
become subterms with link lists of their own, and exercises attached to
the term directly are adapted into `exercises_content`.
"""

from __future__ import annotations

from collections import defaultdict

from ..convert import convert_state, create_standalone_exercise
from ..core.types import TaxonomyChild, TaxonomyTerm
from ..core.view_models import TaxonomyData, TaxonomyLink, TaxonomySubterm

FOLDER_TYPES = ("topicFolder", "curriculumTopicFolder")

_ENTITY_CATEGORIES = {
    "Article": "articles",
    "Video": "videos",
    "Applet": "applets",
    "Course": "courses",
    "Event": "events",
}


def build_taxonomy_data(term: TaxonomyTerm) -> TaxonomyData:
    visible = [child for child in term.children if not child.trashed]
    links = _categorize(visible)

    subterms = tuple(
        _subterm(child)
        for child in visible
        if child.typename == "TaxonomyTerm" and child.term_type not in FOLDER_TYPES
    )
    exercises_content = tuple(
        create_standalone_exercise(child.exercise) for child in visible if child.exercise is not None
    )

    return TaxonomyData(
        id=term.id,
        title=term.name,
        type=term.term_type,
        description=convert_state(term.description),
        articles=links["articles"],
        exercises=links["exercises"],
        videos=links["videos"],
        applets=links["applets"],
        courses=links["courses"],
        events=links["events"],
        subterms=subterms,
        exercises_content=exercises_content,
    )


def _subterm(child: TaxonomyChild) -> TaxonomySubterm:
    links = _categorize([item for item in child.children if not item.trashed])
    return TaxonomySubterm(
        id=child.id,
        title=child.title,
        url=_url(child),
        articles=links["articles"],
        exercises=links["exercises"],
        videos=links["videos"],
        applets=links["applets"],
        courses=links["courses"],
        events=links["events"],
        folders=links["folders"],
    )


def _categorize(children: list[TaxonomyChild]) -> defaultdict[str, tuple[TaxonomyLink, ...]]:
    buckets: defaultdict[str, list[TaxonomyLink]] = defaultdict(list)
    for child in children:
        if child.typename == "TaxonomyTerm":
            category = "exercises" if child.term_type in FOLDER_TYPES else "folders"
        else:
            category = _ENTITY_CATEGORIES.get(child.typename)
        if category is None or not child.title:
            continue
        buckets[category].append(TaxonomyLink(title=child.title, url=_url(child), id=child.id))
    return defaultdict(tuple, {key: tuple(value) for key, value in buckets.items()})


def _url(child: TaxonomyChild) -> str:
    return child.alias or f"/{child.id}"
