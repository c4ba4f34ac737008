from __future__ import annotations

import pytest

from content_resolver.core.parse import parse_node
from content_resolver.core.types import Article, CoursePage, GroupedExercise, Revision, TaxonomyTerm
from content_resolver.errors import UnknownEntityType

from fakes import article, course_page, page_link


def test_parse_article():
    node = parse_node(article(meta_description="Kurz."))

    assert isinstance(node, Article)
    assert node.alias == "/mathe/artikel"
    assert node.current_revision.meta_description == "Kurz."
    assert node.license.default is True
    assert node.unrevised_revisions == 0
    assert [link.label for link in node.taxonomy_paths[0].nodes] == ["Mathe", "Zahlen"]


def test_parser_reads_only_fields_of_the_tag():
    raw = {
        "__typename": "CoursePage",
        "id": 3,
        "currentRevision": {"title": "Seite", "content": "", "metaDescription": "not a course page field"},
    }

    node = parse_node(raw)

    assert node.current_revision.meta_description is None


def test_parse_course_page_links():
    node = parse_node(course_page(3, "/c", [page_link(2, "/b", "B", trashed=True)]))

    assert isinstance(node, CoursePage)
    assert node.course.title == "Kurs"
    assert node.course.pages[0].trashed is True
    assert node.course.pages[0].title == "B"


def test_parse_grouped_exercise_parent():
    node = parse_node({"__typename": "GroupedExercise", "id": 5, "exerciseGroup": {"id": 4}})

    assert isinstance(node, GroupedExercise)
    assert node.group_id == 4


def test_parse_revision_author():
    node = parse_node(
        {
            "__typename": "VideoRevision",
            "id": 8,
            "url": "https://youtu.be/x",
            "author": {"id": 1, "username": "anna", "activeAuthor": True},
            "repository": {"__typename": "Video", "id": 2},
        }
    )

    assert isinstance(node, Revision)
    assert node.url == "https://youtu.be/x"
    assert node.author.active_author is True
    assert node.repository.current_revision is None


def test_parse_taxonomy_navigation_from_json_string():
    node = parse_node(
        {
            "__typename": "TaxonomyTerm",
            "id": 5,
            "name": "Zahlen",
            "type": "topic",
            "navigation": {
                "data": '{"label": "Mathe", "children": [{"label": "Zahlen", "id": 5}]}',
                "path": {"nodes": [{"label": "Mathe", "url": "/mathe", "id": 1}, {"label": "Zahlen", "url": "/zahlen", "id": 5}]},
            },
        }
    )

    assert isinstance(node, TaxonomyTerm)
    assert node.navigation.children[0].label == "Zahlen"
    assert len(node.path.nodes) == 2


@pytest.mark.parametrize("raw", [{"__typename": "Comment", "id": 1}, {"id": 1}])
def test_unknown_tags_raise(raw):
    with pytest.raises(UnknownEntityType):
        parse_node(raw)


def test_null_parent_ids_parse_as_zero():
    solution = parse_node({"__typename": "Solution", "id": 9, "exercise": {"id": None}})
    page = parse_node({"__typename": "CoursePage", "id": 3, "course": {"id": None, "pages": []}})
    revision = parse_node({"__typename": "ArticleRevision", "id": 5, "repository": {"id": None}})

    assert solution.exercise_id == 0
    assert page.course.id == 0
    assert revision.repository.id == 0
