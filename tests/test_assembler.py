"""Tests for alias resolution and single-entity page assembly."""

from __future__ import annotations

import asyncio
import json

import pytest

from content_resolver.config import ResolverConfig
from content_resolver.core.view_models import ErrorPage, RedirectPage, SingleEntityPage, TaxonomyPage
from content_resolver.errors import UpstreamError
from content_resolver.resolve import PageResolver

from fakes import FakeSource, article, course_page, page_link, taxonomy_terms, text_doc

LONG_TEXT = (
    "Ein Bruch besteht aus einem Zähler und einem Nenner, die durch einen Bruchstrich "
    "getrennt sind. Der Nenner gibt an, in wie viele gleich große Teile ein Ganzes zerlegt wird."
)


def _resolve(source: FakeSource, alias: str, instance: str = "de", **cfg) -> object:
    resolver = PageResolver(source, ResolverConfig(**cfg))
    return asyncio.run(resolver.resolve_page(alias, instance))


def test_article_becomes_single_entity_page():
    source = FakeSource(by_alias={"/mathe/artikel": article()})

    page = _resolve(source, "/mathe/artikel")

    assert isinstance(page, SingleEntityPage)
    assert page.kind == "single-entity"
    assert page.cache_key == "/de/mathe/artikel"
    assert page.entity_data.typename == "Article"
    assert page.entity_data.title == "Brüche"
    assert page.entity_data.category_icon == "article"
    assert page.entity_data.schema_data.wrap_with_item_type == "http://schema.org/Article"
    assert page.entity_data.license_data.title == "CC BY-SA 4.0"
    assert page.meta_data.title == "Brüche - lernen mit Serlo!"
    assert page.meta_data.meta_image == "https://de.serlo.org/_assets/img/meta/mathematik.jpg"
    assert [entry.label for entry in page.breadcrumbs_data] == ["Mathe", "Zahlen"]
    assert len(page.horizon_data) == 3
    assert page.newsletter_popup is False


def test_authored_meta_description_wins_over_content():
    raw = article(content=text_doc(LONG_TEXT), meta_description="Alles über Brüche.")
    page = _resolve(FakeSource(by_alias={"/mathe/artikel": raw}), "/mathe/artikel")

    assert page.meta_data.meta_description == "Alles über Brüche."


def test_meta_description_derived_from_content_without_authored_one():
    raw = article(content=text_doc(LONG_TEXT))
    page = _resolve(FakeSource(by_alias={"/mathe/artikel": raw}), "/mathe/artikel")

    assert page.meta_data.meta_description.startswith("Ein Bruch besteht aus")
    assert page.meta_data.meta_description.endswith(" …")


def test_short_content_falls_back_to_localised_default():
    page = _resolve(FakeSource(by_alias={"/mathe/artikel": article()}), "/mathe/artikel")

    assert page.meta_data.meta_description.startswith("Serlo ist die freie Lernplattform")


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        ({"__typename": "ArticleRevision", "id": 7, "repository": {"id": 1}}, "redirect"),
        ({"__typename": "SolutionRevision", "id": 8, "repository": {"id": 2}}, "redirect"),
        ({"__typename": "User", "id": 3, "username": "anna"}, "redirect"),
        ({"__typename": "TaxonomyTerm", "id": 5, "name": "Zahlen", "type": "topic"}, "taxonomy"),
        ({"__typename": "Page", "id": 6, "currentRevision": {"title": "Impressum"}}, "single-entity"),
        ({"__typename": "Event", "id": 9, "currentRevision": {"title": "Treffen"}}, "single-entity"),
        ({"__typename": "Video", "id": 10, "currentRevision": {"url": "https://youtu.be/x"}}, "single-entity"),
        ({"__typename": "Applet", "id": 11, "currentRevision": {"url": "abc123"}}, "single-entity"),
        ({"__typename": "Exercise", "id": 12}, "single-entity"),
        ({"__typename": "GroupedExercise", "id": 13}, "single-entity"),
        ({"__typename": "ExerciseGroup", "id": 14}, "single-entity"),
        ({"__typename": "Comment", "id": 15}, "error"),
    ],
)
def test_kind_mapping(raw, kind):
    page = _resolve(FakeSource(by_alias={"/x": raw}), "/x")

    assert page.kind == kind


def test_missing_node_is_404():
    page = _resolve(FakeSource(), "/nirgends")

    assert page == ErrorPage.not_found()
    assert page.to_dict() == {"kind": "error", "errorData": {"code": 404}}


def test_revision_and_user_redirect_targets():
    source = FakeSource(
        by_alias={
            "/r": {"__typename": "ArticleRevision", "id": 7, "repository": {"id": 1}},
            "/u": {"__typename": "User", "id": 3, "username": "anna"},
        }
    )

    assert _resolve(source, "/r") == RedirectPage(target="entity/repository/compare/0/7")
    assert _resolve(source, "/u") == RedirectPage(target="/user/3/anna")


def test_solution_resolves_through_its_exercise():
    source = FakeSource(
        by_alias={
            "/loesung": {"__typename": "Solution", "id": 43, "exercise": {"id": 42}},
            "/42": {"__typename": "Exercise", "id": 42},
        }
    )

    page = _resolve(source, "/loesung")

    assert ("alias", "/42") in source.calls
    assert isinstance(page, SingleEntityPage)
    assert page.entity_data.id == 42
    assert page.meta_data.content_type == "text-exercise"
    assert page.entity_data.content[0].type == "exercise"


def test_course_resolves_to_first_page():
    source = FakeSource(
        by_alias={
            "/kurs": {"__typename": "Course", "id": 500, "pages": [page_link(501, "/kurs/seite-1")]},
            "/kurs/seite-1": course_page(501, "/kurs/seite-1", [page_link(501, "/kurs/seite-1", "Seite 501")]),
        }
    )

    page = _resolve(source, "/kurs")

    assert page.kind == "single-entity"
    assert page.cache_key == "/de/kurs/seite-1"


def test_course_without_pages_is_404():
    source = FakeSource(by_alias={"/kurs": {"__typename": "Course", "id": 500, "pages": []}})

    assert _resolve(source, "/kurs") == ErrorPage.not_found()


def test_course_pointing_at_itself_stops_with_redirect_loop():
    source = FakeSource(
        by_alias={"/kurs": {"__typename": "Course", "id": 500, "pages": [page_link(500, "/kurs")]}}
    )

    page = _resolve(source, "/kurs")

    assert page == ErrorPage.not_found("redirect loop")
    assert source.calls == [("alias", "/kurs")]


def test_redirect_chain_is_bounded_by_max_depth():
    by_alias = {
        f"/c{i}": {"__typename": "Course", "id": i, "pages": [page_link(i + 1, f"/c{i + 1}")]}
        for i in range(20)
    }
    source = FakeSource(by_alias=by_alias)

    page = _resolve(source, "/c0", max_redirect_depth=3)

    assert page == ErrorPage.not_found("redirect loop")
    assert len(source.calls) == 3


def test_course_page_pagination_skips_hidden_pages():
    siblings = [
        page_link(1, "/a", "A", trashed=True),
        page_link(2, "/b", "B"),
        page_link(3, "/c", "C"),
        page_link(4, "/d", None),
    ]
    source = FakeSource(by_alias={"/c": course_page(3, "/c", siblings)})

    page = _resolve(source, "/c")
    course = page.entity_data.course_data

    assert [entry.title for entry in course.pages] == ["B", "C"]
    assert course.position == 2
    assert course.next_page_url is None
    assert page.meta_data.content_type == "course-page"


def test_course_page_next_url_and_special_alias_fallback():
    siblings = [page_link(2, "/b", "B"), page_link(3, "/kurs/übung", "C")]
    source = FakeSource(by_alias={"/b": course_page(2, "/b", siblings)})

    course = _resolve(source, "/b").entity_data.course_data

    assert course.position == 1
    assert course.pages[0].active is True
    assert course.next_page_url == "/3"


def test_resolution_is_idempotent():
    source = FakeSource(by_alias={"/mathe/artikel": article(content=text_doc(LONG_TEXT))})

    first = _resolve(source, "/mathe/artikel")
    second = _resolve(source, "/mathe/artikel")

    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_horizon_only_for_horizon_instance():
    source = FakeSource(by_alias={"/math/article": article(alias="/math/article")})

    page = _resolve(source, "/math/article", instance="en")

    assert page.horizon_data is None
    assert page.meta_data.title == "Brüche - learn with Serlo!"


def test_page_navigation_suppresses_breadcrumbs():
    navigation = {
        "data": json.dumps({"label": "Über Serlo", "children": [{"label": "Team", "url": "/team", "id": 6}]}),
        "path": {"nodes": []},
    }
    raw = {
        "__typename": "Page",
        "id": 6,
        "alias": "/team",
        "currentRevision": {"id": 60, "title": "Team", "content": text_doc("Wir sind Serlo.")},
        "navigation": navigation,
        "taxonomyTerms": taxonomy_terms("Mathe"),
    }

    page = _resolve(FakeSource(by_alias={"/team": raw}), "/team")

    assert page.newsletter_popup is True
    assert page.breadcrumbs_data is None
    assert page.secondary_navigation_data[0].active is True
    assert page.entity_data.revision_id == 60


def test_event_has_no_breadcrumbs_and_no_invite():
    raw = {
        "__typename": "Event",
        "id": 9,
        "alias": "/community/treffen",
        "currentRevision": {"title": "Treffen", "content": text_doc("Wir treffen uns.")},
        "taxonomyTerms": taxonomy_terms("Community"),
    }

    page = _resolve(FakeSource(by_alias={"/community/treffen": raw}), "/community/treffen")

    assert page.breadcrumbs_data is None
    assert page.entity_data.invite_to_edit is None
    assert page.meta_data.content_type == "event"


def test_video_embed_comes_first():
    raw = {
        "__typename": "Video",
        "id": 10,
        "alias": "/mathe/video",
        "currentRevision": {"title": "Video", "url": "https://youtu.be/x", "content": text_doc("Beschreibung")},
    }

    page = _resolve(FakeSource(by_alias={"/mathe/video": raw}), "/mathe/video")

    assert page.entity_data.content[0].type == "video"
    assert page.entity_data.content[0].attrs["src"] == "https://youtu.be/x"
    assert page.entity_data.schema_data.wrap_with_item_type == "http://schema.org/VideoObject"


def test_taxonomy_term_page():
    raw = {
        "__typename": "TaxonomyTerm",
        "id": 5,
        "alias": "/mathe/zahlen",
        "name": "Zahlen",
        "type": "topic",
        "children": {
            "nodes": [
                {"__typename": "Article", "id": 20, "alias": "/mathe/brueche", "currentRevision": {"title": "Brüche"}},
                {"__typename": "TaxonomyTerm", "id": 21, "alias": "/mathe/aufgaben", "name": "Aufgaben", "type": "topicFolder"},
            ]
        },
    }

    page = _resolve(FakeSource(by_alias={"/mathe/zahlen": raw}), "/mathe/zahlen")

    assert isinstance(page, TaxonomyPage)
    assert page.meta_data.content_type == "topic"
    assert page.meta_data.title == "Zahlen (Grundlagen & Übungen) - lernen mit Serlo!"
    assert page.taxonomy_data.articles[0].url == "/mathe/brueche"
    assert page.taxonomy_data.exercises[0].title == "Aufgaben"


def test_internal_links_are_enriched():
    content = json.dumps(
        {
            "plugin": "text",
            "state": [{"type": "p", "children": [{"type": "a", "href": "/123", "children": [{"text": "hier"}]}]}],
        }
    )
    source = FakeSource(by_alias={"/mathe/artikel": article(content=content)}, aliases={123: "/mathe/ziel"})

    page = _resolve(source, "/mathe/artikel")

    assert page.pretty_links == {"/123": "/mathe/ziel"}
    assert ("aliases", [123]) in source.calls


def test_link_enrichment_failure_degrades_to_none():
    content = json.dumps(
        {
            "plugin": "text",
            "state": [{"type": "p", "children": [{"type": "a", "href": "/123", "children": [{"text": "hier"}]}]}],
        }
    )
    source = FakeSource(
        by_alias={"/mathe/artikel": article(content=content)},
        alias_error=UpstreamError("boom"),
    )

    page = _resolve(source, "/mathe/artikel")

    assert isinstance(page, SingleEntityPage)
    assert page.pretty_links is None


def test_link_enrichment_can_be_disabled():
    source = FakeSource(by_alias={"/mathe/artikel": article()})

    _resolve(source, "/mathe/artikel", enrich_links=False)

    assert all(kind != "aliases" for kind, _ in source.calls)


def test_canonical_id_redirect_only_when_enabled():
    source = FakeSource(by_alias={"/1": article()})

    assert _resolve(source, "/1").kind == "single-entity"
    assert _resolve(source, "/1", canonical_id_redirects=True) == RedirectPage(target="/mathe/artikel")


def test_upstream_errors_propagate():
    class BrokenSource(FakeSource):
        async def fetch_by_alias(self, alias, instance):
            raise UpstreamError("GraphQL errors: nope")

    resolver = PageResolver(BrokenSource())

    with pytest.raises(UpstreamError):
        asyncio.run(resolver.resolve_page("/x", "de"))


def _applet(meta_description: str | None = None) -> dict:
    return {
        "__typename": "Applet",
        "id": 11,
        "alias": "/mathe/applet",
        "currentRevision": {
            "title": "Applet",
            "url": "abc123",
            "content": text_doc(LONG_TEXT),
            "metaDescription": meta_description,
        },
    }


def test_applet_embed_comes_first_and_authored_description_wins():
    page = _resolve(FakeSource(by_alias={"/mathe/applet": _applet("Ein Applet zu Brüchen.")}), "/mathe/applet")

    assert [node.type for node in page.entity_data.content[:2]] == ["geogebra", "p"]
    assert page.entity_data.content[0].attrs["id"] == "abc123"
    assert page.meta_data.content_type == "applet"
    assert page.meta_data.meta_description == "Ein Applet zu Brüchen."


def test_applet_description_derived_from_content_not_embed():
    page = _resolve(FakeSource(by_alias={"/mathe/applet": _applet()}), "/mathe/applet")

    assert page.meta_data.meta_description.startswith("Ein Bruch besteht aus")


def test_meta_image_failure_degrades_to_none(monkeypatch):
    resolver = PageResolver(FakeSource(by_alias={"/mathe/artikel": article()}))

    async def failing_lookup(alias):
        raise RuntimeError("image table unavailable")

    monkeypatch.setattr(resolver.meta_images, "lookup", failing_lookup)

    page = asyncio.run(resolver.resolve_page("/mathe/artikel", "de"))

    assert isinstance(page, SingleEntityPage)
    assert page.meta_data.meta_image is None
    assert page.meta_data.title == "Brüche - lernen mit Serlo!"


@pytest.mark.parametrize("exercise", [{}, {"id": None}, {"id": 0}])
def test_solution_without_exercise_is_not_found(exercise):
    source = FakeSource(by_alias={"/loesung": {"__typename": "Solution", "id": 43, "exercise": exercise}})

    page = _resolve(source, "/loesung")

    assert page == ErrorPage.not_found()
    assert source.calls == [("alias", "/loesung")]


def test_wrongly_shaped_content_still_renders_a_page():
    content = json.dumps({"plugin": "image", "state": "https://x/y.png"})
    source = FakeSource(by_alias={"/mathe/artikel": article(content=content)})

    page = _resolve(source, "/mathe/artikel")

    assert isinstance(page, SingleEntityPage)
    assert page.entity_data.content[0].type == "img"
