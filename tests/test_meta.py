"""Tests for titles, meta descriptions and meta images."""

from __future__ import annotations

import asyncio

from content_resolver.core.nodes import ContentNode, text_node
from content_resolver.core.types import (
    EntityRevision,
    Exercise,
    NavigationLink,
    Revision,
    RevisionRepository,
    TaxonomyPath,
    TaxonomyTerm,
    Video,
)
from content_resolver.derive import MetaImageTable, create_title, entity_meta_description, get_meta_description


def _p(text: str) -> ContentNode:
    return ContentNode(type="p", children=(text_node(text),))


def test_short_text_has_no_description():
    assert get_meta_description([_p("Zu kurz.")]) is None
    assert get_meta_description([]) is None


def test_medium_text_is_kept_whole():
    text = "Dieser Text ist lang genug für eine Beschreibung, aber kurz."

    assert get_meta_description([_p(text)]) == text


def test_long_text_is_cut_after_soft_cutoff():
    text = " ".join(["Wort"] * 60)

    description = get_meta_description([_p(text)])

    assert description.endswith(" …")
    body = description.removesuffix(" …")
    assert 100 <= len(body) <= 135
    assert text.startswith(body)


def test_long_text_without_spaces_is_capped():
    description = get_meta_description([_p("x" * 300)])

    assert description == "x" * 135 + " …"


def test_only_first_ten_blocks_are_sampled():
    blocks = [_p(f"Satz {i}.") for i in range(10)] + [_p("Ende " * 40)]

    assert "Ende" not in (get_meta_description(blocks) or "")


def test_text_inside_plugin_attrs_counts():
    spoiler = ContentNode(
        type="multimedia",
        attrs={"media": (_p("Medienbeschreibung mit ausreichend vielen Zeichen für den Test."),)},
    )

    assert get_meta_description([spoiler]).startswith("Medienbeschreibung")


def test_entity_fallback_description():
    assert entity_meta_description("de", "exercisegroup").startswith("Übungsaufgaben")
    assert entity_meta_description("ta", "article") == entity_meta_description("en", "default")


def test_meta_image_lookup():
    table = MetaImageTable("https://img.example/meta", {"mathe": "mathe.jpg", "default": "serlo.jpg"})

    assert asyncio.run(table.lookup("/mathe/zahlen")) == "https://img.example/meta/mathe.jpg"
    assert asyncio.run(table.lookup("/chemie/stoffe")) == "https://img.example/meta/serlo.jpg"
    assert asyncio.run(table.lookup(None)) is None


def test_titles():
    term = TaxonomyTerm(id=1, name="Zahlen", term_type="topic")
    folder = TaxonomyTerm(id=2, name="Aufgaben", term_type="topicFolder")
    video = Video(id=3, current_revision=EntityRevision(title="Brüche erklärt"))
    exercise = Exercise(
        id=4,
        taxonomy_paths=(TaxonomyPath(nodes=(NavigationLink(label="Mathe"), NavigationLink(label="Brüche"))),),
    )
    revision = Revision(id=5, typename="SolutionRevision", repository=RevisionRepository(id=6, typename="Solution"))

    assert create_title(term, "de") == "Zahlen (Grundlagen & Übungen) - lernen mit Serlo!"
    assert create_title(folder, "de") == "Aufgaben - lernen mit Serlo!"
    assert create_title(video, "en") == "Brüche erklärt - learn with Serlo!"
    assert create_title(exercise, "de") == "Mathe - Aufgabe - lernen mit Serlo!"
    assert create_title(Exercise(id=8), "de") == "Aufgabe - lernen mit Serlo!"
    assert create_title(revision, "de") == "Bearbeitung 5 - lernen mit Serlo!"
    assert create_title(Video(id=7), "de") == "Serlo"
