"""Tests for content conversion."""

from __future__ import annotations

import json

import pytest

from content_resolver.convert import convert_state


def test_empty_input():
    assert convert_state(None) == ()
    assert convert_state("") == ()
    assert convert_state("   ") == ()


def test_editor_document_with_marks_headings_and_math():
    doc = {
        "plugin": "rows",
        "state": [
            {
                "plugin": "text",
                "state": [
                    {"type": "h", "level": 2, "children": [{"text": "Brüche"}]},
                    {
                        "type": "p",
                        "children": [
                            {"text": "Ein ", "strong": True},
                            {"type": "math", "inline": True, "src": "\\frac{1}{2}", "children": []},
                            {"type": "a", "href": "/1555", "children": [{"text": "Link"}]},
                        ],
                    },
                ],
            }
        ],
    }

    nodes = convert_state(json.dumps(doc))

    heading, paragraph = nodes
    assert heading.type == "h"
    assert heading.attrs["level"] == 2
    assert [child.type for child in paragraph.children] == ["text", "inline-math", "a"]
    assert paragraph.children[0].attrs == {"strong": True}
    assert paragraph.children[1].attrs["formula"] == "\\frac{1}{2}"
    assert paragraph.children[2].attrs["href"] == "/1555"


def test_spoiler_and_image_plugins():
    doc = {
        "plugin": "rows",
        "state": [
            {
                "plugin": "spoiler",
                "state": {
                    "title": "Tipp",
                    "content": {"plugin": "text", "state": [{"type": "p", "children": [{"text": "Kürzen!"}]}]},
                },
            },
            {"plugin": "image", "state": {"src": "https://img/x.png", "alt": "Bild", "link": {"href": "/1"}}},
        ],
    }

    spoiler, image = convert_state(json.dumps(doc))

    assert spoiler.type == "spoiler-container"
    assert [child.type for child in spoiler.children] == ["spoiler-title", "spoiler-body"]
    assert image.type == "img"
    assert image.attrs["href"] == "/1"


def test_unknown_plugin_is_marked_unsupported():
    (node,) = convert_state(json.dumps({"plugin": "fancyNewThing", "state": {}}))

    assert node.type == "unsupported"
    assert node.to_dict() == {"type": "unsupported", "plugin": "fancyNewThing"}


def test_markdown_table():
    doc = {"plugin": "table", "state": "| a | b |\n|---|---|\n| 1 | 2 |"}

    (table,) = convert_state(json.dumps(doc))

    header, row = table.children
    assert [cell.type for cell in header.children] == ["th", "th"]
    assert row.children[1].children[0].text == "2"


def test_legacy_html():
    nodes = convert_state('<p>Hallo <b>Welt</b> <span class="mathInline">%%x^2%%</span></p><h3>Teil</h3>')

    paragraph, heading = nodes
    assert paragraph.type == "p"
    assert paragraph.children[1].attrs == {"strong": True}
    assert paragraph.children[-1].attrs["formula"] == "x^2"
    assert heading.attrs["level"] == 3


def test_loose_inline_html_is_wrapped_in_paragraphs():
    nodes = convert_state("Nur Text <a href='/2'>und Link</a>")

    assert [node.type for node in nodes] == ["p"]
    assert nodes[0].children[1].type == "a"


def test_legacy_layout_rows():
    layout = [
        [{"col": 24, "content": "<p>Eins</p>"}],
        [{"col": 12, "content": "<p>Links</p>"}, {"col": 12, "content": "<p>Rechts</p>"}],
    ]

    first, row = convert_state(json.dumps(layout))

    assert first.type == "p"
    assert row.type == "row"
    assert [col.attrs["size"] for col in row.children] == [12, 12]


def test_malformed_json_falls_back_to_html():
    nodes = convert_state("{not json")

    assert nodes[0].type == "p"
    assert nodes[0].children[0].text == "{not json"


@pytest.mark.parametrize(
    "doc",
    [
        {"plugin": "image", "state": "https://x/y.png"},
        {"plugin": ["text"], "state": []},
        {"plugin": "equations", "state": {"steps": [None, "x = 1"]}},
        {"plugin": "rows", "state": [{"plugin": "spoiler", "state": ["title"]}]},
        {"plugin": "scMcExercise", "state": {"answers": [None, 3]}},
        {"plugin": "inputExercise", "state": "42"},
        {"plugin": "text", "state": [{"type": "p", "children": 7}]},
        {"plugin": "highlight", "state": [1, 2]},
        {"plugin": "multimedia", "state": None},
        {"plugin": "type-text-solution", "state": ["steps"]},
    ],
)
def test_wrongly_shaped_plugin_state_does_not_raise(doc):
    nodes = convert_state(json.dumps(doc))

    assert isinstance(nodes, tuple)


def test_wrongly_shaped_steps_and_answers_are_skipped():
    doc = {
        "plugin": "rows",
        "state": [
            {"plugin": "equations", "state": {"steps": [None, {"left": "x", "right": "1"}]}},
            {"plugin": "inputExercise", "state": {"answers": ["7", {"value": "7", "isCorrect": True}]}},
        ],
    }

    equations, exercise = convert_state(json.dumps(doc))

    assert [step["left"] for step in equations.attrs["steps"]] == ["x"]
    assert [answer["value"] for answer in exercise.attrs["answers"]] == ["7"]
