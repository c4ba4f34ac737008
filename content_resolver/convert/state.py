"""
Conversion from serialized CMS content to ContentNode sequences.

Content comes in three shapes:
1. Editor documents: a JSON object `{"plugin": ..., "state": ...}`
2. Legacy layouts: a JSON array of rows, each row a list of `{"col", "content"}` cells holding HTML
3. Legacy HTML: anything else

The converter never raises on bad input: None/blank gives an empty
sequence, malformed JSON is treated as HTML, unknown plugins become
`unsupported` nodes.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..core.nodes import ContentNode, text_node
from ..utils.logging import get_logger, log_event

logger = get_logger("convert")

Nodes = tuple[ContentNode, ...]


def convert_state(raw: str | None) -> Nodes:
    """Parse serialized content into a render-ready node sequence."""
    if raw is None:
        return ()
    stripped = raw.strip()
    if not stripped:
        return ()

    if stripped[0] in "{[":
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as exc:
            log_event(
                logger,
                "Content is not valid JSON, treating as HTML",
                level=logging.WARNING,
                event="convert_json_fallback",
                error=str(exc),
            )
        else:
            if isinstance(data, dict):
                return convert_document(data)
            if isinstance(data, list):
                return convert_legacy_layout(data)

    return convert_html(stripped)


# ---------------------------------------------------------------------------
# Editor documents


def convert_document(doc: Any) -> Nodes:
    """Convert one editor plugin document (possibly nested)."""
    if not isinstance(doc, dict):
        return ()
    plugin = doc.get("plugin")
    state = doc.get("state")
    handler = _PLUGINS.get(plugin) if isinstance(plugin, str) else None
    if handler is None:
        log_event(logger, "Unsupported plugin", level=logging.DEBUG, event="convert_unsupported", plugin=plugin)
        return (ContentNode(type="unsupported", attrs={"plugin": plugin}),)
    return handler(state)


def _rows(state: Any) -> Nodes:
    nodes: list[ContentNode] = []
    for row in _items(state):
        nodes.extend(convert_document(row))
    return tuple(nodes)


def _mapping(state: Any) -> dict[str, Any]:
    return state if isinstance(state, dict) else {}


def _items(value: Any) -> list[dict[str, Any]]:
    """Dict entries of a list state; anything else is dropped."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(state: Any) -> Nodes:
    if not isinstance(state, list):
        return ()
    return tuple(node for item in state for node in _slate(item))


def _slate(item: Any) -> Nodes:
    if not isinstance(item, dict):
        return ()
    if "text" in item and "type" not in item:
        if item["text"] in ("", None):
            return ()
        return (
            text_node(
                str(item["text"]),
                strong=item.get("strong"),
                em=item.get("em"),
                code=item.get("code"),
                color=item.get("color"),
            ),
        )

    kind = item.get("type")
    children = tuple(node for child in _items(item.get("children")) for node in _slate(child))
    if kind == "p":
        return (ContentNode(type="p", children=children),)
    if kind == "h":
        return (ContentNode(type="h", children=children, attrs={"level": item.get("level", 2)}),)
    if kind == "a":
        return (ContentNode(type="a", children=children, attrs={"href": item.get("href", "")}),)
    if kind == "math":
        node_type = "inline-math" if item.get("inline") else "math"
        return (ContentNode(type=node_type, attrs={"formula": item.get("src", "")}),)
    if kind == "unordered-list":
        return (ContentNode(type="ul", children=children),)
    if kind == "ordered-list":
        return (ContentNode(type="ol", children=children),)
    if kind == "list-item":
        return (ContentNode(type="li", children=children),)
    if kind == "list-item-child":
        return (ContentNode(type="p", children=children),)
    # Unknown inline wrappers are dropped, their content is kept.
    return children


def _image(state: Any) -> Nodes:
    state = _mapping(state)
    link = state.get("link") if isinstance(state.get("link"), dict) else {}
    caption = convert_document(state.get("caption")) if state.get("caption") else ()
    return (
        ContentNode(
            type="img",
            children=caption,
            attrs={
                "src": state.get("src", ""),
                "alt": state.get("alt", ""),
                "href": link.get("href"),
                "maxWidth": state.get("maxWidth"),
            },
        ),
    )


def _important(state: Any) -> Nodes:
    return (ContentNode(type="important", children=convert_document(state)),)


def _blockquote(state: Any) -> Nodes:
    return (ContentNode(type="blockquote", children=convert_document(state)),)


def _spoiler(state: Any) -> Nodes:
    state = _mapping(state)
    return (
        ContentNode(
            type="spoiler-container",
            children=(
                ContentNode(type="spoiler-title", children=(text_node(str(state.get("title") or "")),)),
                ContentNode(type="spoiler-body", children=convert_document(state.get("content"))),
            ),
        ),
    )


def _injection(state: Any) -> Nodes:
    return (ContentNode(type="injection", attrs={"href": str(state or "")}),)


def _geogebra(state: Any) -> Nodes:
    applet_id = str(state or "")
    if "geogebra.org/m/" in applet_id:
        applet_id = applet_id.rsplit("/", 1)[-1]
    return (ContentNode(type="geogebra", attrs={"id": applet_id}),)


def _video(state: Any) -> Nodes:
    state = _mapping(state)
    return (ContentNode(type="video", attrs={"src": state.get("src", ""), "alt": state.get("alt")}),)


def _multimedia(state: Any) -> Nodes:
    state = _mapping(state)
    return (
        ContentNode(
            type="multimedia",
            children=convert_document(state.get("explanation")),
            attrs={
                "media": convert_document(state.get("multimedia")),
                "mediaWidth": state.get("width", 50),
            },
        ),
    )


def _anchor(state: Any) -> Nodes:
    return (ContentNode(type="anchor", attrs={"id": str(state or "")}),)


def _highlight(state: Any) -> Nodes:
    state = _mapping(state)
    return (
        ContentNode(
            type="code",
            text=str(state.get("code") or ""),
            attrs={"language": state.get("language"), "showLineNumbers": state.get("showLineNumbers")},
        ),
    )


def _table(state: Any) -> Nodes:
    return (ContentNode(type="table", children=_markdown_table_rows(str(state or ""))),)


def _markdown_table_rows(markdown: str) -> Nodes:
    rows: list[ContentNode] = []
    for index, line in enumerate(line for line in markdown.splitlines() if "|" in line):
        cells = [cell.strip() for cell in line.strip().strip("|").split("|")]
        if all(re.fullmatch(r":?-{2,}:?", cell) for cell in cells if cell):
            continue
        cell_type = "th" if index == 0 else "td"
        rows.append(
            ContentNode(
                type="tr",
                children=tuple(
                    ContentNode(type=cell_type, children=(text_node(cell),) if cell else ()) for cell in cells
                ),
            )
        )
    return tuple(rows)


def _equations(state: Any) -> Nodes:
    state = _mapping(state)
    steps = []
    for step in _items(state.get("steps")):
        steps.append(
            {
                "left": step.get("left", ""),
                "sign": step.get("sign", "equals"),
                "right": step.get("right", ""),
                "transform": step.get("transform", ""),
                "explanation": convert_document(step.get("explanation")),
            }
        )
    return (
        ContentNode(
            type="equations",
            attrs={
                "steps": steps,
                "firstExplanation": convert_document(state.get("firstExplanation")),
                "transformationTarget": state.get("transformationTarget", "equation"),
            },
        ),
    )


def _input_exercise(state: Any) -> Nodes:
    state = _mapping(state)
    answers = [
        {
            "value": answer.get("value", ""),
            "isCorrect": bool(answer.get("isCorrect", False)),
            "feedback": convert_document(answer.get("feedback")),
        }
        for answer in _items(state.get("answers"))
    ]
    return (
        ContentNode(
            type="inputExercise",
            attrs={"inputType": state.get("type"), "unit": state.get("unit", ""), "answers": answers},
        ),
    )


def _sc_mc_exercise(state: Any) -> Nodes:
    state = _mapping(state)
    answers = [
        {
            "content": convert_document(answer.get("content")),
            "isCorrect": bool(answer.get("isCorrect", False)),
            "feedback": convert_document(answer.get("feedback")),
        }
        for answer in _items(state.get("answers"))
    ]
    return (
        ContentNode(
            type="scMcExercise",
            attrs={"isSingleChoice": bool(state.get("isSingleChoice", False)), "answers": answers},
        ),
    )


def _text_exercise(state: Any) -> Nodes:
    state = _mapping(state)
    children = list(convert_document(state.get("content")))
    if state.get("interactive"):
        children.extend(convert_document(state["interactive"]))
    return tuple(children)


def _text_solution(state: Any) -> Nodes:
    state = _mapping(state)
    nodes: list[ContentNode] = []
    prerequisite = state.get("prerequisite")
    if isinstance(prerequisite, dict) and prerequisite.get("id"):
        nodes.append(
            ContentNode(
                type="solution-prerequisite",
                attrs={"href": f"/{prerequisite['id']}", "title": prerequisite.get("title", "")},
            )
        )
    nodes.extend(convert_document(state.get("strategy")))
    nodes.extend(convert_document(state.get("steps")))
    return tuple(nodes)


_PLUGINS: dict[str, Callable[[Any], Nodes]] = {
    "rows": _rows,
    "text": _text,
    "image": _image,
    "important": _important,
    "blockquote": _blockquote,
    "spoiler": _spoiler,
    "injection": _injection,
    "geogebra": _geogebra,
    "video": _video,
    "multimedia": _multimedia,
    "anchor": _anchor,
    "highlight": _highlight,
    "table": _table,
    "equations": _equations,
    "inputExercise": _input_exercise,
    "scMcExercise": _sc_mc_exercise,
    "type-text-exercise": _text_exercise,
    "type-text-solution": _text_solution,
    "solution": _text_solution,
}


# ---------------------------------------------------------------------------
# Legacy content


def convert_legacy_layout(rows: list[Any]) -> Nodes:
    """Convert legacy `[[{"col": 24, "content": "<p>..</p>"}]]` layouts."""
    nodes: list[ContentNode] = []
    for row in rows:
        if not isinstance(row, list):
            continue
        cols = [
            ContentNode(
                type="col",
                children=convert_html(str(cell.get("content") or "")),
                attrs={"size": cell.get("col", 24)},
            )
            for cell in row
            if isinstance(cell, dict)
        ]
        if len(cols) == 1:
            nodes.extend(cols[0].children)
        elif cols:
            nodes.append(ContentNode(type="row", children=tuple(cols)))
    return tuple(nodes)


_BLOCK_TAGS = {"p", "ul", "ol", "li", "table", "tr", "td", "th", "blockquote", "pre"}
_HEADINGS = {f"h{level}": level for level in range(1, 7)}
_MATH_DELIMITERS = re.compile(r"^(%%|\$\$|\\\(|\\\[)|(%%|\$\$|\\\)|\\\])$")


def convert_html(html: str) -> Nodes:
    if not html.strip():
        return ()
    soup = BeautifulSoup(html, "html.parser")
    nodes = _html_children(soup, {})
    return _wrap_loose_inline(nodes)


def _html_children(parent: Tag, marks: dict[str, bool]) -> list[ContentNode]:
    nodes: list[ContentNode] = []
    for child in parent.children:
        nodes.extend(_html_node(child, marks))
    return nodes


def _html_node(el: Any, marks: dict[str, bool]) -> list[ContentNode]:
    if isinstance(el, Comment):
        return []
    if isinstance(el, NavigableString):
        text = re.sub(r"\s+", " ", str(el))
        if not text.strip():
            return []
        return [text_node(text, **marks)]
    if not isinstance(el, Tag):
        return []

    name = el.name.lower()
    classes = set(el.get("class") or [])

    if name in ("strong", "b"):
        return _html_children(el, {**marks, "strong": True})
    if name in ("em", "i"):
        return _html_children(el, {**marks, "em": True})
    if name == "code":
        return _html_children(el, {**marks, "code": True})
    if name in ("script", "style", "br"):
        return []
    if "mathInline" in classes or "mathBlock" in classes:
        formula = _MATH_DELIMITERS.sub("", el.get_text().strip()).strip()
        node_type = "inline-math" if "mathInline" in classes else "math"
        return [ContentNode(type=node_type, attrs={"formula": formula})]
    if "spoiler" in classes:
        teaser = el.find(class_="spoiler-teaser")
        body = el.find(class_="spoiler-content")
        return [
            ContentNode(
                type="spoiler-container",
                children=(
                    ContentNode(
                        type="spoiler-title",
                        children=(text_node(teaser.get_text(" ", strip=True)),) if teaser else (),
                    ),
                    ContentNode(
                        type="spoiler-body",
                        children=_wrap_loose_inline(_html_children(body, {})) if body else (),
                    ),
                ),
            )
        ]
    if name in _HEADINGS:
        return [ContentNode(type="h", children=tuple(_html_children(el, marks)), attrs={"level": _HEADINGS[name]})]
    if name == "a":
        return [ContentNode(type="a", children=tuple(_html_children(el, marks)), attrs={"href": el.get("href", "")})]
    if name == "img":
        return [ContentNode(type="img", attrs={"src": el.get("src", ""), "alt": el.get("alt", "")})]
    if name == "pre":
        return [ContentNode(type="code", text=el.get_text())]
    if name in ("thead", "tbody", "tfoot"):
        return _html_children(el, marks)
    if name in _BLOCK_TAGS:
        children = _html_children(el, marks)
        if name == "blockquote":
            children = list(_wrap_loose_inline(children))
        return [ContentNode(type=name, children=tuple(children))]
    # div, span, section and friends are transparent.
    return _html_children(el, marks)


_INLINE_TYPES = {"text", "a", "inline-math"}


def _wrap_loose_inline(nodes: list[ContentNode]) -> Nodes:
    """Group top-level inline runs into paragraphs."""
    result: list[ContentNode] = []
    run: list[ContentNode] = []
    for node in nodes:
        if node.type in _INLINE_TYPES:
            run.append(node)
            continue
        if run:
            result.append(ContentNode(type="p", children=tuple(run)))
            run = []
        result.append(node)
    if run:
        result.append(ContentNode(type="p", children=tuple(run)))
    return tuple(result)
