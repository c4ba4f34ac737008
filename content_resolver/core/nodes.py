"""
Render-ready content tree and derived navigation records.

ContentNode mirrors the editor's plugin schema: every node has a `type` tag
and either a text payload, nested children, or plugin attributes (which may
themselves hold node sequences).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class ContentNode:
    type: str
    children: tuple[ContentNode, ...] = ()
    text: str | None = None
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.text is not None:
            data["text"] = self.text
        for key, value in self.attrs.items():
            if value is None:
                continue
            data[key] = _attr_to_json(value)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def walk(self) -> Iterator[ContentNode]:
        """Yield this node and every nested node, depth-first in document order."""
        yield self
        for value in self.attrs.values():
            for nested in nested_nodes(value):
                yield from nested.walk()
        for child in self.children:
            yield from child.walk()


def text_node(text: str, **marks: Any) -> ContentNode:
    return ContentNode(type="text", text=text, attrs={k: v for k, v in marks.items() if v})


def walk_all(nodes: tuple[ContentNode, ...] | list[ContentNode]) -> Iterator[ContentNode]:
    for node in nodes:
        yield from node.walk()


def nested_nodes(value: Any) -> list[ContentNode]:
    if isinstance(value, ContentNode):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, ContentNode)]
    return []


def _attr_to_json(value: Any) -> Any:
    if isinstance(value, ContentNode):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_attr_to_json(item) for item in value]
    if isinstance(value, Mapping):
        return {k: _attr_to_json(v) for k, v in value.items() if v is not None}
    return value


@dataclass(frozen=True)
class BreadcrumbEntry:
    label: str
    url: str | None = None
    ellipsis: bool = False


@dataclass(frozen=True)
class NavigationEntry:
    label: str
    url: str | None = None
    id: int | None = None
    active: bool = False
