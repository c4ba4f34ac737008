"""
Meta description and social preview image derivation.

The description is sampled from the first blocks of the converted content;
the image comes from a subject side table keyed by the first alias segment.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..core.nodes import ContentNode, nested_nodes

SAMPLE_BLOCKS = 10
MIN_LENGTH = 50
SOFT_CUTOFF = 100
MAX_LENGTH = 135

# Children of these are inline runs and join without a separator.
_INLINE_CONTAINERS = {"p", "h", "a", "li", "td", "th", "spoiler-title"}


def get_meta_description(content: Sequence[ContentNode]) -> str | None:
    """Derive a meta description from the first content blocks.

    Text shorter than MIN_LENGTH yields None. Longer text is cut at the
    first space after SOFT_CUTOFF characters (at most MAX_LENGTH) and gets
    a trailing " …" when something was cut off.
    """
    text = " ".join(_node_text(node) for node in content[:SAMPLE_BLOCKS])
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) < MIN_LENGTH:
        return None

    space = text.find(" ", SOFT_CUTOFF)
    cutoff = min(space if space != -1 else len(text), MAX_LENGTH)
    description = text[:cutoff].rstrip()
    if len(text) > cutoff:
        description += " …"
    return description


def _node_text(node: ContentNode) -> str:
    if node.text is not None:
        return node.text if node.type == "text" else ""
    parts: list[str] = []
    for value in node.attrs.values():
        parts.extend(_node_text(item) for item in nested_nodes(value))
    separator = "" if node.type in _INLINE_CONTAINERS else " "
    parts.append(separator.join(_node_text(child) for child in node.children))
    return " ".join(part for part in parts if part)


class MetaImageTable:
    """Side table from subject to preview image.

    Attributes:
        base_url: URL the image file names are joined onto
        images: Subject (first alias segment) to file name; "default" is
            used for subjects not in the table
    """

    def __init__(self, base_url: str, images: dict[str, str]):
        self.base_url = base_url.rstrip("/") + "/"
        self.images = dict(images)

    async def lookup(self, alias: str | None) -> str | None:
        if not alias:
            return None
        subject = alias.strip("/").split("/", 1)[0]
        filename = self.images.get(subject) or self.images.get("default")
        if not filename:
            return None
        return f"{self.base_url}{filename}"
