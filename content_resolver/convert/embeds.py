"""Embed descriptors placed before the free-text content of media entities."""

from __future__ import annotations

from ..core.nodes import ContentNode
from ..core.types import Applet, Video
from .license import create_inline_license


def video_embed(video: Video) -> ContentNode:
    url = video.current_revision.url if video.current_revision else None
    return ContentNode(
        type="video",
        attrs={"src": url or "", "license": create_inline_license(video.license)},
    )


def applet_embed(applet: Applet) -> ContentNode:
    url = applet.current_revision.url if applet.current_revision else None
    return ContentNode(type="geogebra", attrs={"id": url or ""})


def with_embed(embed: ContentNode, content: tuple[ContentNode, ...]) -> tuple[ContentNode, ...]:
    """The embed always renders before the entity's own content."""
    return (embed, *content)
