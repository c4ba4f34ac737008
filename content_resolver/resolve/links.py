from __future__ import annotations

import re
from typing import Sequence

from ..core.nodes import ContentNode, walk_all
from ..fetch.client import ContentSource

_ID_HREF = re.compile(r"^/(\d+)$")


def collect_id_links(content: Sequence[ContentNode]) -> list[int]:
    """Ids of internal links of the form `/123`, in document order, unique."""
    ids: list[int] = []
    for node in walk_all(list(content)):
        if node.type != "a":
            continue
        match = _ID_HREF.match(str(node.attrs.get("href") or ""))
        if match and int(match.group(1)) not in ids:
            ids.append(int(match.group(1)))
    return ids


async def enrich_links(source: ContentSource, content: Sequence[ContentNode]) -> dict[str, str] | None:
    """Map `/123` hrefs in `content` to the aliases they stand for.

    Returns:
        `{"/123": "/mathe/some-alias"}`, or None when there is nothing to map
    """
    ids = collect_id_links(content)
    if not ids:
        return None
    aliases = await source.fetch_aliases(ids)
    pretty = {f"/{entity_id}": alias for entity_id, alias in aliases.items() if alias != f"/{entity_id}"}
    return pretty or None
