"""Per-tag accessors for optional revision attributes.

Each accessor returns None when the revision's tag does not carry the
attribute, instead of reading whatever happens to be on the object.
"""

from __future__ import annotations

from .types import REVISION_FIELDS, EntityRevision, Revision


def _has(revision: Revision, name: str) -> bool:
    return revision.typename in REVISION_FIELDS[name]


def revision_title(revision: Revision) -> str | None:
    return revision.title if _has(revision, "title") else None


def revision_meta_title(revision: Revision) -> str | None:
    return revision.meta_title if _has(revision, "meta_title") else None


def revision_meta_description(revision: Revision) -> str | None:
    return revision.meta_description if _has(revision, "meta_description") else None


def revision_url(revision: Revision) -> str | None:
    return revision.url if _has(revision, "url") else None


def revision_changes(revision: Revision) -> str | None:
    return revision.changes if _has(revision, "changes") else None


def current_title(revision: Revision, current: EntityRevision | None) -> str | None:
    if current is None or not _has(revision, "title"):
        return None
    return current.title


def current_meta_title(revision: Revision, current: EntityRevision | None) -> str | None:
    if current is None or not _has(revision, "meta_title"):
        return None
    return current.meta_title


def current_meta_description(revision: Revision, current: EntityRevision | None) -> str | None:
    if current is None or not _has(revision, "meta_description"):
        return None
    return current.meta_description


def current_url(revision: Revision, current: EntityRevision | None) -> str | None:
    if current is None or not _has(revision, "url"):
        return None
    return current.url
