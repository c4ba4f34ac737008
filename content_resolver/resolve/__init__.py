"""
Resolution pipeline.

Classification, redirect handling with a bounded trail, revision and user
pages, and the `PageResolver` that ties them to a content source.
"""

from .assembler import PageResolver, build_course_data
from .classifier import Branch, classify, classify_typename
from .links import collect_id_links, enrich_links
from .redirects import Follow, ResolutionTrail, resolve_redirect
from .revision import build_revision_page
from .user import build_user_page

__all__ = [
    "PageResolver",
    "build_course_data",
    "Branch",
    "classify",
    "classify_typename",
    "collect_id_links",
    "enrich_links",
    "Follow",
    "ResolutionTrail",
    "resolve_redirect",
    "build_revision_page",
    "build_user_page",
]
