"""
Redirect branches.

Revisions and users become redirect pages; courses and solutions point at
another alias, which the assembler resolves in turn. The trail of aliases
visited during one top-level call bounds that recursion.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union, assert_never

from ..core.types import Course, Revision, Solution, User
from ..core.view_models import ErrorPage, RedirectPage

REDIRECT_LOOP_MESSAGE = "redirect loop"

RedirectNode = Union[Revision, Course, Solution, User]


@dataclass(frozen=True)
class Follow:
    """Resolve `alias` in place of the current node."""

    alias: str


RedirectOutcome = Union[RedirectPage, ErrorPage, Follow]


@dataclass(frozen=True)
class ResolutionTrail:
    """Aliases visited by one top-level resolve call, in order."""

    max_depth: int
    visited: tuple[str, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.visited)

    @property
    def is_top_level(self) -> bool:
        return self.depth <= 1

    def blocks(self, alias: str) -> bool:
        """True when visiting `alias` would revisit it or go too deep."""
        return alias in self.visited or self.depth >= self.max_depth

    def visit(self, alias: str) -> ResolutionTrail:
        return replace(self, visited=(*self.visited, alias))


def compare_route(revision_id: int) -> str:
    return f"entity/repository/compare/0/{revision_id}"


def profile_route(user: User) -> str:
    return f"/user/{user.id}/{user.username}"


def resolve_redirect(node: RedirectNode) -> RedirectOutcome:
    if isinstance(node, Revision):
        return RedirectPage(target=compare_route(node.id))
    if isinstance(node, User):
        return RedirectPage(target=profile_route(node))
    if isinstance(node, Course):
        first_page = node.pages[0].alias if node.pages else None
        if not first_page:
            return ErrorPage.not_found()
        return Follow(alias=first_page)
    if isinstance(node, Solution):
        if not node.exercise_id:
            return ErrorPage.not_found()
        return Follow(alias=f"/{node.exercise_id}")
    assert_never(node)
