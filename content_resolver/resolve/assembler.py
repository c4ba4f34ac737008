"""
Page assembly: from an alias to a page view model.

`PageResolver` fetches the node behind an alias, classifies it, follows
redirect branches (bounded by a `ResolutionTrail`) and assembles a view
model for terminal branches. Not-found outcomes become 404 error pages;
`UpstreamError` from the client propagates unchanged.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Sequence, assert_never, cast

from ..config import ResolverConfig
from ..convert import (
    applet_embed,
    convert_state,
    create_exercise,
    create_exercise_group,
    create_license_data,
    video_embed,
    with_embed,
)
from ..core.nodes import ContentNode
from ..core.parse import parse_node
from ..core.types import (
    Applet,
    Article,
    CoursePage,
    CoursePageLink,
    Event,
    Exercise,
    ExerciseGroup,
    GroupedExercise,
    Instance,
    Page,
    ResolvedNode,
    Revision,
    TaxonomyTerm,
    User,
    Video,
)
from ..core.view_models import (
    CourseData,
    CoursePageEntry,
    EntityData,
    ErrorPage,
    MetaData,
    PageViewModel,
    RedirectPage,
    SchemaData,
    SingleEntityPage,
    TaxonomyPage,
)
from ..derive import (
    MetaImageTable,
    build_taxonomy_data,
    create_breadcrumbs,
    create_horizon,
    create_navigation,
    create_title,
    entity_meta_description,
    get_meta_description,
)
from ..errors import UnknownEntityType
from ..fetch.client import ContentSource
from ..utils.logging import get_logger, log_event
from .classifier import classify
from .links import enrich_links
from .redirects import REDIRECT_LOOP_MESSAGE, Follow, RedirectNode, ResolutionTrail, resolve_redirect
from .revision import build_revision_page
from .user import build_user_page

NOT_A_REVISION_MESSAGE = "not a revision"
USER_NOT_FOUND_MESSAGE = "user not found"
UNKNOWN_TYPE_MESSAGE = "unknown content type"

ARTICLE_SCHEMA = SchemaData(
    wrap_with_item_type="http://schema.org/Article",
    use_article_tag=True,
    set_content_as_section=True,
)
VIDEO_SCHEMA = SchemaData(wrap_with_item_type="http://schema.org/VideoObject")

FOLDER_TERM_TYPES = ("topicFolder", "curriculumTopicFolder")

_ID_ALIAS = re.compile(r"^/\d+$")
_SPECIAL_URL_CHARS = re.compile(r"[^A-Za-z0-9\-._~/]")

SingleEntityNode = Article | Page | CoursePage | Video | Applet | Event | Exercise | GroupedExercise | ExerciseGroup


class PageResolver:
    """Resolve aliases, revision ids and user paths to page view models.

    Attributes:
        client: Source of raw `uuid` payloads (usually a GraphQLClient)
        cfg: Resolver settings
        meta_images: Subject to preview image table
    """

    def __init__(
        self,
        client: ContentSource,
        cfg: ResolverConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.cfg = cfg or ResolverConfig()
        self.logger = logger or get_logger("resolve")
        self.meta_images = MetaImageTable(self.cfg.meta_image_base_url, self.cfg.meta_images)

    async def resolve_page(self, alias: str, instance: Instance | str) -> PageViewModel:
        trail = ResolutionTrail(max_depth=self.cfg.max_redirect_depth)
        page = await self._resolve(alias, Instance(instance), trail)
        log_event(
            self.logger,
            "Resolved page",
            level=logging.DEBUG,
            event="page_resolved",
            alias=alias,
            kind=page.kind,
        )
        return page

    async def resolve_revision(self, revision_id: int, instance: Instance | str) -> PageViewModel:
        raw = await self.client.fetch_revision(revision_id)
        node = self._parse(raw, lookup=str(revision_id))
        if not isinstance(node, Revision):
            return ErrorPage.not_found(NOT_A_REVISION_MESSAGE)
        return build_revision_page(node, Instance(instance))

    async def resolve_user(self, path: str, instance: Instance | str) -> PageViewModel:
        instance = Instance(instance)
        raw = await self.client.fetch_user(path, instance.value)
        node = self._parse(raw, lookup=path)
        if not isinstance(node, User):
            return ErrorPage.not_found(USER_NOT_FOUND_MESSAGE)
        return build_user_page(node, instance)

    async def _resolve(self, alias: str, instance: Instance, trail: ResolutionTrail) -> PageViewModel:
        if trail.blocks(alias):
            log_event(
                self.logger,
                "Redirect loop",
                level=logging.WARNING,
                event="redirect_loop",
                alias=alias,
                trail=list(trail.visited),
            )
            return ErrorPage.not_found(REDIRECT_LOOP_MESSAGE)
        trail = trail.visit(alias)

        raw = await self.client.fetch_by_alias(alias, instance.value)
        node = self._parse(raw, lookup=alias)
        if node is None:
            return ErrorPage.not_found() if raw is None else ErrorPage.not_found(UNKNOWN_TYPE_MESSAGE)

        branch = classify(node)
        if branch.is_redirect:
            outcome = resolve_redirect(cast(RedirectNode, node))
            if isinstance(outcome, Follow):
                return await self._resolve(outcome.alias, instance, trail)
            return outcome

        if self._canonical_redirect(alias, node, trail):
            return RedirectPage(target=cast(str, node.alias))

        cache_key = f"/{instance.value}{alias}"
        if isinstance(node, TaxonomyTerm):
            return await self._taxonomy_page(node, instance, cache_key)
        return await self._single_entity_page(cast(SingleEntityNode, node), instance, cache_key)

    def _parse(self, raw: dict[str, Any] | None, lookup: str) -> ResolvedNode | None:
        if raw is None:
            log_event(self.logger, "No entity found", event="not_found", lookup=lookup)
            return None
        try:
            return parse_node(raw)
        except UnknownEntityType as exc:
            log_event(
                self.logger,
                "Unknown entity type",
                level=logging.WARNING,
                event="unknown_entity_type",
                lookup=lookup,
                typename=exc.typename,
            )
            return None

    def _canonical_redirect(self, alias: str, node: ResolvedNode, trail: ResolutionTrail) -> bool:
        return (
            self.cfg.canonical_id_redirects
            and trail.is_top_level
            and bool(_ID_ALIAS.match(alias))
            and bool(node.alias)
            and node.alias != alias
        )

    async def _taxonomy_page(self, term: TaxonomyTerm, instance: Instance, cache_key: str) -> TaxonomyPage:
        data = build_taxonomy_data(term)
        content_type = "topic-folder" if term.term_type in FOLDER_TERM_TYPES else "topic"
        meta_image, _ = await self._lookup_extras(term.alias, ())
        return TaxonomyPage(
            taxonomy_data=data,
            meta_data=MetaData(
                title=create_title(term, instance),
                content_type=content_type,
                meta_image=meta_image,
                meta_description=get_meta_description(data.description)
                or entity_meta_description(instance, content_type),
            ),
            cache_key=cache_key,
            breadcrumbs_data=create_breadcrumbs(term),
            secondary_navigation_data=create_navigation(term),
        )

    async def _single_entity_page(
        self, node: SingleEntityNode, instance: Instance, cache_key: str
    ) -> SingleEntityPage:
        entity_data, content_type, authored = _entity_data(node)
        description = (
            authored
            or get_meta_description(_describable(node, entity_data.content))
            or entity_meta_description(instance, content_type)
        )
        meta_image, pretty_links = await self._lookup_extras(node.alias, entity_data.content)

        navigation = create_navigation(node) if isinstance(node, Page) else None
        if isinstance(node, Event) or navigation is not None:
            breadcrumbs = None
        else:
            breadcrumbs = create_breadcrumbs(node)
        horizon = None
        if instance.value == self.cfg.horizon_instance:
            horizon = create_horizon(cache_key, self.cfg.horizon_count)

        return SingleEntityPage(
            entity_data=entity_data,
            meta_data=MetaData(
                title=create_title(node, instance),
                content_type=content_type,
                meta_image=meta_image,
                meta_description=description,
            ),
            cache_key=cache_key,
            newsletter_popup=isinstance(node, Page),
            breadcrumbs_data=breadcrumbs,
            secondary_navigation_data=navigation,
            horizon_data=horizon,
            pretty_links=pretty_links,
        )

    async def _lookup_extras(
        self, alias: str | None, content: Sequence[ContentNode]
    ) -> tuple[str | None, dict[str, str] | None]:
        """Meta image and link enrichment, concurrently; failures degrade to None."""
        links = enrich_links(self.client, content) if self.cfg.enrich_links else _nothing()
        image_result, links_result = await asyncio.gather(
            self.meta_images.lookup(alias), links, return_exceptions=True
        )
        return (
            self._settled(image_result, "meta_image", alias),
            self._settled(links_result, "link_enrichment", alias),
        )

    def _settled(self, result: Any, step: str, alias: str | None) -> Any:
        if not isinstance(result, BaseException):
            return result
        if not isinstance(result, Exception):
            raise result
        log_event(
            self.logger,
            "Optional lookup failed",
            level=logging.WARNING,
            event=f"{step}_failed",
            alias=alias,
            error=f"{type(result).__name__}: {result}",
        )
        return None


async def _nothing() -> None:
    return None


def _entity_data(node: SingleEntityNode) -> tuple[EntityData, str, str | None]:
    """Entity data, content type and authored meta description of a node."""
    current = node.current_revision
    title = (current.title if current else None) or ""

    if isinstance(node, (Exercise, GroupedExercise)):
        content_type = "text-exercise" if isinstance(node, Exercise) else "groupedexercise"
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=(create_exercise(node),),
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
        )
        return data, content_type, None

    if isinstance(node, ExerciseGroup):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=(create_exercise_group(node),),
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
        )
        return data, "exercisegroup", None

    content = convert_state(current.content if current else None)

    if isinstance(node, Event):
        data = EntityData(id=node.id, typename=node.typename, content=content, trashed=node.trashed)
        return data, "event", None

    if isinstance(node, Page):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=content,
            trashed=node.trashed,
            title=title,
            revision_id=current.id if current else None,
        )
        return data, "page", None

    if isinstance(node, Article):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=content,
            trashed=node.trashed,
            title=title,
            license_data=create_license_data(node.license),
            schema_data=ARTICLE_SCHEMA,
            category_icon="article",
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
        )
        return data, "article", current.meta_description if current else None

    if isinstance(node, Video):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=with_embed(video_embed(node), content),
            trashed=node.trashed,
            title=title,
            license_data=create_license_data(node.license),
            schema_data=VIDEO_SCHEMA,
            category_icon="video",
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
        )
        return data, "video", None

    if isinstance(node, Applet):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=with_embed(applet_embed(node), content),
            trashed=node.trashed,
            title=title,
            license_data=create_license_data(node.license),
            schema_data=VIDEO_SCHEMA,
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
        )
        return data, "applet", current.meta_description if current else None

    if isinstance(node, CoursePage):
        data = EntityData(
            id=node.id,
            typename=node.typename,
            content=content,
            trashed=node.trashed,
            title=title,
            license_data=create_license_data(node.license),
            schema_data=ARTICLE_SCHEMA,
            category_icon="article",
            invite_to_edit=True,
            unrevised_revisions=node.unrevised_revisions,
            course_data=build_course_data(node),
        )
        return data, "course-page", None

    assert_never(node)


def _describable(node: SingleEntityNode, content: tuple[ContentNode, ...]) -> tuple[ContentNode, ...]:
    """Content the meta description is sampled from, without media embeds."""
    if isinstance(node, (Video, Applet)):
        return content[1:]
    return content


def build_course_data(page: CoursePage) -> CourseData:
    """Sibling page list of a course page.

    Pages without an alias or title, and trashed pages or revisions, are
    left out. `position` is the 1-based index of `page` in what remains;
    `next_page_url` is the following entry, if any.
    """
    visible = [
        link
        for link in page.course.pages
        if link.alias and not link.trashed and not link.revision_trashed and link.title
    ]
    position: int | None = None
    entries = []
    for index, link in enumerate(visible, start=1):
        active = link.id == page.id
        if active:
            position = index
        entries.append(CoursePageEntry(title=link.title or "", url=course_page_url(link), active=active))

    next_page_url = None
    if position is not None and position < len(entries):
        next_page_url = entries[position].url

    return CourseData(
        id=page.course.id,
        title=page.course.title or "",
        pages=tuple(entries),
        position=position,
        next_page_url=next_page_url,
    )


def course_page_url(link: CoursePageLink) -> str:
    """The page alias, or `/{id}` when the alias has characters unsafe in a URL."""
    if link.alias and not _SPECIAL_URL_CHARS.search(link.alias):
        return link.alias
    return f"/{link.id}"
