"""
Page view models produced by the resolution pipeline.

Each page kind is its own frozen dataclass with a class-level `kind`
discriminator; attributes of one kind never appear on another. `to_dict()`
gives the renderer's JSON shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .nodes import BreadcrumbEntry, ContentNode, NavigationEntry
from .serialize import to_json


@dataclass(frozen=True)
class MetaData:
    title: str
    content_type: str
    meta_image: str | None = None
    meta_description: str | None = None


@dataclass(frozen=True)
class ErrorData:
    code: int
    message: str | None = None


@dataclass(frozen=True)
class SchemaData:
    wrap_with_item_type: str
    use_article_tag: bool | None = None
    set_content_as_section: bool | None = None


@dataclass(frozen=True)
class LicenseData:
    id: int
    url: str
    title: str
    default: bool = False


@dataclass(frozen=True)
class CoursePageEntry:
    title: str
    url: str
    active: bool = False


@dataclass(frozen=True)
class CourseData:
    id: int
    title: str
    pages: tuple[CoursePageEntry, ...]
    position: int | None = None
    next_page_url: str | None = None


@dataclass(frozen=True)
class EntityData:
    id: int
    typename: str
    content: tuple[ContentNode, ...]
    trashed: bool | None = None
    title: str | None = None
    revision_id: int | None = None
    license_data: LicenseData | None = None
    schema_data: SchemaData | None = None
    category_icon: str | None = None
    invite_to_edit: bool | None = None
    unrevised_revisions: int | None = None
    course_data: CourseData | None = None


@dataclass(frozen=True)
class HorizonEntry:
    title: str
    text: str
    url: str
    image_url: str


@dataclass(frozen=True)
class TaxonomyLink:
    title: str
    url: str
    id: int


@dataclass(frozen=True)
class TaxonomySubterm:
    id: int
    title: str
    url: str
    articles: tuple[TaxonomyLink, ...] = ()
    exercises: tuple[TaxonomyLink, ...] = ()
    videos: tuple[TaxonomyLink, ...] = ()
    applets: tuple[TaxonomyLink, ...] = ()
    courses: tuple[TaxonomyLink, ...] = ()
    events: tuple[TaxonomyLink, ...] = ()
    folders: tuple[TaxonomyLink, ...] = ()


@dataclass(frozen=True)
class TaxonomyData:
    id: int
    title: str
    type: str
    description: tuple[ContentNode, ...] = ()
    articles: tuple[TaxonomyLink, ...] = ()
    exercises: tuple[TaxonomyLink, ...] = ()
    videos: tuple[TaxonomyLink, ...] = ()
    applets: tuple[TaxonomyLink, ...] = ()
    courses: tuple[TaxonomyLink, ...] = ()
    events: tuple[TaxonomyLink, ...] = ()
    subterms: tuple[TaxonomySubterm, ...] = ()
    exercises_content: tuple[ContentNode, ...] = ()


@dataclass(frozen=True)
class RevisionView:
    id: int | None = None
    title: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    content: tuple[ContentNode, ...] | None = None
    url: str | None = None


@dataclass(frozen=True)
class RevisionUser:
    id: int
    username: str
    active_author: bool = False
    active_donor: bool = False
    active_reviewer: bool = False


@dataclass(frozen=True)
class RevisionData:
    type: str
    repository_id: int
    typename: str
    this_revision: RevisionView
    current_revision: RevisionView
    changes: str | None = None
    user: RevisionUser | None = None
    date: str | None = None


@dataclass(frozen=True)
class UserData:
    id: int
    username: str
    description: tuple[ContentNode, ...] | None = None
    last_login: str | None = None
    date: str | None = None
    active_reviewer: bool = False
    active_author: bool = False
    active_donor: bool = False


class _Page:
    kind: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **to_json(self)}


@dataclass(frozen=True)
class RedirectPage(_Page):
    kind: ClassVar[str] = "redirect"

    target: str


@dataclass(frozen=True)
class ErrorPage(_Page):
    kind: ClassVar[str] = "error"

    error_data: ErrorData

    @classmethod
    def not_found(cls, message: str | None = None) -> ErrorPage:
        return cls(error_data=ErrorData(code=404, message=message))


@dataclass(frozen=True)
class SingleEntityPage(_Page):
    kind: ClassVar[str] = "single-entity"

    entity_data: EntityData
    meta_data: MetaData
    cache_key: str
    newsletter_popup: bool = False
    breadcrumbs_data: tuple[BreadcrumbEntry, ...] | None = None
    secondary_navigation_data: tuple[NavigationEntry, ...] | None = None
    horizon_data: tuple[HorizonEntry, ...] | None = None
    pretty_links: dict[str, str] | None = None


@dataclass(frozen=True)
class TaxonomyPage(_Page):
    kind: ClassVar[str] = "taxonomy"

    taxonomy_data: TaxonomyData
    meta_data: MetaData
    cache_key: str
    newsletter_popup: bool = False
    breadcrumbs_data: tuple[BreadcrumbEntry, ...] | None = None
    secondary_navigation_data: tuple[NavigationEntry, ...] | None = None


@dataclass(frozen=True)
class RevisionPage(_Page):
    kind: ClassVar[str] = "revision"

    revision_data: RevisionData
    meta_data: MetaData
    cache_key: str
    newsletter_popup: bool = False


@dataclass(frozen=True)
class UserProfilePage(_Page):
    kind: ClassVar[str] = "user/profile"

    user_data: UserData
    newsletter_popup: bool = False


PageViewModel = Union[
    RedirectPage,
    ErrorPage,
    SingleEntityPage,
    TaxonomyPage,
    RevisionPage,
    UserProfilePage,
]
