from __future__ import annotations

from ..convert import convert_state
from ..core.nodes import ContentNode, text_node
from ..core.types import Instance, User
from ..core.view_models import UserData, UserProfilePage
from ..derive import get_string

# The API marks an unset description with this literal.
NULL_DESCRIPTION = "NULL"


def build_user_page(user: User, instance: Instance | str) -> UserProfilePage:
    return UserProfilePage(
        user_data=UserData(
            id=user.id,
            username=user.username,
            description=_description(user.description, instance),
            last_login=user.last_login,
            date=user.date,
            active_reviewer=user.active_reviewer,
            active_author=user.active_author,
            active_donor=user.active_donor,
        )
    )


def _description(raw: str | None, instance: Instance | str) -> tuple[ContentNode, ...] | None:
    if not raw:
        return None
    if raw == NULL_DESCRIPTION:
        placeholder = get_string(instance, "user_description_placeholder")
        return (ContentNode(type="p", children=(text_node(placeholder),)),)
    return convert_state(raw)
