"""
Content adapter.

Turns serialized CMS content into render-ready ContentNode sequences,
with entity-specific wrappers for exercises and embedded media.
"""

from .embeds import applet_embed, video_embed, with_embed
from .exercises import create_exercise, create_exercise_group, create_standalone_exercise
from .license import create_inline_license, create_license_data
from .state import convert_state

__all__ = [
    "applet_embed",
    "video_embed",
    "with_embed",
    "create_exercise",
    "create_exercise_group",
    "create_standalone_exercise",
    "create_inline_license",
    "create_license_data",
    "convert_state",
]
