from __future__ import annotations

from typing import Any

from ..core.types import License
from ..core.view_models import LicenseData


def create_inline_license(license: License | None) -> dict[str, Any] | None:
    """Short license summary shown next to embedded media and solutions."""
    if license is None:
        return None
    return {
        "id": license.id,
        "title": license.title,
        "url": license.url,
        "shortTitle": license.short_title,
    }


def create_license_data(license: License | None) -> LicenseData | None:
    if license is None:
        return None
    return LicenseData(id=license.id, url=license.url, title=license.title, default=license.default)
