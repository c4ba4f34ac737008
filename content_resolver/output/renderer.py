"""
HTML preview of page view models.

Each page kind has its own Jinja2 template under `templates/`; all of them
extend `base.html` and render content trees through the macros in
`content.html`. Templates receive the camelCase JSON shape of the page.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.view_models import PageViewModel

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def template_name(kind: str) -> str:
    """Template file for a page kind.

    Examples:
        >>> template_name("single-entity")
        'single-entity.html'
        >>> template_name("user/profile")
        'user-profile.html'
    """
    return f"{kind.replace('/', '-')}.html"


def render_page(page: PageViewModel) -> str:
    """Render a page view model to a standalone HTML document."""
    template = _environment().get_template(template_name(page.kind))
    return template.render(page=page.to_dict())


def write_page(page: PageViewModel, output_path: Path) -> None:
    """Render a page view model and write it to disk.

    Args:
        page: The page to render
        output_path: Path where the HTML file will be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_page(page), encoding="utf-8")
