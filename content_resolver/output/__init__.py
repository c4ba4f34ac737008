from .renderer import render_page, template_name, write_page

__all__ = ["render_page", "template_name", "write_page"]
