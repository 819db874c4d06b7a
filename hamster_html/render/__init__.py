"""HTML writing for intermediate documents."""

from .html_writer import (
    HtmlFile,
    RenderViews,
    render_document,
    render_fragment,
    render_page_placeholder,
    render_scaled_page,
)

__all__ = [
    "HtmlFile",
    "RenderViews",
    "render_document",
    "render_fragment",
    "render_page_placeholder",
    "render_scaled_page",
]
