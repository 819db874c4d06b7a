"""Intermediate document → HTML.

``render_fragment`` produces an embeddable block (no <html>/<body>);
``render_document`` wraps it into a standalone file.
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from hamster_html.docs.model import IntermediateDocument, IntermediatePage, IntermediateText, TextDir

from .css import css_font_size, css_px_or_percent, escape_html, format_number

logger = logging.getLogger(__name__)

DOCUMENT_CLASS = "hamster-note-document"
PAGE_CLASS = "hamster-note-page"
TEXT_CLASS = "hamster-note-text"
THUMBNAIL_SCALE = 0.3

FRAGMENT_STYLE = (
    " .hamster-note-document { position: relative; display: block; contain: layout style size; }"
    " .hamster-note-document .hamster-note-page { position: relative; overflow: hidden;"
    " background-repeat: no-repeat; background-position: top center; background-size: contain; }"
    " .hamster-note-document .hamster-note-text { position: absolute; white-space: pre;"
    " transform-origin: 0 0; } "
)


class HtmlFile(io.BytesIO):
    """In-memory HTML file carrying a file name and media type."""

    def __init__(self, content: bytes, name: str, content_type: str = "text/html") -> None:
        if not name:
            raise ValueError("HtmlFile needs a non-empty name")
        super().__init__(content)
        self.name = name
        self.content_type = content_type


FileFactory = Callable[[bytes, str], HtmlFile]


def direction_of(t: IntermediateText) -> str:
    return "rtl" if t.dir == TextDir.RTL else "ltr"


def writing_mode_of(t: IntermediateText) -> str:
    return "vertical-rl" if t.vertical or t.dir == TextDir.TTB else "horizontal-tb"


def transform_of(t: IntermediateText) -> str:
    parts: List[str] = []
    if t.rotate:
        parts.append(f"rotate({format_number(t.rotate)}deg)")
    if t.skew:
        parts.append(f"skewX({format_number(t.skew)}deg)")
    return " ".join(parts)


def render_text_span(t: IntermediateText) -> str:
    color = f"color:{t.color};" if t.color and t.color != "transparent" else ""
    family = f"font-family:{t.font_family};" if t.font_family else ""
    weight = f"font-weight:{format_number(t.font_weight or 400)};"
    font_style = "font-style:italic;" if t.italic else "font-style:normal;"
    transform = transform_of(t)
    transform_decl = f"transform:{transform};" if transform else ""
    style = (
        f"left:{css_px_or_percent(t.x)};top:{css_px_or_percent(t.y)};"
        f"width:{css_px_or_percent(t.width)};height:{css_px_or_percent(t.height)};"
        f"font-size:{css_font_size(t.font_size)};line-height:{css_font_size(t.line_height)};"
        f"{weight}{font_style}{family}{color}"
        f"direction:{direction_of(t)};writing-mode:{writing_mode_of(t)};{transform_decl}"
    )
    return (
        f'<span class="{TEXT_CLASS}" id="{escape_html(t.id)}" style="{style}">'
        f"{escape_html(t.content)}</span>"
    )


def page_thumbnail(page: IntermediatePage, scale: float = THUMBNAIL_SCALE) -> Optional[str]:
    """Thumbnail URL for a page, or None when it is missing or cannot be produced."""
    try:
        return page.get_thumbnail(scale)
    except Exception as exc:
        logger.warning("Thumbnail for page %s unavailable: %s", page.id, exc)
        return None


def render_page_div(page: IntermediatePage, thumbnail_scale: float = THUMBNAIL_SCALE) -> str:
    texts = "".join(render_text_span(t) for t in page.texts)
    thumb = page_thumbnail(page, thumbnail_scale)
    bg = f"background-image:url('{thumb}');" if thumb else ""
    return (
        f'<div class="{PAGE_CLASS}" id="{escape_html(page.id)}" '
        f'style="width:{css_px_or_percent(page.width)};height:{css_px_or_percent(page.height)};{bg}">'
        f"{texts}</div>"
    )


def render_page_placeholder(page: IntermediatePage, initial_scale: float = 1) -> str:
    """Empty, correctly sized page block to be filled in when the page scrolls into view."""
    width = format_number(page.width * initial_scale)
    height = format_number(page.height * initial_scale)
    return (
        f'<div class="{PAGE_CLASS}" id="{escape_html(page.id)}" '
        f'style="height: {height}px; width: {width}px"></div>'
    )


class RenderViews(str, Enum):
    TEXT = "text"
    THUMBNAIL = "thumbnail"


def render_scaled_page(
    page: IntermediatePage,
    scale: float = 1,
    views: Iterable[RenderViews] = (RenderViews.TEXT, RenderViews.THUMBNAIL),
) -> str:
    """Render one page as a self-contained block, every declaration inline.

    Geometry is multiplied by ``scale``. ``views`` selects the thumbnail
    background and/or the text layer.
    """
    views = set(views)
    decls = [
        "position:relative",
        "overflow:hidden",
        f"width:{format_number(page.width * scale)}px",
        f"height:{format_number(page.height * scale)}px",
    ]
    if RenderViews.THUMBNAIL in views:
        thumb = page_thumbnail(page)
        if thumb:
            decls += [
                f"background-image:url('{thumb}')",
                "background-repeat:no-repeat",
                "background-position:top center",
                "background-size:contain",
            ]
    layer = ""
    if RenderViews.TEXT in views:
        spans = []
        for t in page.get_texts():
            style = [
                "position:absolute",
                f"left:{css_px_or_percent(t.x * scale)}",
                f"top:{css_px_or_percent(t.y * scale)}",
                f"width:{css_px_or_percent(t.width * scale)}",
                f"height:{css_px_or_percent(t.height * scale)}",
                f"font-size:{css_font_size(t.font_size * scale)}",
                f"line-height:{css_font_size(t.line_height * scale)}",
                f"font-weight:{format_number(t.font_weight or 400)}",
                f"font-style:{'italic' if t.italic else 'normal'}",
            ]
            if t.font_family:
                style.append(f"font-family:{t.font_family}")
            if t.color and t.color != "transparent":
                style.append(f"color:{t.color}")
            style += [
                f"direction:{direction_of(t)}",
                f"writing-mode:{writing_mode_of(t)}",
                "white-space:pre",
                "transform-origin:0 0",
            ]
            transform = transform_of(t)
            if transform:
                style.append(f"transform:{transform}")
            spans.append(
                f'<span class="{TEXT_CLASS}" id="{escape_html(t.id)}" style="{";".join(style)}">'
                f"{escape_html(t.content)}</span>"
            )
        layer = (
            '<div style="position:absolute;top:0;left:0;width:100%;height:100%">'
            f"{''.join(spans)}</div>"
        )
    return (
        f'<div class="{PAGE_CLASS}" id="{escape_html(page.id)}" style="{";".join(decls)}">'
        f"{layer}</div>"
    )


def render_fragment(document: IntermediateDocument, thumbnail_scale: float = THUMBNAIL_SCALE) -> str:
    pages = sorted(document.pages, key=lambda p: p.number)
    body = "".join(render_page_div(p, thumbnail_scale) for p in pages)
    logger.debug("Rendered %d page(s) of document %s", len(pages), document.id)
    return f'<div class="{DOCUMENT_CLASS}"><style>{FRAGMENT_STYLE}</style>{body}</div>'


def wrap_standalone(fragment: str, title: str) -> str:
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"/>'
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>'
        f"<title>{escape_html(title)}</title></head><body>{fragment}</body></html>"
    )


def render_document(
    document: IntermediateDocument,
    file_factory: FileFactory = HtmlFile,
    thumbnail_scale: float = THUMBNAIL_SCALE,
) -> Union[HtmlFile, bytes]:
    """Render a standalone HTML file named after the document title.

    Returns whatever ``file_factory`` builds (an :class:`HtmlFile` by default);
    if the factory cannot build one, the encoded bytes are returned instead.
    """
    title = document.title or "document"
    full_html = wrap_standalone(render_fragment(document, thumbnail_scale), title)
    data = full_html.encode("utf-8")
    try:
        return file_factory(data, f"{title}.html")
    except (TypeError, ValueError, OSError) as exc:
        logger.info("Could not build a named HTML file (%s), returning raw bytes", exc)
        return data


__all__ = [
    "HtmlFile",
    "FRAGMENT_STYLE",
    "render_text_span",
    "render_page_div",
    "render_page_placeholder",
    "RenderViews",
    "render_scaled_page",
    "render_fragment",
    "render_document",
]
