"""HTML → intermediate document.

The structural reader walks the parsed body and turns every non-empty text
node into one positioned run, stacking runs vertically. When no parser is
available, parsing fails, or nothing is collected, the caller switches to
:func:`fallback_plain_text`, which splits the raw markup by line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from hamster_html.docs.model import (
    IntermediateDocument,
    IntermediatePage,
    IntermediatePageMap,
    IntermediateText,
    PageInfo,
    PageSize,
    TextDir,
)

from .direction import detect_dir
from .metrics import estimate_text_metrics, js_round
from .style import collect_ancestor_inline_style
from .tree import HtmlTreeParser, collapse_whitespace, document_title, iter_text_nodes, text_root

logger = logging.getLogger(__name__)

UNTITLED = "Untitled HTML"
DEFAULT_FONT_SIZE = 16
DEFAULT_LINE_HEIGHT = 1.2
PAGE_WIDTH = 800

_LINES_RE = re.compile(r"\n+")


@dataclass
class ImportResult:
    title: str = UNTITLED
    texts: List[IntermediateText] = field(default_factory=list)
    page_height: int = 1
    needs_fallback: bool = False
    reason: Optional[str] = None

    @classmethod
    def fallback(cls, reason: str, title: str = UNTITLED) -> "ImportResult":
        return cls(title=title, needs_fallback=True, reason=reason)


def text_id(document_id: str, index: int) -> str:
    return f"{document_id}-page-1-text-{index}"


def page_height_of(texts: List[IntermediateText]) -> int:
    bottom = max((t.y + t.height for t in texts), default=0)
    return max(1, js_round(bottom))


def collect_texts_from_html(
    html: str,
    document_id: str,
    parse_html: Optional[HtmlTreeParser],
    default_font_size: float = DEFAULT_FONT_SIZE,
    default_line_height: float = DEFAULT_LINE_HEIGHT,
    untitled: str = UNTITLED,
) -> ImportResult:
    """Collect text runs from the body of ``html``.

    Args:
        html: Decoded HTML source.
        document_id: Prefix for run ids.
        parse_html: Structural parser, or None when none is available.
        default_font_size: Font size used when no ancestor sets one.
        default_line_height: Line height multiplier used when no ancestor sets one.
        untitled: Title used when the document declares none.

    Returns:
        An ImportResult; ``needs_fallback`` is set when there is no parser,
        parsing raised, or no text was found.
    """
    if parse_html is None:
        return ImportResult.fallback("no structural HTML parser available", untitled)
    try:
        soup = parse_html(html)
    except Exception as exc:
        logger.warning("HTML parsing failed, using plain-text fallback: %s", exc)
        return ImportResult.fallback(f"parse error: {exc}", untitled)

    title = document_title(soup) or untitled
    texts: List[IntermediateText] = []
    y = 0
    for node in iter_text_nodes(text_root(soup)):
        content = collapse_whitespace(str(node))
        if not content:
            continue
        sty = collect_ancestor_inline_style(node, default_font_size, default_line_height)
        metrics = estimate_text_metrics(content, sty.font_size, sty.line_height)
        texts.append(
            IntermediateText(
                id=text_id(document_id, len(texts)),
                content=content,
                font_size=sty.font_size,
                font_family=sty.font_family,
                font_weight=sty.font_weight,
                italic=sty.italic,
                color=sty.color,
                width=metrics.width,
                height=metrics.height,
                line_height=sty.line_height,
                x=0,
                y=y,
                ascent=metrics.ascent,
                descent=metrics.descent,
                vertical=False,
                dir=detect_dir(content),
                rotate=0,
                skew=0,
                is_eol=True,
            )
        )
        y += metrics.height

    if not texts:
        return ImportResult(title=title, needs_fallback=True, reason="no text nodes found")
    logger.debug("Collected %d text runs from HTML body", len(texts))
    return ImportResult(title=title, texts=texts, page_height=page_height_of(texts))


def fallback_plain_text(
    html: str,
    document_id: str,
    font_size: float = DEFAULT_FONT_SIZE,
    line_height_ratio: float = DEFAULT_LINE_HEIGHT,
) -> ImportResult:
    """Treat the whole input as plain text, one run per non-blank line.

    Markup is not stripped. Blank lines advance the offset by one line height.
    """
    line_height = js_round(font_size * line_height_ratio)
    texts: List[IntermediateText] = []
    y = 0
    for line in _LINES_RE.split(html):
        content = line.strip()
        if not content:
            y += line_height
            continue
        metrics = estimate_text_metrics(content, font_size, line_height)
        texts.append(
            IntermediateText(
                id=text_id(document_id, len(texts)),
                content=content,
                font_size=font_size,
                font_family="",
                font_weight=400,
                italic=False,
                color="#000",
                width=metrics.width,
                height=metrics.height,
                line_height=line_height,
                x=0,
                y=y,
                ascent=metrics.ascent,
                descent=metrics.descent,
                vertical=False,
                dir=TextDir.LTR,
                rotate=0,
                skew=0,
                is_eol=True,
            )
        )
        y += metrics.height
    return ImportResult(texts=texts, page_height=page_height_of(texts))


def build_document(
    document_id: str,
    title: str,
    texts: List[IntermediateText],
    page_height: float,
    page_width: float = PAGE_WIDTH,
) -> IntermediateDocument:
    """Wrap collected runs into a single lazily materialized page."""
    page_id = f"{document_id}-page-1"
    runs = list(texts)

    def load_page() -> IntermediatePage:
        logger.debug("Materializing page %s (%d runs)", page_id, len(runs))
        return IntermediatePage(
            id=page_id,
            number=1,
            width=page_width,
            height=page_height,
            texts=runs,
            thumbnail=None,
        )

    info = PageInfo(
        id=page_id,
        page_number=1,
        size=PageSize(x=page_width, y=page_height),
        get_data=load_page,
    )
    pages_map = IntermediatePageMap.make_by_info_list([info])
    return IntermediateDocument(id=document_id, title=title, pages_map=pages_map)


__all__ = [
    "ImportResult",
    "UNTITLED",
    "collect_texts_from_html",
    "fallback_plain_text",
    "build_document",
]
