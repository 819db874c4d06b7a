from __future__ import annotations

import logging
import os
import time
from typing import Optional, Union

from hamster_html.config import HtmlSettings
from hamster_html.html.reader import (
    ImportResult,
    build_document,
    collect_texts_from_html,
    fallback_plain_text,
)
from hamster_html.html.tree import HtmlTreeParser, parse_html as soup_parser
from hamster_html.render.html_writer import FileFactory, HtmlFile, render_document, render_fragment

from .html_document import HtmlDocument
from .model import IntermediateDocument

logger = logging.getLogger(__name__)

DocumentLike = Union[IntermediateDocument, HtmlDocument]


def _read_bytes(source) -> Optional[bytes]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "rb") as f:
                return f.read()
        except (OSError, ValueError) as exc:
            logger.warning("Could not read HTML file %s: %s", source, exc)
            return None
    if hasattr(source, "read"):
        try:
            data = source.read()
        except (OSError, ValueError) as exc:
            logger.warning("Could not read HTML stream: %s", exc)
            return None
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
    logger.warning("Unsupported HTML input of type %s", type(source).__name__)
    return None


def _decode_utf8(data: bytes) -> Optional[str]:
    try:
        # utf-8-sig drops a leading byte order mark
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        logger.warning("Input is not valid UTF-8: %s", exc)
        return None


def new_document_id() -> str:
    return f"html-{int(time.time() * 1000)}"


def encode(
    source,
    parse_html: Optional[HtmlTreeParser] = soup_parser,
    settings: Optional[HtmlSettings] = None,
) -> Optional[HtmlDocument]:
    """Build an HtmlDocument from UTF-8 HTML.

    1) read ``source`` (bytes, path or binary file object) and decode it
    2) collect text runs from the parsed body, with inline styles resolved
       from ancestors and sizes estimated heuristically
    3) if there is no parser, parsing fails or nothing is found, split the
       raw input by line instead
    4) wrap the runs into a single lazily loaded page

    Pass ``parse_html=None`` to force the plain-text path. Returns None when
    the input cannot be read or is not valid UTF-8.
    """
    settings = settings or HtmlSettings()
    data = _read_bytes(source)
    if data is None:
        return None
    html = _decode_utf8(data)
    if html is None:
        return None

    document_id = new_document_id()
    result: ImportResult = collect_texts_from_html(
        html,
        document_id,
        parse_html,
        default_font_size=settings.default_font_size,
        default_line_height=settings.default_line_height,
        untitled=settings.untitled_title,
    )
    title = result.title or settings.untitled_title
    if result.needs_fallback:
        logger.info("Using plain-text fallback for %s: %s", document_id, result.reason)
        result = fallback_plain_text(
            html,
            document_id,
            font_size=settings.default_font_size,
            line_height_ratio=settings.default_line_height,
        )

    intermediate = build_document(
        document_id,
        title,
        result.texts,
        result.page_height,
        page_width=settings.page_width,
    )
    return HtmlDocument(intermediate)


def _unwrap(document: DocumentLike) -> IntermediateDocument:
    if isinstance(document, HtmlDocument):
        return document.get_intermediate_document()
    return document


def decode_to_html(document: DocumentLike, settings: Optional[HtmlSettings] = None) -> str:
    """Render the document as an embeddable fragment (no <html>/<body>)."""
    settings = settings or HtmlSettings()
    return render_fragment(_unwrap(document), thumbnail_scale=settings.thumbnail_scale)


def decode(
    document: DocumentLike,
    file_factory: FileFactory = HtmlFile,
    settings: Optional[HtmlSettings] = None,
) -> Union[HtmlFile, bytes]:
    """Render a standalone HTML file; raw bytes if no named file can be built."""
    settings = settings or HtmlSettings()
    return render_document(
        _unwrap(document), file_factory=file_factory, thumbnail_scale=settings.thumbnail_scale
    )
