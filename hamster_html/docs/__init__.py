"""Intermediate document layer.

Exposes:
- Data model: IntermediateDocument, IntermediatePage, IntermediateText, IntermediatePageMap
- Wrappers: HtmlDocument, HtmlPage
- Facade: encode (HTML -> document), decode / decode_to_html (document -> HTML)
"""

from .model import (
    IntermediateDocument,
    IntermediateOutline,
    IntermediatePage,
    IntermediatePageMap,
    IntermediateText,
    PageInfo,
    PageSize,
    TextDir,
)
from .html_document import HtmlDocument, HtmlPage
from .pipeline import decode, decode_to_html, encode

__all__ = [
    "IntermediateDocument",
    "IntermediateOutline",
    "IntermediatePage",
    "IntermediatePageMap",
    "IntermediateText",
    "PageInfo",
    "PageSize",
    "TextDir",
    "HtmlDocument",
    "HtmlPage",
    "encode",
    "decode",
    "decode_to_html",
]
