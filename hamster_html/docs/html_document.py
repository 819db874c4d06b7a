from __future__ import annotations

import base64
import binascii
import io
import logging
import os
from typing import Iterable, List, Optional, Tuple

from PIL import Image

from hamster_html.render.html_writer import RenderViews, render_scaled_page

from .model import IntermediateDocument, IntermediateOutline, IntermediatePage

logger = logging.getLogger(__name__)

DEFAULT_COVER_SIZE = (800, 1000)


class HtmlPage:
    """Read-only view over one intermediate page."""

    def __init__(self, intermediate_page: IntermediatePage) -> None:
        self.intermediate_page = intermediate_page

    def get_number(self) -> int:
        return self.intermediate_page.number

    def get_size(self, scale: float = 1.0) -> Tuple[float, float]:
        return (self.intermediate_page.width * scale, self.intermediate_page.height * scale)

    def get_pure_text(self) -> str:
        return "\n".join(t.content for t in self.intermediate_page.texts)

    def render(
        self,
        scale: float = 1.0,
        views: Iterable[RenderViews] = (RenderViews.TEXT, RenderViews.THUMBNAIL),
    ) -> str:
        return render_scaled_page(self.intermediate_page, scale=scale, views=views)


def _decode_data_url(url: str) -> Optional[bytes]:
    header, sep, payload = url.partition(",")
    if not sep:
        return None
    try:
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=True)
        return payload.encode("latin-1")
    except (binascii.Error, ValueError, UnicodeEncodeError):
        return None


def _open_cover(url: str) -> Optional[Image.Image]:
    try:
        if url.startswith("data:"):
            raw = _decode_data_url(url)
            if raw is None:
                return None
            img = Image.open(io.BytesIO(raw))
        elif os.path.isfile(url):
            img = Image.open(url)
        else:
            return None
        img.load()
        return img
    except OSError as exc:
        logger.warning("Could not load cover image: %s", exc)
        return None


class HtmlDocument:
    """Wrapper over an IntermediateDocument with lazy page access."""

    def __init__(self, intermediate_document: IntermediateDocument) -> None:
        self.intermediate_document = intermediate_document

    def get_pages(self) -> List[HtmlPage]:
        return [HtmlPage(p) for p in self.intermediate_document.pages]

    def get_page(self, page_number: int) -> Optional[HtmlPage]:
        page = self.intermediate_document.get_page_by_page_number(page_number)
        return HtmlPage(page) if page is not None else None

    def get_outline(self) -> Optional[IntermediateOutline]:
        # HTML documents rarely carry an outline; expose the first entry if any.
        outline = self.intermediate_document.get_outline()
        return outline[0] if outline else None

    def get_cover(self) -> Image.Image:
        """First-page thumbnail as an image, or a blank white page-sized canvas."""
        url = self.intermediate_document.get_cover()
        if url:
            img = _open_cover(url)
            if img is not None:
                return img
        size = self.intermediate_document.get_page_size_by_page_number(1)
        if size is not None:
            dims = (max(1, int(size.x)), max(1, int(size.y)))
        else:
            dims = DEFAULT_COVER_SIZE
        return Image.new("RGB", dims, (255, 255, 255))

    def get_title(self) -> str:
        return self.intermediate_document.title

    def get_id(self) -> str:
        return self.intermediate_document.id

    def get_intermediate_document(self) -> IntermediateDocument:
        return self.intermediate_document
