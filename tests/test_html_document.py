import base64
import io

from PIL import Image

from hamster_html import encode
from hamster_html.docs.html_document import HtmlDocument, HtmlPage
from hamster_html.docs.model import (
    IntermediateDocument,
    IntermediateOutline,
    IntermediatePage,
    IntermediatePageMap,
    PageInfo,
    PageSize,
)
from hamster_html.render.html_writer import RenderViews


def _png_data_url(size=(3, 2)):
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def _doc_with_thumbnail(thumbnail, outline=None):
    page = IntermediatePage(id="d-page-1", number=1, width=200, height=100, thumbnail=thumbnail)
    info = PageInfo(id=page.id, page_number=1, size=PageSize(200, 100), get_data=lambda: page)
    return IntermediateDocument(
        id="d",
        title="T",
        pages_map=IntermediatePageMap.make_by_info_list([info]),
        outline=outline or [],
    )


def test_page_map_loads_each_page_once():
    calls = []

    def load():
        calls.append(1)
        return IntermediatePage(id="p1", number=1, width=10, height=10)

    pages_map = IntermediatePageMap.make_by_info_list(
        [PageInfo(id="p1", page_number=1, size=PageSize(10, 10), get_data=load)]
    )
    assert pages_map.get_page_by_page_number(1) is pages_map.get_page_by_page_number(1)
    assert len(pages_map.pages) == 1
    assert len(calls) == 1
    assert pages_map.get_page_by_page_number(2) is None
    assert pages_map.get_page_size(2) is None


def test_html_document_accessors():
    doc = encode(b"<title>Notes</title><p>first</p><p>second</p>")
    assert doc.get_title() == "Notes"
    assert doc.get_id() == doc.get_intermediate_document().id
    pages = doc.get_pages()
    assert len(pages) == 1
    assert doc.get_page(1).get_number() == 1
    assert doc.get_page(2) is None
    assert doc.get_outline() is None


def test_html_page_text_and_size():
    doc = encode(b"<p>first</p><p>second</p>")
    page = doc.get_page(1)
    assert page.get_pure_text() == "first\nsecond"
    # two 16px lines of 19px each
    assert page.get_size(0.5) == (400.0, 19.0)


def test_html_page_render_uses_scale_and_views():
    doc = encode(b"<p>first</p>")
    page = doc.get_page(1)
    html = page.render(scale=2)
    assert "width:1600px;height:38px" in html
    assert "first</span>" in html
    assert "hamster-note-text" not in page.render(views=[RenderViews.THUMBNAIL])


def test_outline_returns_first_entry():
    outline = [IntermediateOutline(title="Intro", page_number=1), IntermediateOutline(title="End", page_number=1)]
    doc = HtmlDocument(_doc_with_thumbnail(None, outline=outline))
    assert doc.get_outline().title == "Intro"


def test_cover_is_blank_page_sized_canvas_without_thumbnail():
    doc = encode(b"<p>first</p>")
    cover = doc.get_cover()
    assert cover.size == (800, 19)
    assert cover.getpixel((0, 0)) == (255, 255, 255)


def test_cover_loads_thumbnail_data_url():
    doc = HtmlDocument(_doc_with_thumbnail(_png_data_url((3, 2))))
    cover = doc.get_cover()
    assert cover.size == (3, 2)
    assert cover.convert("RGB").getpixel((0, 0)) == (10, 20, 30)


def test_cover_with_broken_thumbnail_falls_back_to_canvas():
    doc = HtmlDocument(_doc_with_thumbnail("data:image/png;base64,not-an-image"))
    assert doc.get_cover().size == (200, 100)


def test_cover_without_pages_uses_default_size():
    empty = IntermediateDocument(id="e", title="", pages_map=IntermediatePageMap.make_by_info_list([]))
    assert HtmlDocument(empty).get_cover().size == (800, 1000)


def test_html_page_wraps_intermediate_page():
    page = HtmlPage(IntermediatePage(id="p", number=3, width=10, height=20))
    assert page.get_number() == 3
    assert page.get_size(2) == (20, 40)
    assert page.get_pure_text() == ""
