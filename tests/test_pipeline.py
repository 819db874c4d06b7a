import io

from bs4 import BeautifulSoup

from hamster_html import decode, decode_to_html, encode
from hamster_html.config import HtmlSettings
from hamster_html.docs.html_document import HtmlDocument
from hamster_html.render.html_writer import HtmlFile


CJK_MARKUP = """<h1>标题</h1>
    <p>第一段</p>
    <p>第二段</p>"""


def _texts(doc):
    return doc.get_pages()[0].intermediate_page.get_texts()


def test_encode_without_parser_falls_back_to_lines():
    doc = encode(CJK_MARKUP.encode("utf-8"), parse_html=None)
    assert isinstance(doc, HtmlDocument)
    assert doc.get_title() == "Untitled HTML"
    pages = doc.get_intermediate_document().pages
    assert len(pages) == 1
    texts = pages[0].get_texts()
    assert [t.content for t in texts] == ["<h1>标题</h1>", "<p>第一段</p>", "<p>第二段</p>"]


def test_encode_with_parser_extracts_text_nodes():
    doc = encode(CJK_MARKUP.encode("utf-8"))
    assert [t.content for t in _texts(doc)] == ["标题", "第一段", "第二段"]
    assert doc.get_id().startswith("html-")
    assert _texts(doc)[0].id == f"{doc.get_id()}-page-1-text-0"


def test_encode_rejects_invalid_utf8():
    assert encode(b"\xff\xfe\xfa<p>x</p>") is None


def test_encode_reads_paths_and_streams(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<title>From disk</title><p>hello</p>", encoding="utf-8")
    assert encode(str(path)).get_title() == "From disk"
    assert encode(path).get_title() == "From disk"
    assert [t.content for t in _texts(encode(io.BytesIO(b"<p>stream</p>")))] == ["stream"]


def test_encode_unreadable_inputs_return_none(tmp_path):
    assert encode(str(tmp_path / "missing.html")) is None
    assert encode(12345) is None
    assert encode("<p>a\x00</p>") is None
    closed = io.BytesIO(b"<p>a</p>")
    closed.close()
    assert encode(closed) is None


def test_encode_strips_byte_order_mark():
    doc = encode(b"\xef\xbb\xbf<p>a</p><p>b</p>")
    assert [t.content for t in _texts(doc)] == ["a", "b"]
    plain = encode(b"\xef\xbb\xbfLine one\nLine two", parse_html=None)
    first = _texts(plain)[0]
    assert first.content == "Line one"
    assert first.width == 77


def test_encode_empty_body_keeps_title_and_uses_fallback():
    html = "<html><head><title>Only title</title></head><body>  </body></html>"
    doc = encode(html.encode("utf-8"))
    assert doc.get_title() == "Only title"
    assert [t.content for t in _texts(doc)] == [html]


def test_encode_respects_settings():
    settings = HtmlSettings(page_width=1000, untitled_title="Nameless")
    doc = encode(b"<p>a</p>", settings=settings)
    page = doc.get_intermediate_document().pages[0]
    assert page.width == 1000
    assert doc.get_title() == "Nameless"
    plain = encode(b"a\nb", parse_html=None, settings=settings)
    assert plain.get_title() == "Nameless"


def test_decode_to_html_round_trips_structure():
    doc = encode("<p>one</p><div><span style='font-weight:bold'>two</span></div>".encode("utf-8"))
    fragment = decode_to_html(doc)
    soup = BeautifulSoup(fragment, "html.parser")
    container = soup.find("div", class_="hamster-note-document")
    assert container is not None
    page_divs = container.find_all("div", class_="hamster-note-page")
    assert len(page_divs) == 1
    spans = page_divs[0].find_all("span", class_="hamster-note-text")
    texts = _texts(doc)
    assert [s["id"] for s in spans] == [t.id for t in texts]
    assert [s.get_text() for s in spans] == ["one", "two"]
    assert "font-weight:700;" in spans[1]["style"]


def test_decode_to_html_accepts_intermediate_document():
    doc = encode(b"<p>a</p>")
    assert decode_to_html(doc.get_intermediate_document()) == decode_to_html(doc)


def test_decode_escapes_text_content():
    doc = encode("<p>&lt;b&gt; &amp; \"q\" 'a'</p>".encode("utf-8"))
    assert _texts(doc)[0].content == "<b> & \"q\" 'a'"
    fragment = decode_to_html(doc)
    assert "&lt;b&gt; &amp; &quot;q&quot; &#39;a&#39;" in fragment
    assert "<b>" not in fragment


def test_decode_returns_named_standalone_file():
    doc = encode(b"<title>Notes</title><p>a</p>")
    result = decode(doc)
    assert isinstance(result, HtmlFile)
    assert result.name == "Notes.html"
    assert b"<title>Notes</title>" in result.getvalue()


def test_decode_falls_back_to_bytes_when_files_unavailable():
    doc = encode(b"<p>a</p>")

    def no_files(data, name):
        raise OSError("read-only environment")

    result = decode(doc, file_factory=no_files)
    assert isinstance(result, bytes)
    assert b'<div class="hamster-note-document">' in result
