"""Structural HTML parsing capability.

The importer receives the parser as a plain callable ``str -> BeautifulSoup``
so callers (and tests) decide explicitly whether structural parsing is
available. Passing ``None`` selects the plain-text fallback.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator, List

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

HtmlTreeParser = Callable[[str], BeautifulSoup]

# <template> content is inert and never part of the rendered body.
SKIP_TAGS = frozenset({"script", "style", "template"})
# Only skipped when the parser did not produce a <body> and the whole tree is walked.
HEAD_TAGS = frozenset({"head", "title"})

_WS_RE = re.compile(r"\s+")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def document_title(soup: BeautifulSoup) -> str:
    el = soup.find("title")
    if el is None:
        return ""
    return collapse_whitespace(el.get_text())


def text_root(soup: BeautifulSoup) -> Tag:
    return soup.body if soup.body is not None else soup


def iter_text_nodes(root: Tag) -> Iterator[NavigableString]:
    """Depth-first text nodes under ``root``.

    script/style/template subtrees are not entered; comments, doctypes and other
    markup-only strings are ignored.
    """
    skip = SKIP_TAGS if root.name == "body" else SKIP_TAGS | HEAD_TAGS
    # explicit stack: nesting depth is bounded by the input, not the interpreter
    stack: List[PageElement] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Tag):
            if node.name in skip:
                continue
            stack.extend(reversed(list(node.children)))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            yield node


__all__ = [
    "HtmlTreeParser",
    "parse_html",
    "collapse_whitespace",
    "document_title",
    "text_root",
    "iter_text_nodes",
]
