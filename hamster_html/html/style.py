"""Inline style resolution for HTML text nodes.

Only the element's own ``style="..."`` attribute is read; stylesheets and
computed styles are never consulted. Ancestors fill in whatever the nearest
element left unset, then documented defaults apply.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields, replace
from functools import reduce
from typing import Dict, Iterator, Optional, Union

from bs4 import Tag

Number = Union[int, float]

_ITALIC_RE = re.compile(r"italic|oblique", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedStyle:
    font_size: Optional[Number] = None
    line_height: Optional[Number] = None
    font_weight: Optional[Number] = None
    italic: Optional[bool] = None
    color: Optional[str] = None
    font_family: Optional[str] = None

    def fill_missing(self, other: "ResolvedStyle") -> "ResolvedStyle":
        """Take values from ``other`` only for fields still unset here."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None and getattr(other, f.name) is not None
        }
        return replace(self, **updates) if updates else self


def to_number(raw: str) -> Optional[Number]:
    """Parse a CSS numeric token; None when it is not a finite number."""
    s = raw.strip()
    if not s:
        return 0
    if "_" in s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def build_inline_style_map(style_text: Optional[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    if not style_text:
        return out
    for decl in style_text.split(";"):
        key, sep, value = decl.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        value = value.strip()
        if key and value:
            out[key] = value
    return out


def parse_font_size(raw: Optional[str]) -> Optional[Number]:
    if not raw:
        return None
    if raw.endswith("px"):
        return to_number(raw[:-2])
    if raw.endswith("em"):
        val = to_number(raw[:-2])
        return 1 if not val else val
    return None


def parse_line_height(raw: Optional[str]) -> Optional[Number]:
    if not raw:
        return None
    if raw.endswith("px"):
        return to_number(raw[:-2])
    if raw.endswith("em"):
        val = to_number(raw[:-2])
        return 1.2 if not val else val
    return to_number(raw)


def parse_font_weight(raw: Optional[str]) -> Optional[Number]:
    if not raw:
        return None
    keyword = raw.strip().lower()
    if keyword == "bold":
        return 700
    if keyword == "normal":
        return 400
    val = to_number(raw)
    return 400 if not val else val


def parse_italic(raw: Optional[str]) -> Optional[bool]:
    if not raw:
        return None
    return bool(_ITALIC_RE.search(raw))


def parse_inline_style(el: Tag) -> ResolvedStyle:
    """Extract the typographic subset of an element's inline style."""
    style_attr = el.get("style") if hasattr(el, "get") else None
    if isinstance(style_attr, list):
        style_attr = " ".join(style_attr)
    decls = build_inline_style_map(style_attr)
    return ResolvedStyle(
        font_size=parse_font_size(decls.get("font-size")),
        line_height=parse_line_height(decls.get("line-height")),
        font_weight=parse_font_weight(decls.get("font-weight")),
        italic=parse_italic(decls.get("font-style")),
        color=decls.get("color"),
        font_family=decls.get("font-family"),
    )


def _ancestors(node) -> Iterator[Tag]:
    cur = node.parent
    while isinstance(cur, Tag):
        yield cur
        cur = cur.parent


def collect_ancestor_inline_style(
    node,
    default_font_size: Number = 16,
    default_line_height: Number = 1.2,
) -> ResolvedStyle:
    """Resolve the style of a text node from its parent upwards.

    The nearest ancestor that sets a field wins; fields nobody sets take the
    defaults (line height defaults to ``default_line_height`` times the font size).
    """
    collected = reduce(
        lambda acc, el: acc.fill_missing(parse_inline_style(el)),
        _ancestors(node),
        ResolvedStyle(),
    )
    font_size = collected.font_size if collected.font_size is not None else default_font_size
    line_height = (
        collected.line_height
        if collected.line_height is not None
        else font_size * default_line_height
    )
    return ResolvedStyle(
        font_size=font_size,
        line_height=line_height,
        font_weight=collected.font_weight if collected.font_weight is not None else 400,
        italic=bool(collected.italic),
        color=collected.color or "#000",
        font_family=collected.font_family or "",
    )


__all__ = [
    "ResolvedStyle",
    "build_inline_style_map",
    "parse_font_size",
    "parse_line_height",
    "parse_font_weight",
    "parse_italic",
    "parse_inline_style",
    "collect_ancestor_inline_style",
]
