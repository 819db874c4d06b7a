"""HTML reading: inline style resolution, size heuristics, direction detection
and the body walker with its plain-text fallback.
"""

from .direction import detect_dir
from .metrics import TextMetrics, estimate_text_metrics
from .reader import ImportResult, build_document, collect_texts_from_html, fallback_plain_text
from .style import ResolvedStyle, collect_ancestor_inline_style, parse_inline_style
from .tree import parse_html

__all__ = [
    "detect_dir",
    "TextMetrics",
    "estimate_text_metrics",
    "ImportResult",
    "build_document",
    "collect_texts_from_html",
    "fallback_plain_text",
    "ResolvedStyle",
    "collect_ancestor_inline_style",
    "parse_inline_style",
    "parse_html",
]
