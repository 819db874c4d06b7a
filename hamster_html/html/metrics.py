from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class TextMetrics:
    width: int
    height: int
    ascent: int
    descent: int


def js_round(value: float) -> int:
    """Round half up, the way JavaScript's Math.round does (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def utf16_length(text: str) -> int:
    # Astral characters count twice, matching String.length in the browser.
    return len(text.encode("utf-16-le")) // 2


def estimate_text_metrics(content: str, font_size: float, line_height: float) -> TextMetrics:
    """Heuristic box for a single line of text.

    - width ≈ characters * font size * 0.6
    - height = line height (rounded, at least 1)
    - ascent/descent = 80% / 20% of the font size
    """
    width = max(1, js_round(utf16_length(content) * font_size * 0.6))
    height = max(1, js_round(line_height))
    ascent = js_round(font_size * 0.8)
    descent = js_round(font_size * 0.2)
    return TextMetrics(width=width, height=height, ascent=ascent, descent=descent)
