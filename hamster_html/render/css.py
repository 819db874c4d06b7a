from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float]

_PERCENT_STEP = Decimal("0.0001")

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: str) -> str:
    """Escape text for use inside markup or a quoted attribute."""
    out = text or ""
    for raw, entity in _ESCAPES:
        out = out.replace(raw, entity)
    return out


def format_number(val: Number) -> str:
    """Print a number the way a browser stringifies it: 12, 12.5, 0.00001."""
    if isinstance(val, bool):
        val = int(val)
    if isinstance(val, int):
        return str(val)
    if math.isnan(val):
        return "NaN"
    if math.isinf(val):
        return "Infinity" if val > 0 else "-Infinity"
    if val.is_integer() and abs(val) < 1e21:
        return str(int(val))
    text = repr(val)
    if "e" not in text or abs(val) >= 1e21:
        return text
    if abs(val) >= 1e-6:
        return format(Decimal(text), "f")
    mantissa, exp = text.split("e")
    return f"{mantissa}e{int(exp)}"


def css_px_or_percent(val: Number) -> str:
    """Lengths below 1 in magnitude are relative (0.5 -> 50.0000%), others are px."""
    if abs(val) < 1:
        # exact binary value, ties away from zero; + 0.0 folds -0.0 into 0.0
        percent = Decimal(val * 100 + 0.0).quantize(_PERCENT_STEP, rounding=ROUND_HALF_UP)
        return format(percent, "f") + "%"
    return f"{format_number(val)}px"


def css_font_size(val: Number) -> str:
    """Font sizes below 1 in magnitude are em multipliers, others are px."""
    if abs(val) < 1:
        return f"{format_number(val)}em"
    return f"{format_number(val)}px"


__all__ = ["escape_html", "format_number", "css_px_or_percent", "css_font_size"]
