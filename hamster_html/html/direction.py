from __future__ import annotations

import re

from hamster_html.docs.model import TextDir

# Hebrew, Arabic, Syriac, Thaana and the Hebrew/Arabic presentation forms.
_RTL_RE = re.compile("[\u0591-\u07FF\uFB1D-\uFDFD\uFE70-\uFEFC]")


def detect_dir(text: str) -> TextDir:
    """Rough LTR/RTL guess from the character ranges present in ``text``."""
    if _RTL_RE.search(text or ""):
        return TextDir.RTL
    return TextDir.LTR


__all__ = ["detect_dir"]
