"""HTML importer/exporter for the hamster-note intermediate document model.

Packages:
- hamster_html.docs: intermediate model, document/page wrappers and the encode/decode facade
- hamster_html.html: HTML -> text runs (style, metrics, direction, fallback)
- hamster_html.render: text runs -> HTML fragment or standalone file
"""

from hamster_html.docs.pipeline import decode, decode_to_html, encode

__all__ = ["encode", "decode", "decode_to_html"]
