"""
Entry point for the HTML ⇄ intermediate document converter.

Packages:
- hamster_html.docs: intermediate model, wrappers and the encode/decode facade
- hamster_html.html: HTML reading (styles, metrics, direction, fallback)
- hamster_html.render: HTML writing (fragment, standalone file, page views)
"""

from __future__ import annotations

import logging
import os

from hamster_html.config import load_settings
from hamster_html.docs.pipeline import decode, decode_to_html, encode
from hamster_html.html.tree import parse_html

__all__ = ["encode", "decode", "decode_to_html"]


def _default_out_path(file_path: str, suffix: str) -> str:
    base_dir = os.path.dirname(file_path)
    base_name = os.path.splitext(os.path.basename(file_path))[0]
    return os.path.join(base_dir, f"{base_name}{suffix}")


def _cli() -> None:
    """CLI for HTML round-tripping.

    --file / -f: Path to input HTML document
    --out / -o: Output path (default: <name>.hamster.html, .fragment.html or .txt)
    --fragment: Write the embeddable fragment instead of a standalone document
    --text: Write the plain text of every page instead of HTML
    --plain: Skip structural parsing and split the input by line
    --config: Path to a settings JSON file (default: config/html_settings.json)
    --verbose / -v: Debug logging
    """
    import argparse

    parser = argparse.ArgumentParser(description="Convert HTML to the intermediate document model and back.")
    parser.add_argument("--file", "-f", type=str, required=True, help="Path to input HTML document")
    parser.add_argument("--out", "-o", type=str, help="Output path")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--fragment", action="store_true", help="Write the HTML fragment only")
    mode.add_argument("--text", action="store_true", help="Write plain text, one run per line")
    parser.add_argument("--plain", action="store_true", help="Use the line-based plain-text import")
    parser.add_argument("--config", type=str, help="Path to settings JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    settings = load_settings(args.config)

    if not os.path.exists(args.file):
        print(f"File not found: {args.file}")
        raise SystemExit(2)

    doc = encode(args.file, parse_html=None if args.plain else parse_html, settings=settings)
    if doc is None:
        print(f"Could not decode {args.file} as UTF-8 HTML.")
        raise SystemExit(1)

    pages = doc.get_pages()
    if args.text:
        out_path = args.out or _default_out_path(args.file, ".txt")
        with open(out_path, "w", encoding="utf-8") as f:
            f.write("\n\n".join(p.get_pure_text() for p in pages))
    elif args.fragment:
        out_path = args.out or _default_out_path(args.file, ".fragment.html")
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(decode_to_html(doc, settings=settings))
    else:
        out_path = args.out or _default_out_path(args.file, ".hamster.html")
        result = decode(doc, settings=settings)
        data = result if isinstance(result, bytes) else result.getvalue()
        with open(out_path, "wb") as f:
            f.write(data)

    runs = sum(len(p.intermediate_page.texts) for p in pages)
    print(f"Title: {doc.get_title()}")
    print(f"Runs: {runs}")
    print(f"Saved to: {out_path}")


if __name__ == "__main__":
    _cli()
