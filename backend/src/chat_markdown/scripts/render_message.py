"""Render a markdown message file from the command line.

Usage:
  python -m chat_markdown.scripts.render_message MESSAGE.md [--json]

Prints the plain-text rendering, or the parsed blocks as JSON with --json.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ..services.block_converter import render_plain_text
from ..services.markdown_parser import parse_markdown


def main(argv: list[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    as_json = "--json" in args
    paths = [a for a in args if a != "--json"]
    if len(paths) != 1:
        raise SystemExit("Usage: python -m chat_markdown.scripts.render_message MESSAGE.md [--json]")

    md_path = Path(paths[0])
    if not md_path.exists():
        raise SystemExit(f"File not found: {md_path}")

    blocks = parse_markdown(md_path.read_text(encoding="utf-8"))
    if as_json:
        print(json.dumps([b.model_dump(mode="json") for b in blocks], ensure_ascii=False, indent=2))
    else:
        print(render_plain_text(blocks))


if __name__ == "__main__":
    main()
