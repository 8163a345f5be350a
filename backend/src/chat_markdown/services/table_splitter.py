"""Pipe-delimited table row splitting."""

from __future__ import annotations

_ALIGNMENT_CHARS = frozenset("-:")


def _is_alignment_cell(cell: str) -> bool:
    return bool(cell) and all(c in _ALIGNMENT_CHARS for c in cell)


def split_row(line: str) -> list[str]:
    """Split a table row into trimmed cells.

    Empty pieces (from leading/trailing pipes) and alignment markers such as
    ``---`` or ``:-:`` are dropped. Cell counts are not normalized across rows.
    """
    cells: list[str] = []
    for part in line.split("|"):
        cell = part.strip()
        if not cell or _is_alignment_cell(cell):
            continue
        cells.append(cell)
    return cells


def is_separator_row(line: str) -> bool:
    """True for a ``|---|:---:|`` style row."""
    pieces = [p.strip() for p in line.split("|")]
    pieces = [p for p in pieces if p]
    return bool(pieces) and all(_is_alignment_cell(p) for p in pieces)
