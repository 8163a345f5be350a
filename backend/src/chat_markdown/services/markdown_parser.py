"""Markdown message text → ordered list of typed blocks.

Small line-based block parser for chat messages. Each detector looks at the
line under the cursor and returns ``(block, lines_consumed)``; the top-level
loop tries them in fixed priority order and falls back to a paragraph. The
parser never raises: anything it cannot place degrades to a Paragraph.
"""

from __future__ import annotations

from typing import Callable, Iterator, NamedTuple, Optional

from loguru import logger

from .block_models import (
    Block,
    Blockquote,
    BulletList,
    CodeBlock,
    Header,
    HorizontalRule,
    NumberedList,
    Paragraph,
    StyledText,
    Table,
)
from .inline_formatter import format_inline
from .table_splitter import is_separator_row, split_row

FENCE = "```"
BULLET_PREFIXES = ("- ", "* ", "• ")
RULE_CHARS = frozenset("-*_")
MAX_HEADER_LEVEL = 6

Detection = tuple[Optional[Block], int]


class Segment(NamedTuple):
    """A run of input lines and the block it produced (None for a blank line)."""

    start: int
    consumed: int
    block: Block | None


def parse_markdown(text: str) -> list[Block]:
    """Parse message text into blocks, in source order."""
    blocks = [seg.block for seg in iter_segments(text) if seg.block is not None]
    line_count = text.count("\n") + 1
    logger.debug(f"Parsed {len(blocks)} blocks from {line_count} lines")
    return blocks


def iter_segments(text: str) -> Iterator[Segment]:
    """Walk the input and yield one segment per consumed line run.

    Segments are contiguous and cover every line exactly once.
    """
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        if not lines[i].strip():
            yield Segment(i, 1, None)
            i += 1
            continue
        block, consumed = _detect(lines, i)
        yield Segment(i, consumed, block)
        i += consumed


def _detect(lines: list[str], start: int) -> Detection:
    stripped = lines[start].strip()

    if is_code_fence(stripped):
        return parse_code_block(lines, start)

    if is_table_start(stripped):
        block, consumed = parse_table(lines, start)
        if block is not None:
            return block, consumed
        # Attempted as a table and declined: that single line is a paragraph
        logger.debug(f"Line {start} looks like a table row but no table formed")
        return Paragraph(text=format_inline(stripped)), 1

    if is_horizontal_rule(stripped):
        return HorizontalRule(), 1

    for detector in _DETECTORS:
        block, consumed = detector(lines, start)
        if block is not None:
            return block, consumed

    return parse_paragraph(lines, start)


# === START PREDICATES ===


def is_code_fence(stripped: str) -> bool:
    return stripped.startswith(FENCE)


def is_table_start(stripped: str) -> bool:
    return stripped.startswith("|") and "|" in stripped[1:]


def is_horizontal_rule(stripped: str) -> bool:
    cleaned = stripped.replace(" ", "")
    return len(cleaned) >= 3 and cleaned[0] in RULE_CHARS and cleaned == cleaned[0] * len(cleaned)


def _header_level(stripped: str) -> int:
    level = 0
    for c in stripped:
        if c != "#":
            break
        level += 1
    return level


def is_header(stripped: str) -> bool:
    """1-6 '#' then whitespace then non-empty text. ``##NoSpace`` is not a header."""
    level = _header_level(stripped)
    if level < 1 or level > MAX_HEADER_LEVEL or level >= len(stripped):
        return False
    return stripped[level].isspace() and bool(stripped[level:].strip())


def is_blockquote_line(stripped: str) -> bool:
    return stripped.startswith("> ") or stripped == ">"


def is_bullet_item(stripped: str) -> bool:
    return stripped.startswith(BULLET_PREFIXES)


def is_numbered_item(stripped: str) -> bool:
    """Digits, a '.', then whitespace (``12. item``)."""
    idx = 0
    while idx < len(stripped) and stripped[idx].isdecimal():
        idx += 1
    if idx == 0 or idx + 1 >= len(stripped):
        return False
    return stripped[idx] == "." and stripped[idx + 1].isspace()


def is_block_start(line: str) -> bool:
    s = line.strip()
    if not s:
        return True
    return (
        is_code_fence(s)
        or is_table_start(s)
        or is_horizontal_rule(s)
        or is_header(s)
        or is_blockquote_line(s)
        or is_bullet_item(s)
        or is_numbered_item(s)
    )


# === DETECTORS ===


def parse_code_block(lines: list[str], start: int) -> Detection:
    opening = lines[start].strip()
    if not is_code_fence(opening):
        return None, 0
    language = opening[len(FENCE) :].strip() or None

    code_lines: list[str] = []
    i = start + 1
    while i < len(lines):
        if is_code_fence(lines[i].strip()):
            i += 1
            break
        code_lines.append(lines[i])
        i += 1
    return CodeBlock(language=language, code="\n".join(code_lines)), i - start


def parse_table(lines: list[str], start: int) -> Detection:
    if not is_table_start(lines[start].strip()):
        return None, 0

    table_lines: list[str] = []
    i = start
    while i < len(lines):
        s = lines[i].strip()
        if not s or "|" not in s:
            break
        table_lines.append(s)
        i += 1

    if len(table_lines) < 2:
        return None, 0

    headers = split_row(table_lines[0])
    if not headers:
        return None, 0

    data_start = 2 if is_separator_row(table_lines[1]) else 1
    rows: list[tuple[str, ...]] = []
    for row_line in table_lines[data_start:]:
        cells = split_row(row_line)
        if cells:
            rows.append(tuple(cells))
    return Table(headers=tuple(headers), rows=tuple(rows)), i - start


def parse_header(lines: list[str], start: int) -> Detection:
    stripped = lines[start].strip()
    if not is_header(stripped):
        return None, 0
    level = _header_level(stripped)
    return Header(level=level, text=format_inline(stripped[level:].strip())), 1


def parse_blockquote(lines: list[str], start: int) -> Detection:
    quote_lines: list[str] = []
    i = start
    while i < len(lines):
        s = lines[i].strip()
        if s.startswith("> "):
            quote_lines.append(s[2:])
        elif s == ">":
            quote_lines.append("")
        else:
            break
        i += 1

    if not quote_lines:
        return None, 0
    return Blockquote(text=format_inline("\n".join(quote_lines))), i - start


def _strip_bullet(stripped: str) -> str:
    for prefix in BULLET_PREFIXES:
        if stripped.startswith(prefix):
            return stripped[len(prefix) :]
    return stripped


def parse_bullet_list(lines: list[str], start: int) -> Detection:
    items: list[StyledText] = []
    i = start
    while i < len(lines):
        s = lines[i].strip()
        if not is_bullet_item(s):
            break
        items.append(format_inline(_strip_bullet(s)))
        i += 1

    if not items:
        return None, 0
    return BulletList(items=tuple(items)), i - start


def parse_numbered_list(lines: list[str], start: int) -> Detection:
    items: list[StyledText] = []
    i = start
    while i < len(lines):
        s = lines[i].strip()
        if not is_numbered_item(s):
            break
        items.append(format_inline(s[s.index(".") + 1 :].strip()))
        i += 1

    if not items:
        return None, 0
    return NumberedList(items=tuple(items)), i - start


def parse_paragraph(lines: list[str], start: int) -> Detection:
    """Collect lines until a blank line or the start of another block.

    The first line is always taken, so a line that every detector declined
    still ends up in a paragraph.
    """
    para_lines = [lines[start].strip()]
    i = start + 1
    while i < len(lines) and not is_block_start(lines[i]):
        para_lines.append(lines[i].strip())
        i += 1
    return Paragraph(text=format_inline(" ".join(para_lines))), i - start


_DETECTORS: tuple[Callable[[list[str], int], Detection], ...] = (
    parse_header,
    parse_blockquote,
    parse_bullet_list,
    parse_numbered_list,
)
