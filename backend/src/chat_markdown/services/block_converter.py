"""Blocks → plain-text rendering.

This is the single dispatch point over block kinds. The display layer uses it
as its text fallback (notifications, accessibility labels, logs); rich
rendering of each kind lives with the client.

Notes:
- Numbered lists are renumbered from 1 regardless of the digits in the source.
- Code is emitted verbatim inside a fence, never touched by inline formatting.
- Tables are not padded; short rows stay short.
"""

from __future__ import annotations

from .block_models import (
    Block,
    Blockquote,
    BulletList,
    CodeBlock,
    Header,
    HorizontalRule,
    NumberedList,
    Paragraph,
    Table,
)


def render_plain_text(blocks: list[Block]) -> str:
    """Render blocks as plain text separated by blank lines."""
    return "\n\n".join("\n".join(render_block_lines(block)) for block in blocks)


def render_block_lines(block: Block) -> list[str]:
    if isinstance(block, Paragraph):
        return [block.text.plain_text]
    if isinstance(block, Header):
        return ["#" * block.level + " " + block.text.plain_text]
    if isinstance(block, CodeBlock):
        header = f"```{block.language or ''}"
        return [header, *block.code.split("\n"), "```"] if block.code else [header, "```"]
    if isinstance(block, Table):
        return [_table_line(block.headers)] + [_table_line(row) for row in block.rows]
    if isinstance(block, BulletList):
        return ["• " + item.plain_text for item in block.items]
    if isinstance(block, NumberedList):
        return [f"{label} {item.plain_text}" for label, item in zip(block.labels(), block.items)]
    if isinstance(block, Blockquote):
        return ["> " + line if line else ">" for line in block.text.plain_text.split("\n")]
    if isinstance(block, HorizontalRule):
        return ["---"]
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _table_line(cells: tuple[str, ...]) -> str:
    return " | ".join(cells)
