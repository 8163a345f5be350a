"""Block model produced by the markdown parser.

A parsed message is a flat list of blocks. Each block is an immutable pydantic
model tagged by ``type`` so the render layer can dispatch on a closed set of
kinds. Inline text inside blocks is a :class:`StyledText` run sequence.
"""

from __future__ import annotations

import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

InlineStyle = Literal["bold", "italic", "strikethrough", "code", "link"]


# === INLINE ===


class TextRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    styles: frozenset[InlineStyle] = frozenset()
    url: str | None = None  # only set for link runs


class StyledText(BaseModel):
    """Ordered run sequence for one inline-formatted span."""

    model_config = ConfigDict(frozen=True)

    runs: tuple[TextRun, ...] = ()

    @classmethod
    def plain(cls, text: str) -> StyledText:
        if not text:
            return cls()
        return cls(runs=(TextRun(text=text),))

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)


# === BLOCKS ===


def _new_id() -> str:
    return uuid.uuid4().hex


class _BlockBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)

    def content_key(self) -> dict[str, Any]:
        """Block payload without the opaque id."""
        return self.model_dump(exclude={"id"})


class Paragraph(_BlockBase):
    type: Literal["paragraph"] = "paragraph"
    text: StyledText


class Header(_BlockBase):
    type: Literal["header"] = "header"
    level: Literal[1, 2, 3, 4, 5, 6]
    text: StyledText


class CodeBlock(_BlockBase):
    type: Literal["code"] = "code"
    language: str | None = None
    code: str  # raw, never inline-formatted


class Table(_BlockBase):
    type: Literal["table"] = "table"
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()  # not padded to header width


class BulletList(_BlockBase):
    type: Literal["bullet_list"] = "bullet_list"
    items: tuple[StyledText, ...] = Field(min_length=1)


class NumberedList(_BlockBase):
    type: Literal["numbered_list"] = "numbered_list"
    items: tuple[StyledText, ...] = Field(min_length=1)

    def labels(self) -> list[str]:
        # Source digits are discarded; numbering is positional.
        return [f"{idx}." for idx in range(1, len(self.items) + 1)]


class Blockquote(_BlockBase):
    type: Literal["blockquote"] = "blockquote"
    text: StyledText


class HorizontalRule(_BlockBase):
    type: Literal["hr"] = "hr"


Block = Annotated[
    Union[
        Paragraph,
        Header,
        CodeBlock,
        Table,
        BulletList,
        NumberedList,
        Blockquote,
        HorizontalRule,
    ],
    Field(discriminator="type"),
]


def same_content(left: list[Block], right: list[Block]) -> bool:
    """Compare two block sequences ignoring ids."""
    if len(left) != len(right):
        return False
    return all(a.content_key() == b.content_key() for a, b in zip(left, right))
