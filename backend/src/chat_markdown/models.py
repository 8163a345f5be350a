"""Pydantic models for API request/response."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .services.block_models import Block, TextRun
from .services.citations import Citation, CitationEntry


class ParseRequest(BaseModel):
    text: str
    citations: list[Citation] | None = None


class FooterResponse(BaseModel):
    summary: str
    expanded: bool
    entries: list[CitationEntry]


class ParseResponse(BaseModel):
    blocks: list[Block]
    footer: FooterResponse | None = None


class InlineRequest(BaseModel):
    text: str


class InlineResponse(BaseModel):
    runs: list[TextRun] = Field(default_factory=list)


class RenderRequest(BaseModel):
    text: str


class RenderResponse(BaseModel):
    plain_text: str


class ResolveLinkRequest(BaseModel):
    url: str
