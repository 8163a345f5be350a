"""API routes: parse message text into blocks, inline runs, plain text, link decisions."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar

from fastapi import APIRouter, HTTPException
from loguru import logger

from .. import config
from ..models import (
    FooterResponse,
    InlineRequest,
    InlineResponse,
    ParseRequest,
    ParseResponse,
    RenderRequest,
    RenderResponse,
    ResolveLinkRequest,
)
from ..services.block_converter import render_plain_text
from ..services.citations import build_footer
from ..services.inline_formatter import format_inline
from ..services.link_policy import LinkDecision, resolve_link
from ..services.markdown_parser import parse_markdown

router = APIRouter(prefix="/api", tags=["api"])
_executor = ThreadPoolExecutor(max_workers=4)

T = TypeVar("T")


async def _off_loop(fn: Callable[[str], T], text: str) -> T:
    """Run CPU-bound parsing on the executor so the event loop stays free."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, fn, text)


def _check_size(text: str) -> None:
    if len(text) > config.MAX_TEXT_CHARS:
        logger.warning(f"Rejected message of {len(text)} chars (limit {config.MAX_TEXT_CHARS})")
        raise HTTPException(413, f"Text exceeds {config.MAX_TEXT_CHARS} characters")


@router.post("/parse", response_model=ParseResponse)
async def api_parse(body: ParseRequest):
    """Parse message text into blocks. Citations pass through into a collapsed footer."""
    _check_size(body.text)
    blocks = await _off_loop(parse_markdown, body.text)
    footer = build_footer(body.citations)
    footer_resp = None
    if footer is not None:
        footer_resp = FooterResponse(summary=footer.summary, expanded=footer.expanded, entries=footer.entries())
    return ParseResponse(blocks=blocks, footer=footer_resp)


@router.post("/inline", response_model=InlineResponse)
async def api_inline(body: InlineRequest):
    """Inline-format a single span of text."""
    _check_size(body.text)
    styled = await _off_loop(format_inline, body.text)
    return InlineResponse(runs=list(styled.runs))


@router.post("/render", response_model=RenderResponse)
async def api_render(body: RenderRequest):
    """Parse and render message text as plain text."""
    _check_size(body.text)
    blocks = await _off_loop(parse_markdown, body.text)
    return RenderResponse(plain_text=render_plain_text(blocks))


@router.post("/links/resolve", response_model=LinkDecision)
async def api_resolve_link(body: ResolveLinkRequest):
    """Decide whether a tapped link opens directly or needs confirmation."""
    if not body.url.strip():
        raise HTTPException(400, "url must not be empty")
    return resolve_link(
        body.url,
        confirm_untrusted=config.CONFIRM_UNTRUSTED_LINKS,
        extra_trusted=config.EXTRA_TRUSTED_DOMAINS,
    )
