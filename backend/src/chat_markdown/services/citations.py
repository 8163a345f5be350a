"""Citations shown under a message.

Citations come from the chat layer next to the message text and are never
part of the parsed block list. The footer is collapsed by default and lists
one entry per citation when expanded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .link_policy import url_host


class Citation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str | None = None
    domain: str | None = None
    snippet: str | None = None

    @property
    def display_domain(self) -> str:
        if self.domain:
            return self.domain
        if self.url:
            return url_host(self.url) or "Source"
        return "Source"


class CitationEntry(BaseModel):
    badge: str
    title: str
    domain_label: str
    url: str | None = None


class CitationsFooter(BaseModel):
    model_config = ConfigDict(frozen=True)

    citations: tuple[Citation, ...]
    expanded: bool = False

    @property
    def summary(self) -> str:
        count = len(self.citations)
        return f"{count} source{'' if count == 1 else 's'}"

    def toggled(self) -> CitationsFooter:
        return self.model_copy(update={"expanded": not self.expanded})

    def entries(self) -> list[CitationEntry]:
        return [
            CitationEntry(badge=c.id, title=c.title, domain_label=c.display_domain, url=c.url)
            for c in self.citations
        ]

    def visible_entries(self) -> list[CitationEntry]:
        return self.entries() if self.expanded else []


def build_footer(citations: list[Citation] | None) -> CitationsFooter | None:
    """Footer for a message, or None when it has no citations."""
    if not citations:
        return None
    return CitationsFooter(citations=tuple(citations))
