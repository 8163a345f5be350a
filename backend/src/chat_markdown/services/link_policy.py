"""Link tap policy: trusted domains and delegation to the caller's handler.

The parser only produces link runs. Deciding what a tap does is split in two:
:func:`resolve_link` says whether the link may open directly or should be
confirmed first, and :func:`handle_link_tap` hands the url to a callback that
returns whether it handled it. Nothing in this module navigates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Literal
from urllib.parse import urlsplit

from loguru import logger
from pydantic import BaseModel

if TYPE_CHECKING:
    from .citations import Citation

LinkHandler = Callable[[str], bool]

TRUSTED_DOMAINS: frozenset[str] = frozenset(
    {
        # Government health sources
        "nih.gov",
        "cdc.gov",
        "who.int",
        "fda.gov",
        "usda.gov",
        "hhs.gov",
        # Medical / health information
        "mayoclinic.org",
        "webmd.com",
        "healthline.com",
        "clevelandclinic.org",
        "hopkinsmedicine.org",
        "medlineplus.gov",
        "medscape.com",
        "pubmed.ncbi.nlm.nih.gov",
        # Nutrition
        "fdc.nal.usda.gov",
        "nutritiondata.self.com",
        "myfitnesspal.com",
        "cronometer.com",
        "eatthismuch.com",
        # Fitness
        "acefitness.org",
        "exrx.net",
        "bodybuilding.com",
        "strengthlevel.com",
        "muscleandstrength.com",
        # Academic
        "scholar.google.com",
        "ncbi.nlm.nih.gov",
        "nature.com",
        "sciencedirect.com",
        # Apple
        "apple.com",
        "support.apple.com",
        "developer.apple.com",
        # General
        "wikipedia.org",
        "github.com",
    }
)


class LinkDecision(BaseModel):
    url: str
    domain: str
    action: Literal["open", "confirm"]


def url_host(url: str) -> str | None:
    """Host part of an absolute url, lowercased; None when there is none."""
    try:
        return urlsplit(url.strip()).hostname
    except ValueError:
        # Malformed netloc (e.g. an unclosed IPv6 bracket)
        return None


def display_domain(url: str) -> str:
    return url_host(url) or "Unknown"


def is_trusted(url: str, extra_trusted: Iterable[str] = ()) -> bool:
    """Exact host or subdomain match against the trusted list."""
    host = url_host(url)
    if not host:
        return False
    domains = TRUSTED_DOMAINS.union(d.strip().lower() for d in extra_trusted if d.strip())
    return any(host == d or host.endswith("." + d) for d in domains)


def resolve_link(
    url: str,
    *,
    confirm_untrusted: bool = True,
    extra_trusted: Iterable[str] = (),
) -> LinkDecision:
    if not confirm_untrusted or is_trusted(url, extra_trusted):
        action: Literal["open", "confirm"] = "open"
    else:
        action = "confirm"
    return LinkDecision(url=url, domain=display_domain(url), action=action)


def handle_link_tap(url: str, on_link: LinkHandler) -> bool:
    """Delegate a tap on a link run to the caller. Returns the callback's ``handled``."""
    handled = bool(on_link(url))
    if not handled:
        logger.debug(f"Link tap not handled: {url}")
    return handled


def handle_citation_tap(citation: Citation, on_link: LinkHandler) -> bool:
    if not citation.url:
        return False
    return handle_link_tap(citation.url, on_link)
