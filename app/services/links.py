"""Call-to-action resolution and secondary link curation."""

import logging
from types import MappingProxyType
from typing import List, Sequence

from app.models.page import Link, Section
from app.services.normalizer import host_label, host_matches

logger = logging.getLogger(__name__)

MAX_SECONDARY_LINKS = 4
MAX_SOCIAL_LINKS = 2

# A link mentioning any of these (label or URL) is treated as a live demo
CTA_KEYWORDS = ("demo", "live", "try", "website", "playground", "app", "deploy")

# Sections that make a good "Get Started" target
_INSTALL_TITLE_KEYWORDS = ("install", "quick start")
_INSTALL_ID_KEYWORDS = ("installation", "setup", "quick-start")

# Code-hosting domains and the label of the CTA pointing at them
CODE_HOSTS = MappingProxyType(
    {
        "github.com": "View on GitHub",
        "gitlab.com": "View on GitLab",
        "bitbucket.org": "View on Bitbucket",
        "codeberg.org": "View on Codeberg",
    }
)

SOCIAL_HOSTS = (
    "twitter.com",
    "x.com",
    "linkedin.com",
    "bsky.app",
    "mastodon.social",
    "discord.gg",
    "discord.com",
)

FALLBACK_CTA = Link(label="Get Started", href="#")


def _is_placeholder(href: str) -> bool:
    return href.startswith("#")


def _is_install_section(section: Section) -> bool:
    title = section.title.lower()
    return any(keyword in title for keyword in _INSTALL_TITLE_KEYWORDS) or any(
        keyword in section.id for keyword in _INSTALL_ID_KEYWORDS
    )


def resolve_cta(links: Sequence[Link], sections: Sequence[Section]) -> Link:
    """Pick the single primary call-to-action.

    Fallback chain, first hit wins:

    1. a demo/live/app-style link that is not an in-page anchor;
    2. a "Get Started" anchor to the installation / quick-start section;
    3. the first code-hosting link ("View on GitHub");
    4. ``Get Started`` → ``#``.

    *sections* must be in document order (before reordering).
    """
    for link in links:
        label, href = link.label.lower(), link.href.lower()
        if _is_placeholder(link.href):
            continue
        if any(keyword in label or keyword in href for keyword in CTA_KEYWORDS):
            logger.debug("CTA: demo link %s", link.href)
            return link

    for section in sections:
        if _is_install_section(section):
            logger.debug("CTA: install section #%s", section.id)
            return Link(label="Get Started", href=f"#{section.id}")

    for link in links:
        host = host_matches(link.href, CODE_HOSTS)
        if host:
            logger.debug("CTA: repository link %s", link.href)
            return Link(label=CODE_HOSTS[host], href=link.href)

    return FALLBACK_CTA


def _is_navigable(href: str) -> bool:
    """Absolute http(s) URLs and in-page anchors; relative repo paths are skipped."""
    return href.startswith(("http://", "https://")) or (href.startswith("#") and href != "#")


def curate_secondary_links(links: Sequence[Link], cta: Link) -> List[Link]:
    """Rank the links shown next to the CTA.

    Candidates exclude the CTA target, bare ``#`` placeholders, relative
    paths and repeated URLs.  The order is one source-hosting link, then up
    to two social profiles, then the remaining non-social links, capped at
    :data:`MAX_SECONDARY_LINKS`.
    """
    candidates: List[Link] = []
    seen = {cta.href}
    for link in links:
        if link.href in seen or not _is_navigable(link.href):
            continue
        seen.add(link.href)
        candidates.append(link)

    source = next((link for link in candidates if host_matches(link.href, CODE_HOSTS)), None)
    social = [
        link
        for link in candidates
        if link is not source and host_matches(link.href, SOCIAL_HOSTS)
    ]

    ranked: List[Link] = [source] if source else []
    ranked.extend(social[:MAX_SOCIAL_LINKS])
    ranked.extend(link for link in candidates if link is not source and link not in social)

    return [
        Link(label=link.label.strip() or host_label(link.href), href=link.href)
        for link in ranked[:MAX_SECONDARY_LINKS]
    ]
