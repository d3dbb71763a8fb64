"""Badge extraction: shields, license/version markers and short tech-stack lines."""

import re
from typing import List

from markdown_it.tree import SyntaxTreeNode

from app.models.page import Badge, Link
from app.services.markdown_tree import image_alt, image_src, iter_nodes, node_text
from app.services.normalizer import host_matches

MAX_BADGES = 5

_IMAGE_KEYWORDS = ("license", "version", "build", "status", "badge")
_LINK_KEYWORDS = ("license", "version", "npm", "badge")
BADGE_HOSTS = ("shields.io", "badgen.net", "badge.fury.io")

# Capitalised words on a short line that name a technology become badges
_TECH_LINE_KEYWORDS = (
    "next",
    "react",
    "vue",
    "angular",
    "typescript",
    "javascript",
    "python",
    "node",
    "tailwind",
    "css",
    "html",
    "license",
    "mit",
    "apache",
)
_TECH_LINE_MAX_CHARS = 100
_TECH_LINE_MAX_WORDS = 8
_TECH_LINE_MAX_LABELS = 4
_CAPITALISED_RE = re.compile(r"^[A-Z][a-z]")
_WORD_PUNCT = ",;:|/()[]!?*"


def _tech_line_labels(text: str) -> List[str]:
    """Return the technology names of a short "React · Tailwind · Vite" style line."""
    if len(text) >= _TECH_LINE_MAX_CHARS or len(text.split()) > _TECH_LINE_MAX_WORDS:
        return []
    words = [word.strip(_WORD_PUNCT) for word in text.split()]
    labels = [
        word
        for word in words
        if len(word) > 2
        and _CAPITALISED_RE.match(word)
        and "." not in word
        and any(keyword in word.lower() for keyword in _TECH_LINE_KEYWORDS)
    ]
    if 2 <= len(labels) <= 5:
        return labels[:_TECH_LINE_MAX_LABELS]
    return []


def extract_badges(tree: SyntaxTreeNode, links: List[Link]) -> List[Badge]:
    """Collect up to :data:`MAX_BADGES` badges, deduplicated by case-insensitive label.

    Badge images come first, then badge-like links.  Only when fewer than two
    were found are short technology lines mined for extra labels.
    """
    badges: List[Badge] = []
    seen: set = set()

    def add(label: str, href=None) -> None:
        key = label.lower()
        if label and key not in seen:
            seen.add(key)
            badges.append(Badge(label=label, href=href or None))

    for image in iter_nodes(tree, "image"):
        alt = image_alt(image).strip()
        if any(keyword in alt.lower() for keyword in _IMAGE_KEYWORDS):
            add(alt, image_src(image))

    for link in links:
        label, href = link.label.lower(), link.href.lower()
        if (
            any(keyword in label or keyword in href for keyword in _LINK_KEYWORDS)
            or host_matches(href, BADGE_HOSTS)
        ):
            add(link.label, link.href)

    if len(badges) < 2:
        for paragraph in iter_nodes(tree, "paragraph"):
            for label in _tech_line_labels(node_text(paragraph)):
                add(label)

    return badges[:MAX_BADGES]
