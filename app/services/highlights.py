"""Social-proof highlights: headline numbers and quoted testimonials."""

import re
from typing import List

from markdown_it.tree import SyntaxTreeNode

from app.models.page import Stat, Testimonial
from app.services.markdown_tree import iter_nodes, node_text

MAX_STATS = 4
MAX_TESTIMONIALS = 3

# "100+ stars", "50k downloads", "1.2M users"; any following word is the label
_STAT_RE = re.compile(r"(\d+(?:\.\d+)?[kKmMbB]?\+?)\s+(\w+)")

_QUOTE_MIN_CHARS = 20
_QUOTE_MAX_CHARS = 300

# First break between quote and attribution: a newline (optionally followed
# by a dash), a spaced hyphen, or an en/em dash
_ATTRIBUTION_RE = re.compile(r"\s*(?:\n\s*[-–—]*|\s-|[–—])\s*")


def extract_stats(tree: SyntaxTreeNode) -> List[Stat]:
    """Return the first :data:`MAX_STATS` number/word pairs of the document.

    Every paragraph is scanned in document order, list-item paragraphs
    included; the cap applies to the whole document, not per block.
    """
    stats: List[Stat] = []
    for paragraph in iter_nodes(tree, "paragraph"):
        for match in _STAT_RE.finditer(node_text(paragraph)):
            stats.append(Stat(value=match.group(1), label=match.group(2)))
            if len(stats) >= MAX_STATS:
                return stats
    return stats


def split_attribution(text: str) -> Testimonial:
    """Split a quoted passage into its quote and optional author."""
    text = text.strip()
    parts = _ATTRIBUTION_RE.split(text, maxsplit=1)
    quote = parts[0].strip()
    author = parts[1].strip() if len(parts) > 1 else ""
    return Testimonial(quote=quote or text, author=author or None)


def extract_testimonials(tree: SyntaxTreeNode) -> List[Testimonial]:
    """Turn block quotes of a plausible testimonial length into testimonials."""
    testimonials: List[Testimonial] = []
    for quote in iter_nodes(tree, "blockquote"):
        text = node_text(quote).strip()
        if _QUOTE_MIN_CHARS <= len(text) < _QUOTE_MAX_CHARS:
            testimonials.append(split_attribution(text))
            if len(testimonials) >= MAX_TESTIMONIALS:
                break
    return testimonials
