"""Section segmentation and topic-priority ordering.

A README is cut into sections at every top-level heading of depth two or
more; everything before the first such heading (title, tagline, badges,
intro prose) belongs to the hero area and is not a section.
"""

import logging
from types import MappingProxyType
from typing import List, Tuple

from markdown_it.tree import SyntaxTreeNode

from app.models.page import Section
from app.services.markdown_tree import blocks_to_markdown, heading_depth, node_text
from app.services.normalizer import generate_slug, strip_glyphs

logger = logging.getLogger(__name__)

# Canonical titles keyed by the lower-cased, glyph-stripped heading text
SECTION_TITLES = MappingProxyType(
    {
        "usage": "How it works",
        "quickstart": "How it works",
        "getting started": "How it works",
        "how it works": "How it works",
        "installation": "Install",
        "setup": "Install",
        "quick start": "Quick Start",
        "project structure": "Project Structure",
        "idea categories": "Idea Categories",
        "tech stack": "Tech Stack",
        "configuration": "Configuration",
        "options": "Configuration",
        "roadmap": "Roadmap",
        "todo": "Roadmap",
        "contributing": "Contributing",
        "license": "License",
        "faq": "FAQ",
        "connect": "Connect",
        "live demo": "Live Demo",
        "acknowledgments": "Acknowledgments",
    }
)

# Topic precedence used to reorder sections along a visitor's journey
SECTION_PRIORITY = (
    "how-it-works",
    "quick-start",
    "installation",
    "getting-started",
    "usage",
    "examples",
    "demo",
    "configuration",
    "api",
    "documentation",
    "tech-stack",
    "project-structure",
    "contributing",
    "roadmap",
    "faq",
    "troubleshooting",
    "changelog",
    "acknowledgments",
    "license",
    "connect",
)

_FALLBACK_ID = "section"


def _is_section_heading(node: SyntaxTreeNode) -> bool:
    return heading_depth(node) >= 2


def canonical_title(heading: str) -> str:
    """Map *heading* to its canonical section title, or return it glyph-stripped."""
    stripped = strip_glyphs(heading)
    return SECTION_TITLES.get(stripped.lower(), stripped)


def _unique_id(base: str, taken: set) -> str:
    candidate = base or _FALLBACK_ID
    suffix = 2
    while candidate in taken:
        candidate = f"{base or _FALLBACK_ID}-{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


def segment_sections(tree: SyntaxTreeNode) -> List[Section]:
    """Split the top level of *tree* into sections, in document order.

    Sections whose reconstructed content is blank are dropped.  Ids are the
    slug of the heading text, made unique with ``-2``, ``-3`` … suffixes.
    """
    chunks: List[Tuple[str, List[SyntaxTreeNode]]] = []
    for node in tree.children:
        if _is_section_heading(node):
            chunks.append((node_text(node).strip(), []))
        elif chunks:
            chunks[-1][1].append(node)

    sections: List[Section] = []
    taken: set = set()
    for heading, nodes in chunks:
        content = blocks_to_markdown(nodes).strip()
        if not content:
            logger.debug("Dropping empty section %r", heading)
            continue
        sections.append(
            Section(
                id=_unique_id(generate_slug(heading), taken),
                title=canonical_title(heading) or heading,
                content=content,
            )
        )
    return sections


def _matches(section_id: str, keyword: str) -> bool:
    return keyword in section_id or section_id in keyword


def order_sections(sections: List[Section]) -> List[Section]:
    """Reorder *sections* by :data:`SECTION_PRIORITY`.

    For each keyword in turn, the first section not yet placed whose id
    contains, or is contained in, the keyword is appended.  This is a greedy
    assignment rather than a sort: an earlier keyword claims a section even
    when a later keyword would match it more closely.  Unmatched sections
    follow in document order.
    """
    placed: set = set()
    ordered: List[Section] = []

    for keyword in SECTION_PRIORITY:
        for index, section in enumerate(sections):
            if index not in placed and _matches(section.id, keyword):
                ordered.append(section)
                placed.add(index)
                break

    ordered.extend(section for index, section in enumerate(sections) if index not in placed)
    return ordered
