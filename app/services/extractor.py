import logging
from typing import List, Optional

from markdown_it.tree import SyntaxTreeNode

from app.models.page import (
    Badge,
    Feature,
    HeroImage,
    Link,
    PageModel,
    Section,
    Stat,
    Testimonial,
)
from app.services.badges import extract_badges
from app.services.detector import detect_tech_stack
from app.services.features import extract_features
from app.services.highlights import extract_stats, extract_testimonials
from app.services.links import curate_secondary_links, resolve_cta
from app.services.markdown_tree import (
    heading_depth,
    image_alt,
    image_src,
    iter_nodes,
    link_href,
    node_text,
    parse_markdown,
)
from app.services.normalizer import truncate
from app.services.sections import order_sections, segment_sections

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Project"
DEFAULT_TAGLINE = "A great project that solves real problems."
DEFAULT_HERO_ALT = "Hero image"

# A pitch line is expected to be shorter than this
_TAGLINE_CANDIDATE_MAX = 200
_TAGLINE_MAX = 160

# Alt text that marks an image as a screenshot or logo.  The first image after
# the title is used either way; see _extract_hero_image.
_HERO_ALT_KEYWORDS = ("screenshot", "demo", "preview", "logo", "hero", "banner")


def _extract_title(tree: SyntaxTreeNode) -> str:
    for heading in iter_nodes(tree, "heading"):
        if heading_depth(heading) == 1:
            text = node_text(heading).strip()
            if text:
                return text
    for paragraph in iter_nodes(tree, "paragraph"):
        text = node_text(paragraph).strip()
        if text:
            return text
    return DEFAULT_TITLE


def _extract_tagline(tree: SyntaxTreeNode) -> str:
    """Return the one-line pitch: the first short paragraph or quote after the title.

    Falls back to the first short paragraph anywhere, then to
    :data:`DEFAULT_TAGLINE`.  The result is cut to 160 characters.
    """
    tagline = ""
    found_h1 = False
    for node in tree.children:
        depth = heading_depth(node)
        if depth == 1:
            found_h1 = True
            continue
        if not found_h1:
            continue
        if depth >= 2:
            break
        if node.type in ("paragraph", "blockquote"):
            text = node_text(node).strip()
            if text and len(text) < _TAGLINE_CANDIDATE_MAX:
                tagline = text
                break

    if not tagline:
        for paragraph in iter_nodes(tree, "paragraph"):
            text = node_text(paragraph).strip()
            if text and len(text) < _TAGLINE_CANDIDATE_MAX:
                tagline = text
                break

    return truncate(tagline, _TAGLINE_MAX) if tagline else DEFAULT_TAGLINE


def _extract_links(tree: SyntaxTreeNode) -> List[Link]:
    """Return every labelled hyperlink in document order, duplicates included."""
    links: List[Link] = []
    for node in iter_nodes(tree, "link"):
        label = node_text(node).strip()
        href = link_href(node)
        if label and href:
            links.append(Link(label=label, href=href))
    return links


def _extract_hero_image(tree: SyntaxTreeNode) -> Optional[HeroImage]:
    """Return the first image after the first top-level title.

    The scan stops at the first image it meets: an earlier plain image wins
    over a later one whose alt text looks like a screenshot or logo.
    """
    found_h1 = False
    for node in tree.walk():
        if heading_depth(node) == 1:
            found_h1 = True
            continue
        if not found_h1 or node.type != "image":
            continue

        url = image_src(node)
        if not url:
            return None
        alt = image_alt(node).strip()
        if not any(keyword in alt.lower() for keyword in _HERO_ALT_KEYWORDS):
            logger.debug("Hero image %s has no screenshot/logo alt text", url)
        return HeroImage(url=url, alt=alt or DEFAULT_HERO_ALT)
    return None


def _build_page_model(
    title: str,
    tagline: str,
    cta: Link,
    secondary_links: List[Link],
    features: List[Feature],
    sections: List[Section],
    badges: List[Badge],
    hero_image: Optional[HeroImage],
    stats: List[Stat],
    tech_stack: List[str],
    testimonials: List[Testimonial],
) -> PageModel:
    """Assemble a :class:`PageModel`; empty optional collections are omitted."""
    return PageModel(
        title=title,
        tagline=tagline,
        cta=cta,
        secondary_links=tuple(secondary_links),
        features=tuple(features),
        sections=tuple(sections),
        badges=tuple(badges) or None,
        hero_image=hero_image,
        stats=tuple(stats) or None,
        tech_stack=tuple(tech_stack) or None,
        testimonials=tuple(testimonials) or None,
    )


def extract(markdown: str) -> PageModel:
    """Extract a landing-page model from README *markdown*.

    Deterministic for a given input.  Every field has a fallback, so any
    text the parser accepts yields a valid :class:`PageModel`.

    Raises:
        ValueError: if the markdown cannot be parsed.
    """
    tree = parse_markdown(markdown)

    links = _extract_links(tree)
    sections = segment_sections(tree)
    cta = resolve_cta(links, sections)

    page = _build_page_model(
        title=_extract_title(tree),
        tagline=_extract_tagline(tree),
        cta=cta,
        secondary_links=curate_secondary_links(links, cta),
        features=extract_features(tree),
        sections=order_sections(sections),
        badges=extract_badges(tree, links),
        hero_image=_extract_hero_image(tree),
        stats=extract_stats(tree),
        tech_stack=detect_tech_stack(tree),
        testimonials=extract_testimonials(tree),
    )
    logger.debug(
        "Extracted page %r: %d sections, %d features, %d links",
        page.title,
        len(page.sections),
        len(page.features),
        len(links),
    )
    return page
