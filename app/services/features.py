"""Feature list extraction.

Looks for a "Features"-style heading followed closely by a list and turns
each list item into a feature card.  READMEs without such a list fall back to
their bold phrases.
"""

import logging
import re
from typing import List, Optional

from markdown_it.tree import SyntaxTreeNode

from app.models.page import Feature
from app.services.markdown_tree import heading_depth, iter_nodes, node_text

logger = logging.getLogger(__name__)

MAX_FEATURES = 6
MAX_BOLD_FEATURES = 5

# A heading containing any of these (case-insensitive) introduces the feature list
FEATURE_HEADING_KEYWORDS = (
    "feature",
    "what's",
    "why",
    "highlight",
    "benefit",
    "advantage",
    "capability",
    "key",
    chr(0x2728),  # sparkles
)

# Number of sibling nodes after the heading searched for the list
_LIST_LOOKAHEAD = 4

# Leading pictograph used as the feature icon (optionally followed by VS16)
_ICON_RE = re.compile(
    "^((?:[{}-{}]|[{}-{}]|[{}-{}]){}?)".format(
        chr(0x1F300), chr(0x1F9FF),
        chr(0x2600), chr(0x26FF),
        chr(0x2700), chr(0x27BF),
        chr(0xFE0F),
    )
)
_LIST_MARKER_RE = re.compile(r"^[-*+]\s+")
# Title/description separator: a spaced hyphen, an en dash or an em dash. Hyphenated words are not split.
_DASH_SPLIT_RE = re.compile(r"^(.+?)(?:\s+-\s+|\s*[–—]\s*)(.+)$")
_COLON_SPLIT_RE = re.compile(r":\s+")
_BOLD_WRAPPER_RE = re.compile(r"^\*\*|\*\*$")


def _strip_bold(text: str) -> str:
    return _BOLD_WRAPPER_RE.sub("", text).strip()


def _find_feature_list(tree: SyntaxTreeNode) -> Optional[SyntaxTreeNode]:
    """Return the list following the first feature heading, if any.

    Only the first matching heading is considered; the search for its list
    stops at the next heading of depth two or less.
    """
    children = tree.children
    for index, node in enumerate(children):
        if node.type != "heading":
            continue
        text = node_text(node).lower()
        if not any(keyword in text for keyword in FEATURE_HEADING_KEYWORDS):
            continue

        for candidate in children[index + 1:index + 1 + _LIST_LOOKAHEAD]:
            if candidate.type in ("bullet_list", "ordered_list"):
                return candidate
            if candidate.type == "heading" and heading_depth(candidate) <= 2:
                break
        logger.debug("Feature heading %r has no adjacent list", text)
        return None
    return None


def _item_text(item: SyntaxTreeNode) -> str:
    """Plain text of a list item, excluding any nested list.

    Nested items are visited on their own by :func:`extract_features`.
    """
    parts = [
        node_text(child)
        for child in item.children
        if child.type not in ("bullet_list", "ordered_list")
    ]
    return " ".join(" ".join(parts).split())


def parse_feature_item(text: str) -> Optional[Feature]:
    """Turn one list item's text into a :class:`Feature`, or ``None`` if it is blank."""
    if not text.strip():
        return None

    icon = None
    match = _ICON_RE.match(text)
    if match:
        icon = match.group(1)
        text = text[match.end():]
    clean = _LIST_MARKER_RE.sub("", text.strip()).strip()

    dash = _DASH_SPLIT_RE.match(clean)
    if dash:
        title, desc = dash.group(1), dash.group(2)
    else:
        parts = _COLON_SPLIT_RE.split(clean)
        title = parts[0] or clean[:60]
        desc = ": ".join(parts[1:]).strip()

    title = _strip_bold(title)
    desc = _strip_bold(desc) if desc else ""
    if not title:
        return None
    return Feature(title=title, desc=desc or None, icon=icon)


def _bold_features(tree: SyntaxTreeNode) -> List[Feature]:
    features: List[Feature] = []
    for paragraph in iter_nodes(tree, "paragraph"):
        for strong in iter_nodes(paragraph, "strong"):
            if len(features) >= MAX_BOLD_FEATURES:
                return features
            text = node_text(strong).strip()
            if text:
                features.append(Feature(title=text))
    return features


def extract_features(tree: SyntaxTreeNode) -> List[Feature]:
    """Return up to :data:`MAX_FEATURES` features in discovery order."""
    features: List[Feature] = []

    feature_list = _find_feature_list(tree)
    if feature_list is not None:
        for item in iter_nodes(feature_list, "list_item"):
            feature = parse_feature_item(_item_text(item))
            if feature:
                features.append(feature)

    if not features:
        features = _bold_features(tree)

    return features[:MAX_FEATURES]
