"""Technology detection from README prose and code blocks.

:func:`detect_tech_stack` reports the platforms, languages and tools a README
mentions, for the "Built with" strip of the landing page.

Sources, in discovery order
---------------------------
Paragraph prose
    Each paragraph is lower-cased and matched against :data:`TECH_KEYWORDS`
    as words, optionally followed by a ``js`` or ``.js`` suffix.  So
    ``"NodeJS"`` and ``"Node.js"`` count as ``node``, while ``"good"`` does
    not count as ``go`` and ``"javascript"`` does not count as ``java``.

Code blocks
    The declared language tag of every fenced block (```` ```bash ````)
    is added verbatim, lower-cased.
"""

import re
from typing import List

from markdown_it.tree import SyntaxTreeNode

from app.services.markdown_tree import fence_language, iter_nodes, node_text

MAX_TECH = 8

TECH_KEYWORDS = (
    "react",
    "vue",
    "angular",
    "next",
    "typescript",
    "javascript",
    "python",
    "node",
    "rust",
    "go",
    "java",
    "php",
    "ruby",
    "swift",
    "kotlin",
    "docker",
    "kubernetes",
    "aws",
    "gcp",
    "azure",
    "postgresql",
    "mysql",
    "mongodb",
    "redis",
    "tailwind",
    "bootstrap",
    "sass",
    "webpack",
    "vite",
)

_KEYWORD_PATTERNS = tuple(
    (keyword, re.compile(rf"\b{re.escape(keyword)}(?:\.?js)?\b")) for keyword in TECH_KEYWORDS
)


def detect_tech_stack(tree: SyntaxTreeNode) -> List[str]:
    """Return up to :data:`MAX_TECH` distinct lower-case technology names.

    Args:
        tree: Parsed README.

    Returns:
        Technology names in the order they were first seen.
    """
    found: List[str] = []

    for paragraph in iter_nodes(tree, "paragraph"):
        text = node_text(paragraph).lower()
        for keyword, pattern in _KEYWORD_PATTERNS:
            if keyword not in found and pattern.search(text):
                found.append(keyword)

    for block in iter_nodes(tree, "fence"):
        language = fence_language(block).lower()
        if language and language not in found:
            found.append(language)

    return found[:MAX_TECH]
