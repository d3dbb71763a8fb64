"""Markdown document tree shared by every extractor.

The tree is markdown-it-py's :class:`~markdown_it.tree.SyntaxTreeNode`.  The
extractors only rely on this closed set of node types:

Block
    ``root``, ``heading``, ``paragraph``, ``bullet_list``, ``ordered_list``,
    ``list_item``, ``blockquote``, ``fence``, ``code_block``, ``table``,
    ``hr``, ``html_block``

Inline
    ``inline``, ``text``, ``strong``, ``em``, ``s``, ``link``, ``image``,
    ``code_inline``, ``softbreak``, ``hardbreak``, ``html_inline``

Top-level raw HTML blocks are converted to markdown before the tree is built,
so centred ``<h1>`` titles and ``<img>`` badges are seen like their markdown
equivalents.
"""

import logging
import re
from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from app.services.cleaner import html_to_markdown

logger = logging.getLogger(__name__)

_md = MarkdownIt("commonmark").enable(["table", "strikethrough"])

_NEWLINE_RE = re.compile(r"\r\n?")

# Containers whose block children are separated by a newline in plain text
_BLOCK_CONTAINERS = frozenset({"root", "blockquote", "bullet_list", "ordered_list", "list_item"})

# Nodes that never contribute plain text
_TEXTLESS = frozenset({"image", "html_inline", "html_block", "fence", "code_block", "hr"})

_LIST_TYPES = frozenset({"bullet_list", "ordered_list"})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _inline_html_blocks(text: str) -> str:
    """Replace every top-level HTML block in *text* with its markdown equivalent."""
    blocks = [
        token
        for token in _md.parse(text)
        if token.type == "html_block" and token.level == 0 and token.map
    ]
    if not blocks:
        return text

    lines = text.split("\n")
    for token in reversed(blocks):
        start, end = token.map
        converted = html_to_markdown(token.content)
        if not converted:
            logger.debug("Dropping HTML block at lines %d-%d: no content", start + 1, end)
        lines[start:end] = ["", converted, ""] if converted else [""]
    return "\n".join(lines)


def parse_markdown(markdown: str) -> SyntaxTreeNode:
    """Parse *markdown* into a document tree.

    Raises:
        ValueError: if *markdown* is not text or the parser rejects it.
    """
    if not isinstance(markdown, str):
        raise ValueError(f"Markdown input must be text, not {type(markdown).__name__}.")

    text = _NEWLINE_RE.sub("\n", markdown)
    try:
        return SyntaxTreeNode(_md.parse(_inline_html_blocks(text)))
    except Exception as exc:
        raise ValueError(f"Could not parse markdown: {exc}") from exc


# ---------------------------------------------------------------------------
# Node accessors
# ---------------------------------------------------------------------------

def iter_nodes(tree: SyntaxTreeNode, *types: str) -> Iterator[SyntaxTreeNode]:
    """Yield the nodes of *tree* whose type is one of *types*, depth-first in document order."""
    for node in tree.walk():
        if node.type in types:
            yield node


def heading_depth(node: SyntaxTreeNode) -> int:
    """Return 1–6 for a heading node, 0 for anything else."""
    if node.type != "heading":
        return 0
    return int(node.tag[1:])


def link_href(node: SyntaxTreeNode) -> str:
    return str(node.attrGet("href") or "")


def image_src(node: SyntaxTreeNode) -> str:
    return str(node.attrGet("src") or "")


def image_alt(node: SyntaxTreeNode) -> str:
    return "".join(node_text(child) for child in node.children)


def fence_language(node: SyntaxTreeNode) -> str:
    """Return the language tag of a fenced code block (first word of its info string)."""
    info = node.info.strip() if node.type == "fence" else ""
    return info.split()[0] if info else ""


def node_text(node: SyntaxTreeNode) -> str:
    """Return the plain text of *node*.

    Markup is dropped, soft and hard breaks become newlines, images and code
    blocks contribute nothing, and the blocks of a container are separated by
    a newline.
    """
    kind = node.type
    if kind in ("text", "code_inline"):
        return node.content
    if kind in ("softbreak", "hardbreak"):
        return "\n"
    if kind in _TEXTLESS:
        return ""
    separator = "\n" if kind in _BLOCK_CONTAINERS else ""
    return separator.join(node_text(child) for child in node.children)


# ---------------------------------------------------------------------------
# Markdown re-serialisation
# ---------------------------------------------------------------------------

def _inline_markdown(node: SyntaxTreeNode) -> str:
    kind = node.type
    if kind == "text":
        return node.content
    if kind == "code_inline":
        return f"{node.markup}{node.content}{node.markup}"
    if kind == "softbreak":
        return "\n"
    if kind == "hardbreak":
        return "\\\n"
    if kind == "html_inline":
        return ""

    inner = "".join(_inline_markdown(child) for child in node.children)
    if kind in ("strong", "em", "s"):
        return f"{node.markup}{inner}{node.markup}"
    if kind == "link":
        title = node.attrGet("title")
        target = f'{link_href(node)} "{title}"' if title else link_href(node)
        return f"[{inner}]({target})"
    if kind == "image":
        return f"![{image_alt(node)}]({image_src(node)})"
    return inner


def _list_markdown(node: SyntaxTreeNode) -> str:
    ordered = node.type == "ordered_list"
    number = int(node.attrGet("start") or 1) if ordered else 0
    lines = []
    for item in node.children:
        if ordered:
            marker = f"{number}{item.markup or '.'}"
            number += 1
        else:
            marker = item.markup or "-"

        tight = all(child.hidden for child in item.children if child.type == "paragraph")
        body = ("\n" if tight else "\n\n").join(
            text for text in (to_markdown(child) for child in item.children) if text
        )
        first, *rest = body.split("\n")
        indent = " " * (len(marker) + 1)
        lines.append(f"{marker} {first}".rstrip())
        lines.extend(indent + line if line else "" for line in rest)
    return "\n".join(lines)


def _table_markdown(node: SyntaxTreeNode) -> str:
    rows = [
        [_inline_markdown(cell).replace("|", "\\|") for cell in row.children]
        for part in node.children
        for row in part.children
    ]
    if not rows:
        return ""
    lines = ["| " + " | ".join(rows[0]) + " |", "|" + " --- |" * len(rows[0])]
    lines.extend("| " + " | ".join(row) + " |" for row in rows[1:])
    return "\n".join(lines)


def to_markdown(node: SyntaxTreeNode) -> str:
    """Re-serialise one block node as markdown.

    Fenced code keeps its fence and language tag, lists keep their bullet
    or number markers, block quotes keep the ``>`` marker and paragraphs keep
    their inline emphasis, links and images.
    """
    kind = node.type
    if kind == "paragraph":
        return _inline_markdown(node)
    if kind == "heading":
        return f"{'#' * heading_depth(node)} {_inline_markdown(node)}"
    if kind in ("fence", "code_block"):
        fence = node.markup if kind == "fence" and node.markup else "```"
        code = node.content.rstrip("\n")
        return f"{fence}{fence_language(node)}\n{code}\n{fence}"
    if kind in _LIST_TYPES:
        return _list_markdown(node)
    if kind == "blockquote":
        body = blocks_to_markdown(node.children)
        return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))
    if kind == "table":
        return _table_markdown(node)
    if kind == "hr":
        return "---"
    if kind == "html_block":
        return ""
    return node_text(node)


def blocks_to_markdown(nodes: Iterable[SyntaxTreeNode]) -> str:
    """Re-serialise a run of block nodes, separated by blank lines."""
    return "\n\n".join(text for text in (to_markdown(node) for node in nodes) if text.strip())
