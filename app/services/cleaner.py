"""Post-processing for markdown produced from embedded README HTML."""

import re

from markdownify import markdownify

from app.services.sanitizer import sanitize

# Three or more consecutive newlines (optionally with trailing spaces)
_EXCESS_BLANK_RE = re.compile(r"\n(?:[ \t]*\n){2,}")

# Links whose label is empty or whitespace only: [ ](https://…)
_EMPTY_LINK_RE = re.compile(r"(?<!!)\[\s*\]\([^)]*\)")

# Trailing whitespace at line ends (markdownify's "  " hard breaks included)
_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)


def clean_markdown(text: str) -> str:
    """Normalise *text*: drop empty links, trailing blanks and runs of blank lines."""
    text = _EMPTY_LINK_RE.sub("", text)
    text = _TRAILING_WS_RE.sub("", text)
    text = _EXCESS_BLANK_RE.sub("\n\n", text)
    return text.strip()


def html_to_markdown(html: str) -> str:
    """Convert an embedded HTML block into clean markdown.

    The block is sanitised first so scripts, forms and hidden elements never
    reach the extracted page.
    """
    soup = sanitize(html)
    node = soup.body or soup
    return clean_markdown(markdownify(str(node), heading_style="ATX"))
