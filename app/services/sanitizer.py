"""Clean-up of raw HTML blocks embedded in README files.

READMEs use HTML for layout that markdown cannot express: centred titles,
``<picture>`` logos with light/dark variants, badge rows and collapsible
``<details>``.  :func:`sanitize` keeps that content and drops everything that
must never reach a generated page.
"""

import re

from bs4 import BeautifulSoup, Comment, Tag

# Subtrees that are never README content
_DROP_TAGS = (
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "link",
    "meta",
    "svg",
    "canvas",
    "template",
    "form",
    "button",
    "input",
    "select",
    "textarea",
)

_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)

# Inline CSS and event handlers
_SCRIPTING_ATTR_RE = re.compile(r"^(?:style|on\w+)$", re.IGNORECASE)

_UNSAFE_URL_RE = re.compile(r"^\s*(?:javascript|vbscript|data):", re.IGNORECASE)
_URL_ATTRS = ("href", "src")

# id/class fragments of README chrome: generated tables of contents, sponsor
# walls and analytics pixels
README_NOISE = (
    "toc",
    "table-of-contents",
    "sponsor",
    "advertisement",
    "tracking",
    "cookie",
    "hidden",
)


def _is_noise(tag: Tag) -> bool:
    names = [str(tag.get("id") or "")] + list(tag.get("class") or ())
    return any(fragment in name.lower() for name in names if name for fragment in README_NOISE)


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden") or str(tag.get("aria-hidden", "")).lower() == "true":
        return True
    return bool(_HIDDEN_STYLE_RE.search(str(tag.get("style", ""))))


def _collapse_pictures(soup: BeautifulSoup) -> None:
    """Replace each ``<picture>`` with its fallback ``<img>``, dropping theme variants."""
    for picture in soup.find_all("picture"):
        img = picture.find("img")
        if img is None:
            picture.decompose()
        else:
            picture.replace_with(img.extract())


def _drop_empty_anchors(soup: BeautifulSoup) -> None:
    """Remove ``<a name="readme-top"></a>`` style jump targets."""
    for anchor in soup.find_all("a"):
        if not anchor.get("href") and not anchor.get_text(strip=True) and anchor.find("img") is None:
            anchor.decompose()


def _scrub_attrs(tag: Tag) -> None:
    for attr in [name for name in tag.attrs if _SCRIPTING_ATTR_RE.match(name)]:
        del tag[attr]
    for attr in _URL_ATTRS:
        if _UNSAFE_URL_RE.match(str(tag.get(attr, ""))):
            del tag[attr]


def sanitize(html: str) -> BeautifulSoup:
    """Parse an embedded HTML block and strip everything unsafe or decorative.

    Returns the cleaned BeautifulSoup tree.  Scripting, forms, comments,
    hidden elements, README chrome, inline styles and event handlers and
    ``javascript:``-style URLs are gone from it.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_DROP_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if _is_noise(tag) or _is_hidden(tag):
            tag.decompose()
        else:
            _scrub_attrs(tag)

    _collapse_pictures(soup)
    _drop_empty_anchors(soup)
    return soup
