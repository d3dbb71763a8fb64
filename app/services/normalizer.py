"""Text normalisation utilities: glyph stripping, slug generation, host labels, frontmatter."""

import re
import unicodedata
from typing import Optional
from urllib.parse import urlparse

# Pictographic code points used as decorative heading / list prefixes.
_GLYPH_RANGES = (
    (0x1F000, 0x1FAFF),  # emoji and pictographs
    (0x2190, 0x21FF),  # arrows
    (0x2300, 0x23FF),  # misc technical
    (0x2600, 0x27BF),  # misc symbols, dingbats
    (0x2B00, 0x2BFF),  # misc symbols and arrows
    (0xFE0F, 0xFE0F),  # emoji variation selector
    (0x200D, 0x200D),  # zero-width joiner
)
_GLYPH_RE = re.compile(
    "[" + "".join(f"{chr(lo)}-{chr(hi)}" for lo, hi in _GLYPH_RANGES) + "]"
)


def strip_glyphs(text: str) -> str:
    """Remove decorative pictographs from *text* and trim surrounding whitespace."""
    return _GLYPH_RE.sub("", text).strip()


def generate_slug(text: str) -> str:
    """Return a URL-fragment-safe slug for *text*.

    The slug is lowercased and ASCII-only; whitespace runs become single
    hyphens and every other non-alphanumeric character is dropped, so
    ``"What's New?"`` becomes ``"whats-new"``.  Returns an empty string when
    nothing sluggable remains.
    """
    slug = unicodedata.normalize("NFKD", strip_glyphs(text))
    slug = slug.encode("ascii", "ignore").decode("ascii")

    slug = re.sub(r"\s+", "-", slug.lower().strip())
    return re.sub(r"[^a-z0-9-]", "", slug)


def host_label(url: str) -> str:
    """Return the host of *url* without a leading ``www.``, or *url* itself if it has none."""
    host = urlparse(url).hostname or ""
    if host.startswith("www."):
        host = host[len("www."):]
    return host or url


def host_matches(url: str, domains) -> Optional[str]:
    """Return the entry of *domains* that *url*'s host equals or is a subdomain of."""
    host = (urlparse(url).hostname or "").lower()
    if not host:
        return None
    for domain in domains:
        if host == domain or host.endswith("." + domain):
            return domain
    return None


def truncate(text: str, limit: int, ellipsis: str = "...") -> str:
    """Cut *text* to at most *limit* characters, ending in *ellipsis* when shortened."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ellipsis)] + ellipsis


def make_frontmatter(title: str, section_id: str, page_title: str, order: int) -> str:
    """Return a YAML frontmatter block for one exported section file."""
    lines = [
        "---",
        f'title: "{_escape_yaml(title)}"',
        f'id: "{section_id}"',
        f'page: "{_escape_yaml(page_title)}"',
        f"order: {order}",
        "---",
    ]
    return "\n".join(lines)


def _escape_yaml(value: str) -> str:
    """Escape characters that would break inline double-quoted YAML strings."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
