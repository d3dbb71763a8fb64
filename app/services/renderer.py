"""Per-section HTML rendering for the preview and export surfaces."""

import asyncio
import logging
from typing import Dict, Iterable, Optional

from markdown_it import MarkdownIt

from app.models.page import Section

logger = logging.getLogger(__name__)

# Raw HTML in README sections is never passed through to the page
_md = (
    MarkdownIt("commonmark")
    .enable(["table", "strikethrough"])
    .disable("html_block")
    .disable("html_inline")
)


def render_section(markdown: str) -> str:
    return _md.render(markdown)


async def _try_render(section: Section) -> Optional[str]:
    try:
        return await asyncio.to_thread(render_section, section.content)
    except Exception as exc:
        logger.warning("Rendering section %s failed (%s)", section.id, exc)
        return None


async def render_sections(sections: Iterable[Section]) -> Dict[str, str]:
    """Render every section body to HTML, keyed by section id.

    Sections are rendered concurrently.  A section that fails to render is
    left out of the mapping, so every value is safe markup; callers decide
    how to present the missing ids.
    """
    sections = list(sections)
    rendered = await asyncio.gather(*(_try_render(section) for section in sections))
    return {section.id: html for section, html in zip(sections, rendered) if html is not None}
