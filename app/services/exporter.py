"""Static exports of a landing page: a standalone HTML document and a ZIP bundle."""

import io
import json
import logging
import zipfile
from html import escape
from typing import Dict

from app.models.page import PageModel
from app.services.normalizer import generate_slug, make_frontmatter

logger = logging.getLogger(__name__)

_FALLBACK_SLUG = "project"

_STYLE = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif; line-height: 1.6; color: #333; background: #fff; }
    .container { max-width: 1200px; margin: 0 auto; padding: 0 20px; }
    .hero { padding: 80px 20px; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; }
    .hero-content { display: grid; grid-template-columns: 1fr 1fr; gap: 40px; align-items: center; }
    .hero h1 { font-size: 3.5rem; margin-bottom: 1rem; font-weight: 700; }
    .hero p { font-size: 1.25rem; margin-bottom: 2rem; opacity: 0.9; }
    .hero-image { max-width: 100%; border-radius: 12px; box-shadow: 0 20px 60px rgba(0,0,0,0.3); }
    .badges { display: flex; gap: 8px; flex-wrap: wrap; margin-bottom: 2rem; }
    .badge { padding: 4px 12px; background: rgba(255,255,255,0.2); border-radius: 12px; font-size: 0.875rem; }
    .cta-buttons { display: flex; gap: 12px; flex-wrap: wrap; }
    .btn { padding: 12px 24px; border-radius: 6px; text-decoration: none; font-weight: 500; display: inline-block; }
    .btn-primary { background: white; color: #667eea; }
    .btn-secondary { background: transparent; border: 2px solid white; color: white; }
    .stats, .features, .testimonials { padding: 60px 20px; background: #f8f9fa; }
    .stats-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 24px; text-align: center; }
    .stat-value { font-size: 2.5rem; font-weight: 700; color: #667eea; }
    .stat-label { font-size: 0.875rem; color: #666; text-transform: capitalize; }
    .features h2, .testimonials h2 { text-align: center; font-size: 2.5rem; margin-bottom: 3rem; }
    .features-grid, .testimonials-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(300px, 1fr)); gap: 24px; }
    .feature-card, .testimonial-card { background: white; padding: 24px; border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }
    .feature-icon, .feature-number { font-size: 2rem; margin-bottom: 12px; }
    .feature-card h3 { font-size: 1.25rem; margin-bottom: 8px; color: #667eea; }
    .tech-stack { padding: 60px 20px; text-align: center; }
    .tech-badges { display: flex; gap: 12px; justify-content: center; flex-wrap: wrap; }
    .tech-badge { padding: 8px 16px; background: #f0f0f0; border-radius: 6px; font-size: 0.875rem; }
    .testimonial-text { font-style: italic; margin-bottom: 16px; }
    .testimonial-author { font-weight: 600; color: #667eea; }
    .content-section { padding: 60px 20px; }
    .content-section h2 { font-size: 2rem; margin-bottom: 1.5rem; }
    .section-content { max-width: 800px; margin: 0 auto; }
    .section-content pre { background: #f4f4f4; padding: 16px; border-radius: 6px; overflow-x: auto; margin: 1rem 0; }
    footer { text-align: center; padding: 40px 20px; border-top: 1px solid #e0e0e0; color: #666; background: #f8f9fa; }
    @media (max-width: 768px) {
      .hero-content { grid-template-columns: 1fr; text-align: center; }
      .stats-grid { grid-template-columns: repeat(2, 1fr); }
    }
"""


def export_filename(page: PageModel) -> str:
    """``"My Tool"`` → ``"my-tool-landing.html"``."""
    return f"{generate_slug(page.title) or _FALLBACK_SLUG}-landing.html"


def _hero(page: PageModel) -> str:
    badges = "".join(f'<span class="badge">{escape(b.label)}</span>' for b in page.badges or ())
    buttons = [f'<a href="{escape(page.cta.href)}" class="btn btn-primary">{escape(page.cta.label)}</a>']
    buttons.extend(
        f'<a href="{escape(link.href)}" class="btn btn-secondary">{escape(link.label)}</a>'
        for link in page.secondary_links
    )
    image = ""
    if page.hero_image:
        image = (
            f'<div class="hero-image-wrapper"><img src="{escape(page.hero_image.url)}" '
            f'alt="{escape(page.hero_image.alt)}" class="hero-image" /></div>'
        )
    return (
        '<section class="hero"><div class="container"><div class="hero-content">'
        f'<div class="hero-text"><h1>{escape(page.title)}</h1><p>{escape(page.tagline)}</p>'
        + (f'<div class="badges">{badges}</div>' if badges else "")
        + f'<div class="cta-buttons">{"".join(buttons)}</div></div>'
        + image
        + "</div></div></section>"
    )


def _stats(page: PageModel) -> str:
    if not page.stats:
        return ""
    items = "".join(
        f'<div class="stat-item"><div class="stat-value">{escape(stat.value)}</div>'
        f'<div class="stat-label">{escape(stat.label)}</div></div>'
        for stat in page.stats
    )
    return f'<section class="stats"><div class="container"><div class="stats-grid">{items}</div></div></section>'


def _features(page: PageModel) -> str:
    if not page.features:
        return ""
    cards = []
    for idx, feature in enumerate(page.features, start=1):
        marker = (
            f'<div class="feature-icon">{escape(feature.icon)}</div>'
            if feature.icon
            else f'<div class="feature-number">{idx}</div>'
        )
        desc = f"<p>{escape(feature.desc)}</p>" if feature.desc else ""
        cards.append(f'<div class="feature-card">{marker}<h3>{escape(feature.title)}</h3>{desc}</div>')
    return (
        '<section class="features"><div class="container"><h2>Features</h2>'
        f'<div class="features-grid">{"".join(cards)}</div></div></section>'
    )


def _tech_stack(page: PageModel) -> str:
    if not page.tech_stack:
        return ""
    badges = "".join(f'<span class="tech-badge">{escape(tech)}</span>' for tech in page.tech_stack)
    return (
        '<section class="tech-stack"><div class="container"><h2>Built With</h2>'
        f'<div class="tech-badges">{badges}</div></div></section>'
    )


def _testimonials(page: PageModel) -> str:
    if not page.testimonials:
        return ""
    cards = []
    for testimonial in page.testimonials:
        author = (
            f'<p class="testimonial-author">&mdash; {escape(testimonial.author)}</p>'
            if testimonial.author
            else ""
        )
        cards.append(
            f'<div class="testimonial-card"><p class="testimonial-text">{escape(testimonial.quote)}</p>'
            f"{author}</div>"
        )
    return (
        '<section class="testimonials"><div class="container"><h2>What People Say</h2>'
        f'<div class="testimonials-grid">{"".join(cards)}</div></div></section>'
    )


def build_html_document(page: PageModel, rendered_sections: Dict[str, str]) -> str:
    """Return a self-contained HTML landing page.

    Args:
        page: Extracted page model.
        rendered_sections: Section id → HTML, as produced by
            :func:`app.services.renderer.render_sections`.  Sections that
            failed to render are absent from it and are emitted as escaped
            raw markdown inside ``<pre>``.

    Every value taken from the model is HTML-escaped; only the rendered
    section bodies are inserted verbatim.
    """
    sections = "".join(
        f'<section class="content-section" id="{section.id}"><div class="container">'
        f"<h2>{escape(section.title)}</h2>"
        f'<div class="section-content">'
        f"{rendered_sections.get(section.id, f'<pre>{escape(section.content)}</pre>')}"
        "</div></div></section>"
        for section in page.sections
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n'
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{escape(page.title)}</title>\n"
        f"  <style>{_STYLE}  </style>\n"
        "</head>\n<body>\n"
        + _hero(page)
        + _stats(page)
        + _features(page)
        + _tech_stack(page)
        + _testimonials(page)
        + sections
        + '\n<footer><div class="container">'
        f"<p>{escape(page.title)} - {escape(page.tagline)}</p>"
        "</div></footer>\n</body>\n</html>\n"
    )


def build_zip_bundle(page: PageModel, rendered_sections: Dict[str, str]) -> io.BytesIO:
    """Return an in-memory ZIP archive of the page, rewound to the start.

    The archive holds:
    - ``page.json`` – the page model with camelCase keys.
    - ``index.html`` – the standalone page from :func:`build_html_document`.
    - ``content/<section-id>.md`` – one Markdown file per section, with frontmatter.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        payload = page.model_dump(mode="json", by_alias=True, exclude_none=True)
        zf.writestr("page.json", json.dumps(payload, ensure_ascii=False, indent=2))
        zf.writestr("index.html", build_html_document(page, rendered_sections))

        for order, section in enumerate(page.sections, start=1):
            frontmatter = make_frontmatter(section.title, section.id, page.title, order)
            zf.writestr(f"content/{section.id}.md", f"{frontmatter}\n\n{section.content}\n")

    logger.debug("Built export bundle for %r with %d sections", page.title, len(page.sections))
    buffer.seek(0)
    return buffer
