"""Tests for the static HTML and ZIP exports."""

import json
import zipfile

from app.models.page import Link, PageModel, Section
from app.services.exporter import build_html_document, build_zip_bundle, export_filename
from app.services.extractor import extract

README = "# Foo\n\nDoes bar.\n\n## Features\n\n- **Fast** - very fast\n\n## Installation\n\n```bash\nnpm i foo\n```\n"


def _page(**overrides) -> PageModel:
    fields = dict(
        title="Foo",
        tagline="Does bar.",
        cta=Link(label="Get Started", href="#installation"),
        sections=(Section(id="installation", title="Install", content="npm i foo"),),
    )
    fields.update(overrides)
    return PageModel(**fields)


class TestExportFilename:
    def test_slugged_title(self):
        assert export_filename(_page(title="My Tool")) == "my-tool-landing.html"

    def test_unsluggable_title(self):
        assert export_filename(_page(title="!!!")) == "project-landing.html"


class TestBuildHtmlDocument:
    def test_document_shell(self):
        html = build_html_document(_page(), {})
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Foo</title>" in html
        assert "</html>" in html

    def test_literals_escaped(self):
        page = _page(
            title="<b>Foo</b>",
            cta=Link(label="Go & see", href='https://foo.dev/?a="1"'),
        )
        html = build_html_document(page, {})
        assert "<b>Foo</b>" not in html
        assert "&lt;b&gt;Foo&lt;/b&gt;" in html
        assert "Go &amp; see" in html
        assert "&quot;1&quot;" in html

    def test_rendered_section_inserted(self):
        html = build_html_document(_page(), {"installation": "<p>npm i foo</p>"})
        assert '<section class="content-section" id="installation">' in html
        assert "<h2>Install</h2>" in html
        assert "<p>npm i foo</p>" in html

    def test_missing_render_falls_back_to_escaped_markdown(self):
        page = _page(sections=(Section(id="usage", title="Usage", content="a < b"),))
        html = build_html_document(page, {})
        assert "<pre>a &lt; b</pre>" in html

    def test_optional_blocks_omitted(self):
        html = build_html_document(_page(), {})
        assert 'class="stats"' not in html
        assert 'class="testimonials"' not in html
        assert "hero-image" not in html.split("</style>")[1]

    def test_features_block(self):
        html = build_html_document(extract(README), {})
        assert "<h2>Features</h2>" in html
        assert "<h3>Fast</h3>" in html
        assert "<p>very fast</p>" in html


class TestBuildZipBundle:
    def test_archive_contents(self):
        page = extract(README)
        with zipfile.ZipFile(build_zip_bundle(page, {})) as zf:
            names = set(zf.namelist())
            assert {"page.json", "index.html", "content/installation.md"} <= names

            data = json.loads(zf.read("page.json"))
            assert data["title"] == "Foo"
            assert data["cta"] == {"label": "Get Started", "href": "#installation"}
            assert "secondaryLinks" in data
            assert "heroImage" not in data

            md = zf.read("content/installation.md").decode("utf-8")
            assert md.startswith('---\ntitle: "Install"\nid: "installation"\npage: "Foo"\n')
            assert "```bash\nnpm i foo\n```" in md

    def test_section_order_in_frontmatter(self):
        page = extract(README)
        with zipfile.ZipFile(build_zip_bundle(page, {})) as zf:
            orders = {
                s.id: f"order: {n}" in zf.read(f"content/{s.id}.md").decode("utf-8")
                for n, s in enumerate(page.sections, start=1)
            }
        assert all(orders.values())
