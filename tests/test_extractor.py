"""End-to-end tests for app.services.extractor.extract."""

import pytest

from app.models.page import Feature, HeroImage, Link
from app.services.extractor import DEFAULT_TAGLINE, DEFAULT_TITLE, extract

README = "# Foo\n\nDoes bar.\n\n## Features\n\n- **Fast** - very fast\n\n## Installation\n\n```bash\nnpm i foo\n```\n"

FULL_README = """\
<h1 align="center">Foo</h1>
<p align="center">A tiny tool that does bar.</p>

![MIT License](https://img.shields.io/badge/license-MIT-blue.svg)

[Repo](https://github.com/foo/foo) | [Twitter](https://twitter.com/foo) | [Live demo](https://foo.dev)

Used by 10k+ developers.

## License

MIT

## Installation

```bash
npm install foo
```

## FAQ

> Foo made our builds twice as fast.
> -- Jane Doe
"""


class TestEndToEnd:
    def test_minimal_readme(self):
        page = extract(README)
        assert page.title == "Foo"
        assert page.tagline == "Does bar."
        assert page.features == (Feature(title="Fast", desc="very fast"),)
        assert page.cta == Link(label="Get Started", href="#installation")

        installation = next(s for s in page.sections if s.id == "installation")
        assert installation.title == "Install"
        assert "```bash\nnpm i foo\n```" in installation.content

    def test_full_readme(self):
        page = extract(FULL_README)
        assert page.title == "Foo"
        assert page.tagline == "A tiny tool that does bar."
        assert page.cta == Link(label="Live demo", href="https://foo.dev")
        assert [link.label for link in page.secondary_links] == ["Repo", "Twitter"]
        assert [s.id for s in page.sections] == ["installation", "faq", "license"]
        assert page.badges[0].label == "MIT License"
        assert page.hero_image.url == "https://img.shields.io/badge/license-MIT-blue.svg"
        assert page.stats[0].value == "10k+"
        assert page.testimonials[0].author == "Jane Doe"
        assert page.tech_stack == ("bash",)

    def test_idempotent(self):
        assert extract(FULL_README) == extract(FULL_README)


class TestTitle:
    def test_first_paragraph_without_h1(self):
        assert extract("Just a paragraph.\n\n## Usage\n\nRun it.").title == "Just a paragraph."

    def test_placeholder_for_empty_input(self):
        assert extract("").title == DEFAULT_TITLE

    def test_first_h1_wins(self):
        assert extract("## Intro\n\ntext\n\n# Real Title").title == "Real Title"


class TestTagline:
    def test_placeholder(self):
        assert extract("# Foo").tagline == DEFAULT_TAGLINE

    def test_blockquote_after_title(self):
        assert extract("# Foo\n\n> A quoted pitch\n\nMore text.").tagline == "A quoted pitch"

    def test_long_paragraph_skipped(self):
        long_text = "word " * 50
        page = extract(f"# Foo\n\n{long_text}\n\nShort pitch.")
        assert page.tagline == "Short pitch."

    def test_truncated_to_160(self):
        page = extract("# Foo\n\n" + "a" * 180)
        assert len(page.tagline) == 160
        assert page.tagline.endswith("...")

    def test_never_longer_than_160(self):
        for text in ("", "# T", "x" * 199, "# T\n\n" + "y" * 199):
            assert len(extract(text).tagline) <= 160


class TestHeroImage:
    def test_first_image_after_title_wins(self):
        page = extract(
            "# Foo\n\n![logo](https://x.io/logo.png)\n\n![Screenshot](https://x.io/shot.png)"
        )
        assert page.hero_image == HeroImage(url="https://x.io/logo.png", alt="logo")

    def test_default_alt(self):
        assert extract("# Foo\n\n![](https://x.io/a.png)").hero_image.alt == "Hero image"

    def test_image_before_title_ignored(self):
        assert extract("![a](https://x.io/a.png)\n\n# Foo").hero_image is None


class TestAssembler:
    def test_empty_optionals_are_none(self):
        page = extract("# Foo\n\nBar.")
        assert page.badges is None
        assert page.hero_image is None
        assert page.stats is None
        assert page.tech_stack is None
        assert page.testimonials is None

    def test_serialised_with_camel_case_and_omissions(self):
        data = extract(README).model_dump(by_alias=True, exclude_none=True)
        assert "secondaryLinks" in data
        assert "badges" not in data
        assert data["techStack"] == ("bash",)

    def test_cta_never_in_secondary_links(self):
        page = extract("# Foo\n\n[Live demo](https://foo.dev) [Demo](https://foo.dev)")
        assert page.cta.href == "https://foo.dev"
        assert page.secondary_links == ()

    def test_section_ids_unique(self):
        page = extract("## Usage\n\na\n\n## Usage\n\nb\n\n## usage\n\nc")
        ids = [s.id for s in page.sections]
        assert len(ids) == len(set(ids))

    def test_rejects_non_text(self):
        with pytest.raises(ValueError):
            extract(None)
