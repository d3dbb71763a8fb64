"""Tests for section segmentation, canonical titles and topic ordering."""

from app.models.page import Section
from app.services.markdown_tree import parse_markdown
from app.services.sections import canonical_title, order_sections, segment_sections

ROCKET = chr(0x1F680)


def _sections(markdown: str):
    return segment_sections(parse_markdown(markdown))


def _section(section_id: str) -> Section:
    return Section(id=section_id, title=section_id.title(), content="body")


class TestCanonicalTitle:
    def test_synonym_mapped(self):
        assert canonical_title("Installation") == "Install"

    def test_case_insensitive(self):
        assert canonical_title("GETTING STARTED") == "How it works"

    def test_glyphs_stripped_before_lookup(self):
        assert canonical_title(f"{ROCKET} Quick Start") == "Quick Start"

    def test_unknown_heading_kept(self):
        assert canonical_title(f"{ROCKET} Why Foo?") == "Why Foo?"


class TestSegmentSections:
    def test_installation_section(self):
        sections = _sections("# Foo\n\nIntro\n\n## Installation\n\n```bash\nnpm i foo\n```\n")
        assert len(sections) == 1
        section = sections[0]
        assert section.id == "installation"
        assert section.title == "Install"
        assert "```bash\nnpm i foo\n```" in section.content

    def test_preamble_is_not_a_section(self):
        sections = _sections("# Foo\n\nIntro paragraph\n\n## Usage\n\nRun it.")
        assert [s.id for s in sections] == ["usage"]
        assert "Intro paragraph" not in sections[0].content

    def test_deeper_headings_start_sections(self):
        sections = _sections("## Usage\n\nBasics\n\n### Advanced\n\nMore")
        assert [s.id for s in sections] == ["usage", "advanced"]

    def test_empty_section_dropped(self):
        sections = _sections("## Empty\n\n## Usage\n\nText")
        assert [s.id for s in sections] == ["usage"]

    def test_duplicate_ids_suffixed(self):
        sections = _sections("## Usage\n\nOne\n\n## Usage\n\nTwo\n\n## Usage\n\nThree")
        assert [s.id for s in sections] == ["usage", "usage-2", "usage-3"]

    def test_unsluggable_heading_gets_fallback_id(self):
        sections = _sections("## !!!\n\nText")
        assert sections[0].id == "section"

    def test_glyph_heading(self):
        sections = _sections(f"## {ROCKET} Getting Started\n\nRun it")
        assert sections[0].id == "getting-started"
        assert sections[0].title == "How it works"

    def test_content_keeps_lists_and_quotes(self):
        sections = _sections("## Notes\n\n- one\n- two\n\n> careful")
        assert sections[0].content == "- one\n- two\n\n> careful"

    def test_no_headings_no_sections(self):
        assert _sections("Just a paragraph.") == []


class TestOrderSections:
    def test_priority_order(self):
        ordered = order_sections([_section("license"), _section("installation"), _section("faq")])
        assert [s.id for s in ordered] == ["installation", "faq", "license"]

    def test_unmatched_follow_in_document_order(self):
        ordered = order_sections([_section("zeta"), _section("license"), _section("alpha")])
        assert [s.id for s in ordered] == ["license", "zeta", "alpha"]

    def test_id_contained_in_keyword_matches(self):
        ordered = order_sections([_section("contributors"), _section("start")])
        assert [s.id for s in ordered] == ["start", "contributors"]

    def test_every_section_kept_once(self):
        sections = [_section("usage"), _section("usage-2"), _section("roadmap")]
        ordered = order_sections(sections)
        assert sorted(s.id for s in ordered) == sorted(s.id for s in sections)

    def test_empty(self):
        assert order_sections([]) == []
