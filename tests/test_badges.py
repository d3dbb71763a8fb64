"""Tests for app.services.badges.extract_badges."""

from app.models.page import Badge, Link
from app.services.badges import extract_badges
from app.services.markdown_tree import parse_markdown


def _badges(markdown: str, links=()):
    return extract_badges(parse_markdown(markdown), list(links))


class TestImageBadges:
    def test_license_badge_image(self):
        badges = _badges("![MIT License](https://img.shields.io/badge/license-MIT-blue.svg)")
        assert badges == [
            Badge(label="MIT License", href="https://img.shields.io/badge/license-MIT-blue.svg")
        ]

    def test_duplicate_labels_case_insensitive(self):
        badges = _badges(
            "![MIT License](https://a.io/1.svg) ![mit license](https://a.io/2.svg)"
        )
        assert len(badges) == 1
        assert badges[0].label == "MIT License"

    def test_unrelated_image_ignored(self):
        assert _badges("![Screenshot](https://a.io/shot.png)") == []


class TestLinkBadges:
    def test_npm_link(self):
        links = [Link(label="npm", href="https://www.npmjs.com/package/foo")]
        assert _badges("", links) == [Badge(label="npm", href="https://www.npmjs.com/package/foo")]

    def test_badge_host_link(self):
        links = [Link(label="coverage", href="https://img.shields.io/codecov/c/foo")]
        assert _badges("", links)[0].label == "coverage"

    def test_plain_link_ignored(self):
        assert _badges("", [Link(label="Docs", href="https://docs.foo.io")]) == []


class TestTechLineBadges:
    def test_short_tech_line(self):
        badges = _badges("Built with React, Tailwind and TypeScript")
        assert [b.label for b in badges] == ["React", "Tailwind", "TypeScript"]
        assert all(b.href is None for b in badges)

    def test_single_match_ignored(self):
        assert _badges("Written in Python") == []

    def test_long_line_ignored(self):
        line = "React and Tailwind " + "with plenty of other words " * 5
        assert _badges(line) == []

    def test_skipped_when_two_badges_found(self):
        markdown = (
            "![build status](https://a.io/b.svg) ![version](https://a.io/v.svg)\n\n"
            "Built with React, Tailwind and TypeScript"
        )
        assert [b.label for b in _badges(markdown)] == ["build status", "version"]


class TestBadgeCap:
    def test_capped_at_five(self):
        images = " ".join(f"![badge {n}](https://a.io/{n}.svg)" for n in range(7))
        assert len(_badges(images)) == 5
