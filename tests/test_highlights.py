"""Tests for stat and testimonial extraction."""

from app.models.page import Stat, Testimonial
from app.services.highlights import extract_stats, extract_testimonials, split_attribution
from app.services.markdown_tree import parse_markdown

EM_DASH = chr(0x2014)


class TestExtractStats:
    def test_suffixes_and_decimals(self):
        stats = extract_stats(parse_markdown("Trusted by 10k+ developers with 1.2M downloads."))
        assert stats == [
            Stat(value="10k+", label="developers"),
            Stat(value="1.2M", label="downloads"),
        ]

    def test_first_four_across_document(self):
        tree = parse_markdown("1 a, 2 b, 3 c\n\n4 d, 5 e")
        assert [s.value for s in extract_stats(tree)] == ["1", "2", "3", "4"]

    def test_list_items_counted_once(self):
        tree = parse_markdown("- 500 stars\n- 20 contributors")
        assert extract_stats(tree) == [
            Stat(value="500", label="stars"),
            Stat(value="20", label="contributors"),
        ]

    def test_code_is_ignored(self):
        assert extract_stats(parse_markdown("```\n100 lines\n```")) == []

    def test_no_numbers(self):
        assert extract_stats(parse_markdown("Nothing to count here.")) == []


class TestSplitAttribution:
    def test_newline_dash(self):
        result = split_attribution(f"This library saved us weeks.\n{EM_DASH} Jane Doe")
        assert result == Testimonial(quote="This library saved us weeks.", author="Jane Doe")

    def test_spaced_hyphen(self):
        assert split_attribution("Great tool - Bob") == Testimonial(quote="Great tool", author="Bob")

    def test_splits_only_once(self):
        result = split_attribution("Fast - and small - Bob")
        assert result.quote == "Fast"
        assert result.author == "and small - Bob"

    def test_no_attribution(self):
        assert split_attribution("Just a quote") == Testimonial(quote="Just a quote")


class TestExtractTestimonials:
    def test_quote_with_author(self):
        tree = parse_markdown(f"> This library saved our team weeks of work.\n> {EM_DASH} Jane Doe")
        assert extract_testimonials(tree) == [
            Testimonial(quote="This library saved our team weeks of work.", author="Jane Doe")
        ]

    def test_short_quote_ignored(self):
        assert extract_testimonials(parse_markdown("> Too short")) == []

    def test_long_quote_ignored(self):
        assert extract_testimonials(parse_markdown("> " + "a" * 300)) == []

    def test_capped_at_three(self):
        quotes = "\n\n".join(f"> Quote number {n} is long enough to count." for n in range(5))
        assert len(extract_testimonials(parse_markdown(quotes))) == 3
