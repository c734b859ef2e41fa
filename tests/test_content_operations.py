"""Tests for truncation, pagination, section extraction, and note summaries."""

import pytest

from vault_query import Document, extract_section, paginate, truncate_content
from vault_query.constants import TRUNCATION_SUFFIX
from vault_query.core.content_operations import summarize_note


NOTE = """# Title
Intro text.

## Section A
Content A.

### Subsection A1
Nested content.

## Section B
Content B.
"""


class TestTruncateContent:
    def test_short_content_unchanged(self):
        result = truncate_content("short text", 100)

        assert result.content == "short text"
        assert result.truncated is False

    def test_exact_length_unchanged(self):
        result = truncate_content("abcde", 5)

        assert result.content == "abcde"
        assert result.truncated is False

    def test_cuts_at_word_boundary_near_limit(self):
        content = "word " * 40
        result = truncate_content(content, 100)

        assert result.truncated is True
        assert result.content.endswith(TRUNCATION_SUFFIX)
        assert len(result.content) <= 100
        body = result.content[: -len(TRUNCATION_SUFFIX)]
        assert body == " ".join(["word"] * 17)

    def test_cuts_mid_word_when_boundary_is_early(self):
        content = "a " + "x" * 100
        result = truncate_content(content, 50)

        assert result.content == content[: 50 - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX
        assert len(result.content) == 50

    def test_boundary_at_exactly_eighty_percent(self):
        # Last space of the 85-char prefix sits at index 80 of a 100-char budget
        content = "x" * 80 + " " + "y" * 200
        result = truncate_content(content, 100)

        assert result.content == "x" * 80 + TRUNCATION_SUFFIX

    def test_budget_smaller_than_suffix_hard_cuts(self):
        result = truncate_content("abcdefghijklmnopqrstuvwxyz", 5)

        assert result.content == "abcde"
        assert result.truncated is True

    def test_zero_budget(self):
        result = truncate_content("text", 0)

        assert result.content == ""
        assert result.truncated is True

    def test_negative_budget_rejected(self):
        with pytest.raises(ValueError):
            truncate_content("text", -1)

    def test_payload(self):
        assert truncate_content("ok", 10).as_payload() == {"content": "ok", "truncated": False}


class TestPaginate:
    def test_middle_page(self):
        page = paginate(list(range(1, 11)), 2, 3)

        assert page.items == [4, 5, 6]
        assert page.total == 10
        assert page.has_more is True

    def test_last_partial_page(self):
        page = paginate(list(range(1, 11)), 4, 3)

        assert page.items == [10]
        assert page.has_more is False

    def test_exact_last_page_has_no_more(self):
        page = paginate(list(range(6)), 2, 3)

        assert page.items == [3, 4, 5]
        assert page.has_more is False

    def test_page_past_end_is_empty(self):
        page = paginate([1, 2], 5, 10)

        assert page.items == []
        assert page.total == 2
        assert page.has_more is False

    def test_pages_reconstruct_input(self):
        items = list("abcdefghijk")
        per_page = 4
        pages = [paginate(items, number, per_page) for number in range(1, 4)]

        assert [item for page in pages for item in page.items] == items
        assert [page.has_more for page in pages] == [True, True, False]

    def test_empty_input(self):
        page = paginate([], 1, 5)

        assert page.as_payload() == {
            "items": [],
            "page": 1,
            "per_page": 5,
            "total": 0,
            "has_more": False,
        }

    @pytest.mark.parametrize("page, per_page", [(0, 10), (-1, 10), (1, 0)])
    def test_invalid_arguments(self, page, per_page):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], page, per_page)


class TestExtractSection:
    def test_section_includes_deeper_headings(self):
        assert extract_section(NOTE, "Section A") == "Content A.\n\n### Subsection A1\nNested content."

    def test_section_ends_at_same_level_heading(self):
        assert extract_section(NOTE, "Subsection A1") == "Nested content."

    def test_last_section_runs_to_end(self):
        assert extract_section(NOTE, "Section B") == "Content B."

    def test_top_level_section_contains_everything_below(self):
        section = extract_section(NOTE, "Title")

        assert section.startswith("Intro text.")
        assert section.endswith("Content B.")

    def test_case_insensitive_and_trimmed(self):
        assert extract_section(NOTE, "  section b ") == "Content B."

    def test_first_matching_heading_wins(self):
        content = "## Notes\nfirst\n## Notes\nsecond\n"

        assert extract_section(content, "Notes") == "first"

    def test_missing_heading(self):
        assert extract_section(NOTE, "Missing") is None

    def test_hashes_without_space_are_not_headings(self):
        assert extract_section("#tag line\ntext", "tag line") is None

    def test_empty_section(self):
        assert extract_section("## Empty\n## Next\ntext", "Empty") == ""


class TestSummarizeNote:
    def test_title_from_frontmatter(self):
        document = Document("a.md", "# Heading\nbody", {"title": "Front Title"}, ("x",))

        assert summarize_note(document) == {
            "path": "a.md",
            "title": "Front Title",
            "tags": ["x"],
            "modified": None,
        }

    def test_title_from_first_h1(self):
        document = Document("a.md", "intro\n## Sub\n# Main Heading\n# Other\n")

        assert summarize_note(document)["title"] == "Main Heading"

    def test_no_title(self):
        assert summarize_note(Document("a.md", "plain text"))["title"] is None

    def test_modified_date_is_passed_through(self):
        document = Document("a.md", "text", modified="2025-10-27")

        assert summarize_note(document)["modified"] == "2025-10-27"
