"""Tests for tocfold.headings module."""
from tocfold.blocks import Heading
from tocfold.headings import parse_heading, parse_rendered_heading, title_string


class TestParseHeading:
    def test_level_one(self) -> None:
        assert parse_heading("# Introduction") == Heading(level=1, title="Introduction")

    def test_level_six(self) -> None:
        h = parse_heading("###### Deepest")
        assert h is not None
        assert h.level == 6

    def test_seven_markers_rejected(self) -> None:
        assert parse_heading("####### Too deep") is None

    def test_leading_whitespace_rejected(self) -> None:
        assert parse_heading(" # Indented") is None

    def test_marker_without_space_rejected(self) -> None:
        assert parse_heading("#hashtag") is None

    def test_only_first_line_examined(self) -> None:
        assert parse_heading("Some prose\n# Later heading") is None

    def test_body_after_heading_ignored(self) -> None:
        h = parse_heading("## Results\n\nThe numbers below...")
        assert h == Heading(level=2, title="Results")

    def test_tab_separator(self) -> None:
        assert parse_heading("#\tTabbed") == Heading(level=1, title="Tabbed")

    def test_empty_text(self) -> None:
        assert parse_heading("") is None

    def test_bare_marker_rejected(self) -> None:
        assert parse_heading("#\nbody") is None

    def test_title_is_stripped(self) -> None:
        h = parse_heading("###   Spaced out   ")
        assert h is not None
        assert h.title == "Spaced out"


class TestParseRenderedHeading:
    def test_html_heading_with_anchor(self) -> None:
        markup = (
            '<h2 id="Results">Results'
            '<a class="anchor-link" href="#Results">¶</a></h2>'
        )
        assert parse_rendered_heading(markup) == Heading(level=2, title="Results")

    def test_leading_whitespace_before_tag(self) -> None:
        h = parse_rendered_heading("\n  <h3>Spaced</h3>\n")
        assert h == Heading(level=3, title="Spaced")

    def test_heading_not_first_element(self) -> None:
        assert parse_rendered_heading("<p>intro</p><h1>Late</h1>") is None

    def test_preformatted_text_is_not_heading(self) -> None:
        assert parse_rendered_heading("<pre># not a heading</pre>") is None

    def test_plain_text_falls_back_to_markdown(self) -> None:
        assert parse_rendered_heading("## Plain") == Heading(level=2, title="Plain")

    def test_none_and_empty(self) -> None:
        assert parse_rendered_heading(None) is None
        assert parse_rendered_heading("") is None


class TestTitleString:
    def test_strips_markers_and_backticks(self) -> None:
        assert title_string("## `load_data` helper") == "load_data helper"

    def test_first_line_only(self) -> None:
        assert title_string("# Title\nbody text") == "Title"

    def test_truncates_long_titles(self) -> None:
        result = title_string("# " + "a" * 50)
        assert result == "a" * 45 + "..."

    def test_exact_length_not_truncated(self) -> None:
        assert title_string("a" * 45) == "a" * 45

    def test_custom_length(self) -> None:
        assert title_string("# abcdef", max_length=3) == "abc..."
