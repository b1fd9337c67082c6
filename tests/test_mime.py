"""Tests for tocfold.mime module."""
from tocfold.config import FoldConfig
from tocfold.mime import classify_output, is_dom, is_heading_relevant, is_markdown


class TestClassifyOutput:
    def test_markdown_is_capable(self) -> None:
        result = classify_output(["text/markdown"])
        assert result.capable
        assert result.relevant == ("text/markdown",)

    def test_html_is_capable(self) -> None:
        assert classify_output(["text/html"]).capable

    def test_plain_text_is_capable(self) -> None:
        # Duplicate markdown displays can be labelled text/plain.
        assert classify_output(["text/plain"]).capable

    def test_image_only_not_capable(self) -> None:
        result = classify_output(["image/png"])
        assert not result.capable
        assert result.relevant == ()

    def test_irrelevant_keys_ignored(self) -> None:
        result = classify_output(["image/png", "text/plain", "application/json"])
        assert result.capable
        assert result.relevant == ("text/plain",)

    def test_malformed_keys_ignored(self) -> None:
        result = classify_output([1, None, "", "text/html"])
        assert result.capable
        assert result.relevant == ("text/html",)

    def test_empty(self) -> None:
        assert not classify_output([]).capable

    def test_dict_keys_accepted(self) -> None:
        data = {"text/markdown": "# Title", "text/plain": "<Markdown>"}
        assert classify_output(data.keys()).relevant == ("text/markdown", "text/plain")


class TestPredicates:
    def test_is_markdown(self) -> None:
        assert is_markdown("text/markdown")
        assert is_markdown("text/x-markdown")
        assert not is_markdown("text/html")

    def test_is_dom(self) -> None:
        assert is_dom("text/html")
        assert not is_dom("text/plain")

    def test_non_string_not_relevant(self) -> None:
        assert not is_heading_relevant(42)

    def test_config_override(self) -> None:
        cfg = FoldConfig(dom_mime_types=frozenset({"application/vnd.custom+html"}))
        assert is_heading_relevant("application/vnd.custom+html", cfg)
        assert not is_heading_relevant("text/html", cfg)
