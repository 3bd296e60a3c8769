"""Unit tests for standalone page assembly and the expression preview."""
import pytest
from pygments.util import ClassNotFound

from am2mml.asciimath import parse
from am2mml.config import PreviewConfig
from am2mml.html_builder import build_page, build_preview


class TestBuildPage:
    def test_wraps_content(self):
        html = build_page("<p>hello</p>")
        assert html.startswith("<!DOCTYPE html>")
        assert "<p>hello</p>" in html
        assert html.rstrip().endswith("</html>")

    def test_title_is_escaped(self):
        html = build_page("", title="<a & b>")
        assert "<title>&lt;a &amp; b&gt;</title>" in html

    def test_extra_css_lands_in_style_block(self):
        html = build_page("", extra_css=".x { color: red; }\n")
        style = html[html.index("<style>"):html.index("</style>")]
        assert ".x { color: red; }" in style


class TestBuildPreview:
    def test_sections(self):
        html = build_preview("x^2", parse("x^2"), PreviewConfig())
        assert '<div class="source">x^2</div>' in html
        assert '<div class="rendered"><math display="block">' in html
        assert "<summary>Show MathML</summary>" in html
        assert 'class="mathml-source"' in html
        assert "<title>AsciiMath Preview</title>" in html

    def test_source_is_escaped(self):
        html = build_preview("a < b", parse("a < b"), PreviewConfig())
        assert '<div class="source">a &lt; b</div>' in html

    def test_no_diagnostics_for_clean_input(self):
        html = build_preview("x", parse("x"), PreviewConfig())
        assert "diagnostics" not in html.split("</style>")[1]

    def test_diagnostics_listed(self):
        html = build_preview("(a", parse("(a"), PreviewConfig())
        assert '<ul class="diagnostics"><li>Missing closing paren</li></ul>' in html

    def test_custom_title_and_style(self):
        config = PreviewConfig(style="monokai", title="Scratch")
        html = build_preview("x", parse("x"), config)
        assert "<title>Scratch</title>" in html
        assert ".mathml-source" in html

    def test_unknown_pygments_style(self):
        with pytest.raises(ClassNotFound):
            build_preview("x", parse("x"), PreviewConfig(style="no-such-style"))
