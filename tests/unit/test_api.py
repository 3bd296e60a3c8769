"""Unit tests for the public Python API (am2mml.translate / preview / convert)."""
from __future__ import annotations

import nbformat
import pytest

import am2mml
import am2mml.api as api
from am2mml.config import Config


class TestPublicApi:
    def test_top_level_exports(self):
        assert callable(am2mml.translate)
        assert callable(am2mml.preview)
        assert callable(am2mml.convert)
        assert callable(am2mml.convert_text)
        assert isinstance(am2mml.__version__, str)

    def test_translate_default_is_block(self):
        assert am2mml.translate("x") == (
            '<math display="block"><mstyle displaystyle="true">'
            "<mi>x</mi></mstyle></math>"
        )

    def test_translate_inline_argument_wins(self, inline_config):
        assert am2mml.translate("x", False, config=inline_config).startswith(
            '<math display="block">'
        )

    def test_translate_uses_config_display(self, inline_config):
        assert am2mml.translate("x", config=inline_config) == (
            '<math display="inline"><mstyle displaystyle="false">'
            "<mi>x</mi></mstyle></math>"
        )

    def test_translate_with_dict_config(self):
        html = am2mml.translate("x", config={"math": {"xmlns": True}})
        assert 'xmlns="http://www.w3.org/1998/Math/MathML"' in html

    def test_translate_with_config_path(self, temp_config):
        html = am2mml.translate("x", config=temp_config)
        assert 'display="inline"' in html

    def test_translate_rejects_non_string(self):
        with pytest.raises(TypeError):
            am2mml.translate(42)

    def test_translate_enforces_length_limit(self):
        with pytest.raises(ValueError, match="limit"):
            am2mml.translate("x" * 11, config={"safety": {"max_input_chars": 10}})

    def test_translate_never_raises_on_bad_notation(self):
        assert "<merror>" in am2mml.translate("(a")

    def test_translate_deep_nesting_is_a_diagnostic(self):
        html = am2mml.translate("(" * 2000)
        assert "Nesting too deep" in html

    def test_translate_uses_configured_nesting_bound(self):
        html = am2mml.translate("((x))", config={"safety": {"max_nesting": 1}})
        assert "Nesting too deep" in html
        assert "Nesting too deep" not in am2mml.translate("((x))")

    def test_invalid_config_type(self):
        with pytest.raises(TypeError):
            am2mml.translate("x", config=3)

    def test_preview_returns_page(self):
        html = am2mml.preview("sqrt 2")
        assert html.startswith("<!DOCTYPE html>")
        assert "<msqrt>" in html
        assert "Show MathML" in html


class TestConvert:
    def test_convert_markdown_file(self, temp_md):
        html = am2mml.convert(temp_md)
        assert "<html" in html.lower()
        assert '<math display="inline">' in html
        assert '<math display="block">' in html

    def test_convert_fragment(self, temp_md):
        html = am2mml.convert(temp_md, standalone=False)
        assert "<html" not in html.lower()
        assert html.startswith('<div class="md-cell">')

    def test_convert_notebook_file(self, temp_notebook):
        html = am2mml.convert(temp_notebook, standalone=False)
        assert "Heading" in html
        assert "print(" not in html
        assert "<munderover>" in html

    def test_convert_accepts_notebook_node(self, math_notebook):
        html = am2mml.convert(math_notebook, standalone=False)
        assert "<msup><mi>x</mi><mn>2</mn></msup>" in html

    def test_convert_accepts_notebook_payload_dict(self):
        notebook_dict = {
            "cells": [
                {
                    "cell_type": "markdown",
                    "metadata": {},
                    "source": ["# Dict Notebook\n", "$a/b$"],
                }
            ],
            "metadata": {},
            "nbformat": 4,
            "nbformat_minor": 5,
        }

        html = am2mml.convert(notebook_dict, standalone=False)

        assert "Dict Notebook" in html
        assert "<mfrac>" in html
        # caller payload is left untouched
        assert "id" not in notebook_dict["cells"][0]

    def test_convert_rejects_invalid_payload(self):
        with pytest.raises(ValueError, match="Invalid Jupyter notebook"):
            am2mml.convert({"cells": [{"cell_type": "bogus"}], "nbformat": 4})

    def test_convert_rejects_unsupported_type(self):
        with pytest.raises(TypeError):
            am2mml.convert(12)

    def test_convert_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            am2mml.convert(tmp_path / "missing.md")

    def test_convert_rejects_control_characters(self):
        with pytest.raises(ValueError, match="control characters"):
            am2mml.convert("doc\x00.md")

    def test_convert_text(self):
        html = am2mml.convert_text("Area $pi r^2$")
        assert html.startswith('<div class="md-cell"><p>Area <math display="inline">')

    def test_convert_text_standalone(self):
        assert am2mml.convert_text("hi", standalone=True).startswith("<!DOCTYPE html>")

    def test_convert_text_rejects_non_string(self):
        with pytest.raises(TypeError):
            am2mml.convert_text(b"$x$")


class TestResolveConfig:
    def test_none_gives_defaults(self):
        assert api._resolve_config(None) == Config()

    def test_config_instance_passes_through(self, quiet_config):
        assert api._resolve_config(quiet_config) is quiet_config

    def test_str_path(self, temp_config):
        assert api._resolve_config(str(temp_config)).preview.title == "Scratch"

    def test_coerce_adds_cell_ids(self):
        nb = nbformat.v4.new_notebook()
        nb.cells = [nbformat.v4.new_markdown_cell("x")]
        del nb.cells[0]["id"]
        node = api._coerce_notebook_node(nb)
        assert node.cells[0]["id"]
        assert "id" not in nb.cells[0]
