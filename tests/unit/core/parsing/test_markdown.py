from __future__ import annotations

"""
Unit tests for the markdown-it-py description converter.
"""

from featuredocs.core.parsing.markdown import MarkdownItConverter


def test_blank_description_renders_empty():
    converter = MarkdownItConverter()
    assert converter.to_html("") == ""
    assert converter.to_html("   \n  ") == ""


def test_indented_description_is_not_a_code_block():
    """Gherkin keeps description indentation; it must not become <pre>."""
    html = MarkdownItConverter().to_html("    As a *user*\n    I want to log in")

    assert "<pre>" not in html
    assert "<em>user</em>" in html
    assert html.startswith("<p>")


def test_lists_are_rendered():
    html = MarkdownItConverter().to_html("  - one\n  - two")

    assert "<ul>" in html
    assert "<li>one</li>" in html
