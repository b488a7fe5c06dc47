from __future__ import annotations

"""
Markdown Conversion Port.

Feature and scenario descriptions are written in markdown. The converter
turns them into HTML for the rendering layer.
"""

import textwrap
from abc import ABC, abstractmethod

from markdown_it import MarkdownIt


class MarkdownConverter(ABC):
    """
    Abstract converter from markdown source to HTML.
    """

    @abstractmethod
    def to_html(self, text: str) -> str:
        """
        Render a markdown fragment.

        Args:
            text: Markdown source (may be empty).

        Returns:
            str: HTML fragment.
        """
        pass


class MarkdownItConverter(MarkdownConverter):
    """
    CommonMark rendering through markdown-it-py.

    Gherkin keeps the indentation of description lines, so the common
    leading whitespace is removed first to keep prose out of code blocks.
    """

    def __init__(self, preset: str = "commonmark"):
        self._md = MarkdownIt(preset)

    def to_html(self, text: str) -> str:
        if not text or not text.strip():
            return ""
        return self._md.render(textwrap.dedent(text).strip("\n"))
