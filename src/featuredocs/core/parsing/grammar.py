from __future__ import annotations

"""
Gherkin Grammar Port.

Wraps the official Gherkin parser behind a minimal interface returning the
raw Gherkin AST as a dictionary.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from gherkin.parser import Parser


class GrammarParser(ABC):
    """
    Abstract parser from feature-file text to a Gherkin AST.
    """

    @abstractmethod
    def parse(self, text: str) -> Dict[str, Any]:
        """
        Parse the text of one feature file.

        Args:
            text: Raw feature-file content.

        Returns:
            Dict[str, Any]: Gherkin document ('feature' key holds the feature).

        Raises:
            Exception: Any failure of the underlying grammar on malformed syntax.
        """
        pass


class GherkinGrammar(GrammarParser):
    """
    Adapter over gherkin-official.

    The underlying parser keeps state between calls, so a fresh one is
    created for every document.
    """

    def parse(self, text: str) -> Dict[str, Any]:
        return Parser().parse(text)
