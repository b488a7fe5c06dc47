from __future__ import annotations

"""
Domain Error Hierarchy.

Separates the recoverable failures of a documentation run (a single malformed
feature file) from the fatal ones that abort the whole traversal.
"""

from typing import Optional


class FeaturedocsError(Exception):
    """Base class for every error raised by the featuredocs pipeline."""


class FeatureParseError(FeaturedocsError):
    """
    Raised when a feature file cannot be turned into a Document.

    Covers unreadable files, undecodable text, grammar rejections and
    documents without a Feature block. The tree builder recovers from it by
    downgrading the node to a plain file.

    Attributes:
        path: Filesystem path of the offending feature file.
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class StepDefinitionError(FeaturedocsError):
    """
    Raised when a configured step-definition source cannot be located.

    Attributes:
        source: The path or glob pattern that resolved to nothing.
    """

    def __init__(self, source: str, message: Optional[str] = None):
        super().__init__(message or f"Step definition source not found: {source}")
        self.source = source
