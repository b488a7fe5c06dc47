from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Deterministic fakes for the markdown and step-matcher ports.
3. Helpers to lay out feature directories under tmp_path.
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from featuredocs.core.parsing.markdown import MarkdownConverter  # noqa: E402
from featuredocs.core.pipeline.engine import process  # noqa: E402
from featuredocs.core.steps.step_matcher import StepMatcher  # noqa: E402
from featuredocs.domain.document_models import StepMatch  # noqa: E402
from featuredocs.domain.pipeline_models import ProcessorOptions  # noqa: E402
from featuredocs.domain.tree_models import DocumentationTree  # noqa: E402


# -----------------------------------------------------------------------------
# Port Fakes
# -----------------------------------------------------------------------------
class FakeMarkdown(MarkdownConverter):
    """Wraps the whitespace-collapsed text in a paragraph."""

    def to_html(self, text: str) -> str:
        if not text or not text.strip():
            return ""
        return "<p>" + " ".join(text.split()) + "</p>"


class FakeMatcher(StepMatcher):
    """Matches exactly the configured step lines and records every query."""

    def __init__(self, implemented: Iterable[str] = ()):
        self.implemented = set(implemented)
        self.calls: List[str] = []

    def match_line(self, line: str) -> StepMatch:
        self.calls.append(line)
        return StepMatch(step_match=line in self.implemented)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_markdown() -> FakeMarkdown:
    return FakeMarkdown()


@pytest.fixture
def fake_matcher_cls() -> type:
    return FakeMatcher


@pytest.fixture
def write_feature() -> Callable[[Path, str], Path]:
    """Write a dedented feature file, creating parent directories."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def build_docs(fake_markdown: FakeMarkdown) -> Callable[..., DocumentationTree]:
    """Run a full process() with the real grammar and fake ports."""

    def _build(
            path: Path,
            implemented: Iterable[str] = (),
            add_implemented_tags: bool = False,
            output_dir: str = "out",
            **kwargs: Any,
    ) -> DocumentationTree:
        options = ProcessorOptions(add_implemented_tags=add_implemented_tags, **kwargs)
        return process(
            str(path),
            output_dir,
            options,
            markdown=fake_markdown,
            matcher=FakeMatcher(implemented),
        )

    return _build


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'featuredocs.domain.config'.
    """
    return {
        "input_path": str(tmp_path / "features"),
        "output_dir": str(tmp_path / "docs"),
        "output_file": "",
        "steps": [],
        "add_implemented_tags": False,
        "feature_suffix": ".feature",
        "print_tree": False,
    }
