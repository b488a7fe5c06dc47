from __future__ import annotations

"""
Feature Document Data Models.

Normalized, immutable representation of a parsed Gherkin feature file:
the feature itself, its scenario-like children, their steps and the
implementation status resolved for each step.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

IMPLEMENTED_TAG = "Implemented"
NOT_IMPLEMENTED_TAG = "Not Implemented"

# -----------------------------------------------------------------------------
# TAGS AND STEP ARGUMENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Tag:
    """
    Free-text label attached to a feature, scenario or step.

    Attributes:
        name: Tag label. Normalized documents carry it without the '@' prefix.
        line: Source line (0 for synthetic tags).
        column: Source column (0 for synthetic tags).
    """
    name: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class DocStringArgument:
    """Multi-line string passed to a step."""
    content: str
    media_type: str = ""
    type: str = field(default="DocString", init=False)


@dataclass(frozen=True)
class DataTableArgument:
    """Table of cell values passed to a step."""
    rows: List[List[str]] = field(default_factory=list)
    type: str = field(default="DataTable", init=False)


StepArgument = Union[DocStringArgument, DataTableArgument]

# -----------------------------------------------------------------------------
# STEPS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StepMatch:
    """
    Answer of a step matcher for one step line.

    Attributes:
        step_match: True if a step definition implements the line.
        definition: Pattern of the matching definition.
        source: File declaring the matching definition.
        line: Line of the matching definition inside its source.
        arguments: Named values captured by the pattern.
    """
    step_match: bool
    definition: Optional[str] = None
    source: Optional[str] = None
    line: Optional[int] = None
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Step:
    """
    One action or assertion line of a scenario.

    Attributes:
        keyword: Gherkin keyword including its trailing space ('Given ').
        text: Step text following the keyword.
        line: Source line.
        argument: Optional doc string or data table.
        implementation: Matcher answer, None until resolved.
        tags: Synthetic implementation tag, when enabled.
    """
    keyword: str
    text: str
    line: int = 0
    argument: Optional[StepArgument] = None
    implementation: Optional[StepMatch] = None
    tags: List[Tag] = field(default_factory=list)

    @property
    def full_text(self) -> str:
        return self.keyword + self.text

# -----------------------------------------------------------------------------
# SCENARIOS AND DOCUMENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Examples:
    """Examples table of a scenario outline."""
    name: str
    keyword: str = "Examples"
    tags: List[Tag] = field(default_factory=list)
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


@dataclass(frozen=True)
class ScenarioLike:
    """
    Scenario, scenario outline or background of a feature.

    Attributes:
        name: Scenario title (empty for most backgrounds).
        keyword: Gherkin keyword ('Scenario', 'Scenario Outline', 'Background').
        description: Free-text description rendered to HTML.
        tags: Own tags, followed by the synthetic implementation tag if enabled.
        steps: Ordered steps.
        examples: Examples tables (scenario outlines only).
        line: Source line.
        rule_name: Name of the enclosing Rule block, if any.
        feature_name: Name of the owning feature.
        feature_tags: Tags of the owning feature.
        implemented: True iff every step matched a definition.
    """
    name: str
    keyword: str
    description: str = ""
    tags: List[Tag] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    examples: List[Examples] = field(default_factory=list)
    line: int = 0
    rule_name: Optional[str] = None
    feature_name: str = ""
    feature_tags: List[Tag] = field(default_factory=list)
    implemented: bool = False

    @property
    def effective_tags(self) -> List[Tag]:
        """Own tags followed by the inherited feature tags, duplicates kept."""
        if self.tags:
            return list(self.tags) + list(self.feature_tags)
        return list(self.feature_tags)


@dataclass(frozen=True)
class Document:
    """
    Parsed feature file.

    Attributes:
        path: Source file path.
        name: Feature title.
        keyword: Gherkin keyword ('Feature' or a localized equivalent).
        language: Gherkin dialect of the file.
        description: Feature description rendered to HTML.
        tags: Feature tags.
        children: Ordered scenario-like children.
        implemented: True iff every child is implemented.
    """
    path: str
    name: str
    keyword: str = "Feature"
    language: str = "en"
    description: str = ""
    tags: List[Tag] = field(default_factory=list)
    children: List[ScenarioLike] = field(default_factory=list)
    implemented: bool = False
