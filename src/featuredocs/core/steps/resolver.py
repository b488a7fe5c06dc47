from __future__ import annotations

"""
Step Implementation Resolver.

Queries the step matcher for every step of a scenario and derives the
implementation status of scenarios and features from the answers.
"""

import logging
from dataclasses import replace
from typing import Iterable, List

from featuredocs.core.steps.step_matcher import StepMatcher
from featuredocs.domain.document_models import (
    IMPLEMENTED_TAG,
    NOT_IMPLEMENTED_TAG,
    ScenarioLike,
    Step,
    StepMatch,
    Tag,
)

logger = logging.getLogger(__name__)


class StepImplementationResolver:
    """
    Resolves implementation status of steps, scenarios and features.

    Args:
        matcher: Step matcher port, built once per run.
        add_implemented_tags: Append an informational 'Implemented' or
                              'Not Implemented' tag to steps and scenarios.
    """

    def __init__(self, matcher: StepMatcher, add_implemented_tags: bool = False):
        self._matcher = matcher
        self._add_implemented_tags = add_implemented_tags

    def resolve(self, step: Step) -> StepMatch:
        """
        Submit the step line (keyword and text, verbatim) to the matcher.

        Matcher failures are not caught and abort the run.
        """
        return self._matcher.match_line(step.keyword + step.text)

    def resolve_scenario(self, scenario: ScenarioLike) -> ScenarioLike:
        """
        Resolve every step of a scenario-like child.

        The child is implemented iff every step matches. Step status tags
        follow the running flag, so every step after a miss is tagged
        'Not Implemented'.

        Args:
            scenario: Child with unresolved steps.

        Returns:
            ScenarioLike: Copy carrying resolved steps and its status.
        """
        matches = [self.resolve(step) for step in scenario.steps]

        # A step is tagged with the status of the scenario up to and including it
        steps: List[Step] = []
        implemented = True
        for step, match in zip(scenario.steps, matches):
            implemented = implemented and match.step_match
            steps.append(replace(step, implementation=match, tags=self._status_tags(step.tags, implemented)))

        if not implemented:
            logger.debug(f"Scenario not implemented: '{scenario.name}'")

        return replace(
            scenario,
            steps=steps,
            implemented=implemented,
            tags=self._status_tags(scenario.tags, implemented),
        )

    @staticmethod
    def feature_implemented(children: Iterable[ScenarioLike]) -> bool:
        """A feature is implemented iff every child is."""
        return all(child.implemented for child in children)

    def _status_tags(self, tags: List[Tag], implemented: bool) -> List[Tag]:
        if not self._add_implemented_tags:
            return list(tags)
        return list(tags) + [Tag(name=IMPLEMENTED_TAG if implemented else NOT_IMPLEMENTED_TAG)]
