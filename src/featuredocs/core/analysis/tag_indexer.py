from __future__ import annotations

"""
Tag Indexer.

Second pass of a run: flattens the scenario-like children of every feature
in the finished tree and groups them by tag, feature tags included.
"""

from typing import Dict, Iterable, List

from featuredocs.domain.document_models import ScenarioLike
from featuredocs.domain.tree_models import (
    DirectoryNode,
    FeatureFileNode,
    TagIndex,
    TagSummary,
    TreeNode,
)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def collect_scenarios(root: TreeNode) -> List[ScenarioLike]:
    """
    Flatten the scenario-like children of every feature under a node.

    Order is the depth-first traversal order of the tree, then the source
    order of the children inside each feature.

    Args:
        root: Node to flatten.

    Returns:
        List[ScenarioLike]: Every child of every parsed feature.
    """
    scenaria: List[ScenarioLike] = []
    _collect(root, scenaria)
    return scenaria


def index_tags(scenarios: Iterable[ScenarioLike]) -> TagIndex:
    """
    Group scenarios by their effective tags.

    Effective tags are the scenario's own tags followed by its feature's
    tags, without de-duplication: a tag carried twice yields two
    memberships. Every call allocates a new mapping.

    Args:
        scenarios: Flattened scenarios of a run.

    Returns:
        TagIndex: Tag buckets plus the tag summary sorted by name.
    """
    scenaria_per_tag: Dict[str, List[ScenarioLike]] = {}
    for scenario in scenarios:
        for tag in scenario.effective_tags:
            scenaria_per_tag.setdefault(tag.name, []).append(scenario)

    tags = [
        TagSummary(name=name, count=len(scenaria_per_tag[name]))
        for name in sorted(scenaria_per_tag)
    ]
    return TagIndex(scenaria_per_tag=scenaria_per_tag, tags=tags)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _collect(node: TreeNode, scenaria: List[ScenarioLike]) -> None:
    if isinstance(node, DirectoryNode):
        for child in node.children:
            _collect(child, scenaria)
    elif isinstance(node, FeatureFileNode):
        scenaria.extend(node.document.children)
