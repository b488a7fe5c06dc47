from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates a documentation run:
1. Validates configuration and paths.
2. Builds the step matcher from the configured step sources.
3. Builds the documentation tree (parse, normalize, resolve).
4. Flattens the scenarios and indexes them by tag.
5. Optionally persists the tree as JSON for the rendering layer.
"""

import logging
import os
from typing import Any, Dict, Optional

from featuredocs.core.analysis.tag_indexer import collect_scenarios, index_tags
from featuredocs.core.analysis.tree_builder import DirectoryTreeBuilder
from featuredocs.core.parsing.feature_parser import FeatureDocumentParser
from featuredocs.core.parsing.grammar import GherkinGrammar, GrammarParser
from featuredocs.core.parsing.markdown import MarkdownConverter, MarkdownItConverter
from featuredocs.core.pipeline.serializer import to_jsonable
from featuredocs.core.pipeline.validator import validate_config
from featuredocs.core.steps.resolver import StepImplementationResolver
from featuredocs.core.steps.step_matcher import CodeStepMatcher, StepMatcher
from featuredocs.domain.config import options_from_config
from featuredocs.domain.pipeline_models import (
    PipelineResult,
    ProcessorOptions,
    create_error_result,
    create_success_result,
)
from featuredocs.domain.tree_models import DirectoryNode, DocumentationTree, FileNode, TreeNode
from featuredocs.infra.fs import normalize_path, save_json

logger = logging.getLogger(__name__)


def process(
        path: str,
        output_dir: str,
        options: Optional[ProcessorOptions] = None,
        *,
        grammar: Optional[GrammarParser] = None,
        markdown: Optional[MarkdownConverter] = None,
        matcher: Optional[StepMatcher] = None,
) -> DocumentationTree:
    """
    Build the documentation tree of a feature directory.

    Every call re-traverses and re-parses everything; nothing is shared
    between calls. Parse failures downgrade single files, every other
    failure propagates.

    Args:
        path: Feature directory (or single file) to document.
        output_dir: Root mirrored by the nodes' write paths.
        options: Step sources, status tags and feature suffix.
        grammar: Gherkin grammar port (gherkin-official by default).
        markdown: Markdown port (markdown-it-py by default).
        matcher: Step matcher port (built from options.steps by default).

    Returns:
        DocumentationTree: Root node with the scenario and tag indexes.
    """
    options = options or ProcessorOptions()
    if matcher is None:
        matcher = CodeStepMatcher.from_sources(options.steps)

    builder = DirectoryTreeBuilder(
        FeatureDocumentParser(grammar or GherkinGrammar(), markdown or MarkdownItConverter()),
        StepImplementationResolver(matcher, add_implemented_tags=options.add_implemented_tags),
        feature_suffix=options.feature_suffix,
    )

    path = os.path.normpath(path)
    base_dir = os.path.dirname(os.path.abspath(path))
    root = builder.build(path, output_dir, base_dir)

    scenaria = collect_scenarios(root)
    index = index_tags(scenaria)
    return DocumentationTree(
        root=root,
        scenaria=scenaria,
        scenaria_per_tag=index.scenaria_per_tag,
        tags=index.tags,
    )


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        grammar: Optional[GrammarParser] = None,
        markdown: Optional[MarkdownConverter] = None,
        matcher: Optional[StepMatcher] = None,
) -> PipelineResult:
    """
    Execute a full documentation run from a configuration dictionary.

    Args:
        config: The configuration dictionary (raw or partial).
        grammar: Optional grammar port override.
        markdown: Optional markdown port override.
        matcher: Optional step matcher override.

    Returns:
        PipelineResult: Status, tree and summary of the run.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    input_path = normalize_path(cfg.get("input_path", ""), os.getcwd())
    output_dir = normalize_path(cfg.get("output_dir", ""), os.getcwd())

    if not os.path.exists(input_path):
        msg = f"Invalid input path: {input_path}"
        logger.error(msg)
        return create_error_result(msg, input_path, output_dir)

    # -------------------------------------------------------------------------
    # 2) Tree Construction & Tag Indexing
    # -------------------------------------------------------------------------
    tree = process(
        input_path,
        output_dir,
        options_from_config(cfg),
        grammar=grammar,
        markdown=markdown,
        matcher=matcher,
    )

    # -------------------------------------------------------------------------
    # 3) Persistence
    # -------------------------------------------------------------------------
    output_file = cfg.get("output_file", "")
    if output_file:
        try:
            save_json(output_file, to_jsonable(tree))
            logger.info(f"Documentation tree saved to: {output_file}")
        except OSError as e:
            msg = f"Failed to save documentation tree to '{output_file}': {e}"
            logger.error(msg)
            return create_error_result(msg, input_path, output_dir)

    summary = summarize_tree(tree, cfg["feature_suffix"])
    logger.info(
        f"Pipeline completed: {summary['features']} features, "
        f"{summary['scenarios']} scenarios, {summary['tags']} tags."
    )
    return create_success_result(input_path, output_dir, tree, output_file, summary)


def summarize_tree(tree: DocumentationTree, feature_suffix: str) -> Dict[str, Any]:
    """
    Compute run statistics for reporting.

    Args:
        tree: Documentation tree of the run.
        feature_suffix: Suffix identifying feature files.

    Returns:
        Dict[str, Any]: Feature, scenario, tag and downgrade counters.
    """
    counters = {"features": 0, "implemented_features": 0, "downgraded": 0}
    _count_nodes(tree.root, feature_suffix, counters)
    return {
        **counters,
        "scenarios": len(tree.scenaria),
        "implemented_scenarios": sum(1 for s in tree.scenaria if s.implemented),
        "tags": len(tree.tags),
    }


def _count_nodes(node: TreeNode, feature_suffix: str, counters: Dict[str, int]) -> None:
    if isinstance(node, DirectoryNode):
        for child in node.children:
            _count_nodes(child, feature_suffix, counters)
    elif isinstance(node, FileNode):
        if node.name.endswith(feature_suffix):
            counters["downgraded"] += 1
    else:
        counters["features"] += 1
        if node.document.implemented:
            counters["implemented_features"] += 1
