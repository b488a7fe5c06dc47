from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the options of a documentation run and the result object handed
from the pipeline engine to the interface layer (CLI).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from featuredocs.domain.tree_models import DocumentationTree

DEFAULT_FEATURE_SUFFIX = ".feature"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProcessorOptions:
    """
    Options of the tree-building run.

    Attributes:
        steps: Step-definition sources (files, directories or glob patterns).
        add_implemented_tags: Append 'Implemented'/'Not Implemented' tags.
        feature_suffix: Filename suffix identifying feature files.
    """
    steps: List[str] = field(default_factory=list)
    add_implemented_tags: bool = False
    feature_suffix: str = DEFAULT_FEATURE_SUFFIX


@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_path: Normalized feature directory processed.
        output_dir: Root of the destination paths stamped on the tree.
        tree: Documentation tree (None on failure).
        output_file: Path of the persisted JSON tree, if any.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    input_path: str
    output_dir: str
    tree: Optional[DocumentationTree] = None
    output_file: str = ""
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        input_path: str,
        output_dir: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        input_path: The target feature directory.
        output_dir: Calculated output directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        input_path=input_path,
        output_dir=output_dir,
        summary=summary_extra or {},
    )


def create_success_result(
        input_path: str,
        output_dir: str,
        tree: DocumentationTree,
        output_file: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        input_path: Normalized feature directory.
        output_dir: Output root stamped on the tree nodes.
        tree: The documentation tree of the run.
        output_file: Path of the persisted JSON tree.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        input_path=input_path,
        output_dir=output_dir,
        tree=tree,
        output_file=output_file,
        summary=summary_extra or {},
    )
