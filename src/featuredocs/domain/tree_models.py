from __future__ import annotations

"""
Documentation Tree Data Models.

Recursive node types mirroring the scanned feature directory. A node is
exactly one of a directory, a parsed feature file, or an opaque file, so
children only exist on directories and documents only on feature files.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from featuredocs.domain.document_models import Document, ScenarioLike

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryNode:
    """
    Directory entry with its children in filesystem listing order.

    Attributes:
        path: Filesystem path of the directory.
        name: Directory basename.
        write_path: Destination path inside the output directory.
        toc_name: Path relative to the scan base, used by tables of contents.
        children: Child nodes.
        link: Always None for directories.
    """
    path: str
    name: str
    write_path: str
    toc_name: str
    children: List["TreeNode"] = field(default_factory=list)
    link: Optional[str] = None
    type: str = field(default="directory", init=False)


@dataclass(frozen=True)
class FeatureFileNode:
    """
    Successfully parsed feature file.

    Attributes:
        path: Filesystem path of the feature file.
        name: File basename.
        write_path: Destination of the rendered page ('.html' appended).
        toc_name: Feature title.
        link: Page link relative to the output root ('./a/b.feature.html').
        root_folder: Relative way back to the output root ('../' or '').
        document: Parsed and resolved feature document.
    """
    path: str
    name: str
    write_path: str
    toc_name: str
    link: str
    root_folder: str
    document: Document
    type: str = field(default="featurefile", init=False)


@dataclass(frozen=True)
class FileNode:
    """
    Any other file, including feature files that failed to parse.

    Attributes:
        path: Filesystem path of the file.
        name: File basename.
        write_path: Destination path inside the output directory.
    """
    path: str
    name: str
    write_path: str
    toc_name: Optional[str] = None
    link: Optional[str] = None
    type: str = field(default="file", init=False)


TreeNode = Union[DirectoryNode, FeatureFileNode, FileNode]

# -----------------------------------------------------------------------------
# TAG INDEX AND RUN OUTPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TagSummary:
    """Distinct tag name with the number of scenario memberships."""
    name: str
    count: int


@dataclass(frozen=True)
class TagIndex:
    """
    Tag membership of a whole run.

    Attributes:
        scenaria_per_tag: Tag name to the scenarios carrying it, in run order.
        tags: Distinct tag names sorted ascending, with their bucket sizes.
    """
    scenaria_per_tag: Dict[str, List[ScenarioLike]] = field(default_factory=dict)
    tags: List[TagSummary] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentationTree:
    """
    Complete output of a run, consumed read-only by the rendering layer.

    Attributes:
        root: Tree node of the scanned path.
        scenaria: Every scenario-like child of every feature, in traversal order.
        scenaria_per_tag: Tag name to scenarios.
        tags: Sorted tag summary.
    """
    root: TreeNode
    scenaria: List[ScenarioLike] = field(default_factory=list)
    scenaria_per_tag: Dict[str, List[ScenarioLike]] = field(default_factory=dict)
    tags: List[TagSummary] = field(default_factory=list)
