from __future__ import annotations

"""
Documentation Tree Builder.

Walks a feature directory depth-first and produces one tree node per
filesystem entry. Feature files are parsed, normalized and resolved on the
way; a feature file that cannot be parsed is kept as a plain file so one
malformed file never aborts the run.
"""

import logging
import os
import stat
from dataclasses import replace
from typing import List, Optional

from featuredocs.core.parsing.feature_parser import FeatureDocumentParser
from featuredocs.core.steps.resolver import StepImplementationResolver
from featuredocs.domain.document_models import (
    DocStringArgument,
    Document,
    ScenarioLike,
    Step,
    Tag,
)
from featuredocs.domain.errors import FeatureParseError
from featuredocs.domain.pipeline_models import DEFAULT_FEATURE_SUFFIX
from featuredocs.domain.tree_models import (
    DirectoryNode,
    FeatureFileNode,
    FileNode,
    TreeNode,
)

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class DirectoryTreeBuilder:
    """
    Builds the documentation tree of a directory.

    The builder keeps no per-run state: scenario flattening and tag
    indexing are separate passes over the returned tree.

    Args:
        parser: Feature document parser.
        resolver: Step implementation resolver.
        feature_suffix: Filename suffix of feature files.
    """

    def __init__(
            self,
            parser: FeatureDocumentParser,
            resolver: StepImplementationResolver,
            feature_suffix: str = DEFAULT_FEATURE_SUFFIX,
    ):
        self._parser = parser
        self._resolver = resolver
        self._feature_suffix = feature_suffix

    def build(self, path: str, output_root: str, base_dir: str) -> TreeNode:
        """
        Build the node of a path and, for directories, of everything below.

        Directory entries keep the filesystem listing order. Filesystem
        errors (missing or unreadable entries) propagate.

        Args:
            path: Entry to process.
            output_root: Directory mirrored by the nodes' write paths.
            base_dir: Directory the write paths and links are relative to.

        Returns:
            TreeNode: Directory, feature-file or file node.
        """
        rel_path = os.path.relpath(path, base_dir)
        write_path = os.path.join(output_root, rel_path)

        if stat.S_ISDIR(os.lstat(path).st_mode):
            children: List[TreeNode] = [
                self.build(os.path.join(path, entry), output_root, base_dir)
                for entry in os.listdir(path)
            ]
            return DirectoryNode(
                path=path,
                name=os.path.basename(path),
                write_path=write_path,
                toc_name=_posix(rel_path),
                children=children,
            )

        if path.endswith(self._feature_suffix):
            node = self._build_feature_node(path, rel_path, write_path, base_dir)
            if node is not None:
                return node

        return FileNode(path=path, name=os.path.basename(path), write_path=write_path)

    # -------------------------------------------------------------------------
    # FEATURE FILES
    # -------------------------------------------------------------------------

    def _build_feature_node(
            self,
            path: str,
            rel_path: str,
            write_path: str,
            base_dir: str,
    ) -> Optional[FeatureFileNode]:
        """Parse and resolve a feature file, None if it has to be downgraded."""
        try:
            parsed = self._parser.parse_feature(path)
        except FeatureParseError as e:
            logger.warning(f"Unparsable feature file kept as plain file: {e}")
            return None

        document = self._finalize_document(parsed)

        root_folder = os.path.relpath(base_dir, os.path.dirname(os.path.abspath(path)))
        return FeatureFileNode(
            path=path,
            name=os.path.basename(path),
            write_path=write_path + HTML_SUFFIX,
            toc_name=document.name,
            link="./" + _posix(rel_path) + HTML_SUFFIX,
            root_folder="" if root_folder == os.curdir else _posix(root_folder) + "/",
            document=document,
        )

    def _finalize_document(self, document: Document) -> Document:
        """
        Normalize a parsed document and resolve its implementation status.

        Tag names lose their '@', doc strings are escaped, steps are
        resolved, and the feature name and tags are stamped on every child.
        """
        feature_tags = normalize_tags(document.tags)

        children: List[ScenarioLike] = []
        for child in document.children:
            child = replace(
                child,
                tags=normalize_tags(child.tags),
                steps=[_escape_step_argument(step) for step in child.steps],
            )
            child = self._resolver.resolve_scenario(child)
            children.append(replace(
                child,
                feature_tags=list(feature_tags),
                feature_name=document.name,
            ))

        return replace(
            document,
            tags=feature_tags,
            children=children,
            implemented=self._resolver.feature_implemented(children),
        )

# -----------------------------------------------------------------------------
# NORMALIZATION HELPERS
# -----------------------------------------------------------------------------

def normalize_tag_name(name: str) -> str:
    """Strip the leading '@' of a Gherkin tag."""
    return name[1:] if name.startswith("@") else name


def normalize_tags(tags: List[Tag]) -> List[Tag]:
    return [replace(tag, name=normalize_tag_name(tag.name)) for tag in tags]


def escape_argument_content(content: str) -> str:
    """
    Trim and HTML-escape multi-line step input.

    Doc strings may hold code or outline placeholders such as <Column 1>.
    """
    return (
        content.strip()
        .replace("&", "&amp;")
        .replace(">", "&gt;")
        .replace("<", "&lt;")
        .replace('"', "&quot;")
    )


def _escape_step_argument(step: Step) -> Step:
    argument = step.argument
    if isinstance(argument, DocStringArgument) and argument.content:
        return replace(step, argument=replace(argument, content=escape_argument_content(argument.content)))
    return step


def _posix(path: str) -> str:
    return path.replace(os.sep, "/")
