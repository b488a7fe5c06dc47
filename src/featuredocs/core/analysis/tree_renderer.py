from __future__ import annotations

"""
Tree Renderer.

Converts a documentation tree into a text preview. Feature files show
their scenario count and implementation status; downgraded or foreign
files are listed as-is.
"""

from typing import List

from featuredocs.domain.tree_models import DirectoryNode, FeatureFileNode, TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(root: TreeNode) -> List[str]:
    """
    Render a documentation tree with ASCII connectors (├──, └──).

    Args:
        root: Node to render; it heads the output.

    Returns:
        List[str]: Visual lines of the tree, in tree order.
    """
    lines: List[str] = [_label(root)]
    if isinstance(root, DirectoryNode):
        render_tree_structure(root.children, lines, prefix="")
    return lines


def render_tree_structure(nodes: List[TreeNode], lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the lines of a list of sibling nodes.

    Args:
        nodes: Siblings to render, in their stored order.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(nodes)
    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(node)}")

        if isinstance(node, DirectoryNode):
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(node.children, lines, prefix=new_prefix)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _label(node: TreeNode) -> str:
    if isinstance(node, FeatureFileNode):
        document = node.document
        status = "implemented" if document.implemented else "not implemented"
        return f"{node.name} [{document.name}: {len(document.children)} scenarios, {status}]"
    return node.name
