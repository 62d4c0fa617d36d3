from __future__ import annotations

"""
Tree Renderer.

Converts TreeNode hierarchies into labeled, indented ASCII lines with
per-node issue badges for terminal previews.
"""

from typing import List

from treesmith.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(tree: TreeNode, show_issues: bool = True) -> List[str]:
    """
    Render a whole tree (root excluded) into display lines.

    Args:
        tree: Root node produced by build_tree.
        show_issues: Append '[type]' badges for every issue of a node.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = []
    render_tree_structure(tree, lines, prefix="", show_issues=show_issues)
    return lines


def render_tree_structure(
        node: TreeNode,
        lines: List[str],
        prefix: str = "",
        show_issues: bool = True,
) -> None:
    """
    Recursively transform the children of a node into a list of strings.

    Uses standard ASCII connectors (├──, └──) and keeps the child order of
    the tree, which is already the rendered order.

    Args:
        node: Current directory node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        show_issues: Enable issue badges.
    """
    total = len(node.children)

    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        label = f"{child.name}/" if child.is_directory else child.name
        if show_issues and child.issues:
            label += " " + " ".join(f"[{issue.type}]" for issue in child.issues)

        lines.append(f"{prefix}{connector}{label}")

        if child.is_directory and child.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(child, lines, prefix=new_prefix, show_issues=show_issues)
