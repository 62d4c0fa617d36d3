from __future__ import annotations

"""
Directory Tree Builder.

Folds the flat list of processed entries into a single rooted TreeNode
hierarchy. Missing intermediate directories are created on the fly and the
final child order (directories first, then case-insensitive name order) is
applied once the whole tree is assembled.
"""

import logging
import unicodedata
from typing import Dict, Iterator, List, Tuple

from treesmith.domain.constants import ISSUE_CONFLICT
from treesmith.domain.path_models import PathEntry, PathIssue
from treesmith.domain.tree_models import TreeNode, create_root

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(entries: List[PathEntry]) -> TreeNode:
    """
    Construct the output tree from the surviving entries.

    Entries are inserted directories first and then by canonical path, which
    decides where issues attach when several entries reach the same node.

    Args:
        entries: Final entry list produced by the Path Processor.

    Returns:
        TreeNode: The synthetic root (path '').
    """
    root = create_root()
    node_map: Dict[str, TreeNode] = {"": root}

    ordered = sorted(entries, key=lambda e: (not e.is_directory, collation_key(e.path)))

    for entry in ordered:
        _insert_entry(entry, root, node_map)

    sort_tree(root)

    logger.debug(f"Tree built: {len(node_map) - 1} nodes from {len(entries)} entries.")
    return root


def collation_key(name: str) -> Tuple[str, str, str]:
    """
    Human ordering for names, independent of the process locale.

    Compares accent-stripped case-folded text first, then case-folded text,
    and finally puts lowercase before uppercase: 'alpha' < 'beta' < 'Beta'
    < 'Zeta'. Accented letters sort next to their base letter.
    """
    folded = name.casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(ch)
    )
    return base, folded, name.swapcase()


def sort_tree(node: TreeNode) -> None:
    """
    Recursively order children in place: directories first, then by name.
    """
    node.children.sort(key=lambda child: (not child.is_directory, collation_key(child.name)))
    for child in node.children:
        sort_tree(child)


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield every node depth-first in rendered order, excluding the root."""
    for child in tree.children:
        yield child
        yield from iter_nodes(child)


def count_nodes(tree: TreeNode) -> int:
    """Count all nodes of the tree, the synthetic root included."""
    return 1 + sum(count_nodes(child) for child in tree.children)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _insert_entry(entry: PathEntry, root: TreeNode, node_map: Dict[str, TreeNode]) -> None:
    """Walk the entry path from the root, creating nodes as needed."""
    parts = [p for p in entry.path.split("/") if p]
    parent = root
    current_path = ""

    for i, part in enumerate(parts):
        is_last = i == len(parts) - 1
        segment_path = f"{current_path}/{part}" if current_path else part

        node = node_map.get(segment_path)

        if node is None:
            node = TreeNode(
                name=part,
                path=segment_path,
                is_directory=entry.is_directory or not is_last,
                issues=list(entry.issues) if is_last else [],
            )
            node_map[segment_path] = node
            parent.children.append(node)
        elif is_last:
            if not entry.is_directory:
                node.issues.extend(entry.issues)
        elif not node.is_directory:
            # A declared file is also the parent of a deeper path
            node.is_directory = True
            node.issues.append(PathIssue(
                type=ISSUE_CONFLICT,
                path=segment_path,
                message="Resolved: treating as directory",
            ))

        parent = node
        current_path = segment_path
