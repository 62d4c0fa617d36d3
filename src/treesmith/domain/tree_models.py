from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type produced by the Tree Builder and consumed
by the renderer and the materializers.
"""

from dataclasses import dataclass, field
from typing import List

from treesmith.domain.path_models import PathIssue

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class TreeNode:
    """
    Represents a directory or file in the output tree.

    Attributes:
        name: Last path segment (empty only for the synthetic root).
        path: Full canonical path (empty for the root).
        is_directory: Node kind.
        children: Ordered child nodes, unique by name.
        issues: Diagnostics inherited from the corresponding entry.
    """
    name: str
    path: str
    is_directory: bool
    children: List["TreeNode"] = field(default_factory=list)
    issues: List[PathIssue] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.path == ""


def create_root() -> TreeNode:
    """Create the synthetic root directory node."""
    return TreeNode(name="", path="", is_directory=True)
