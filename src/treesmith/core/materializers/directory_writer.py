from __future__ import annotations

"""
Directory Writer.

Materializes a finished tree against a writable directory capability. The
traversal is strictly sequential (one awaited create call per node) so that
creation order matches the rendered order: directories before files,
left to right. A failure aborts the whole traversal; entries already created
are left in place.
"""

import logging
from typing import Any, Callable, Optional, Protocol

from treesmith.core.analysis.tree_builder import count_nodes
from treesmith.domain.constants import DEFAULT_PROGRESS_INTERVAL
from treesmith.domain.errors import MaterializationError
from treesmith.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# -----------------------------------------------------------------------------
# CAPABILITY CONTRACT
# -----------------------------------------------------------------------------

class DirectoryHandle(Protocol):
    """
    Writable directory capability consumed by the writer.

    'create_subdirectory' must succeed when the directory already exists.
    """

    async def create_subdirectory(self, name: str) -> "DirectoryHandle":
        ...

    async def create_file(self, name: str) -> Any:
        ...

    async def write_and_close(self, handle: Any, data: bytes) -> None:
        ...

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

async def write_tree_to_directory(
        root_handle: DirectoryHandle,
        tree: TreeNode,
        on_progress: Optional[ProgressCallback] = None,
        *,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> int:
    """
    Create every directory and (empty) file of a tree below a root handle.

    Args:
        root_handle: Capability for the target root directory.
        tree: Root node of the tree; the root itself is never created.
        on_progress: Called with (visited, total) every 'progress_interval'
                     nodes and once more after the last node.
        progress_interval: Reporting granularity in nodes.

    Returns:
        int: Number of nodes created.

    Raises:
        MaterializationError: If any directory or file cannot be created.
    """
    writer = _TreeWriter(
        total=count_nodes(tree) - 1,
        on_progress=on_progress,
        interval=max(1, progress_interval),
    )

    logger.info(f"Writing {writer.total} entries to directory.")
    await writer.write_children(tree, root_handle)
    logger.info(f"Directory materialization complete ({writer.visited} entries).")

    return writer.visited

# -----------------------------------------------------------------------------
# INTERNAL TRAVERSAL STATE
# -----------------------------------------------------------------------------

class _TreeWriter:
    """Holds the progress counters of a single traversal."""

    def __init__(self, total: int, on_progress: Optional[ProgressCallback], interval: int):
        self.total = total
        self.visited = 0
        self._on_progress = on_progress
        self._interval = interval

    async def write_children(self, node: TreeNode, handle: DirectoryHandle) -> None:
        for child in node.children:
            await self.write_node(child, handle)

    async def write_node(self, node: TreeNode, parent: DirectoryHandle) -> None:
        self.visited += 1
        self._report()

        kind = "directory" if node.is_directory else "file"
        try:
            if node.is_directory:
                dir_handle = await parent.create_subdirectory(node.name)
            else:
                file_handle = await parent.create_file(node.name)
                await parent.write_and_close(file_handle, b"")
        except Exception as e:
            logger.error(f"Failed to create {kind} '{node.path}': {e}")
            raise MaterializationError(kind, node.name, str(e) or type(e).__name__) from e

        if node.is_directory:
            await self.write_children(node, dir_handle)

    def _report(self) -> None:
        if self._on_progress is None:
            return
        if self.visited % self._interval == 0 or self.visited == self.total:
            self._on_progress(self.visited, self.total)
