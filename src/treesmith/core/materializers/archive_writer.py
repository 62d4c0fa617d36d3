from __future__ import annotations

"""
Archive Writer.

Serializes a finished tree into an in-memory zip container with one
zero-length entry per file node. Directory entries are implied by the file
paths. Compression runs in a worker thread so callers can await it from the
event loop.
"""

import asyncio
import io
import logging
import os
import zipfile
from typing import List

from treesmith.core.analysis.tree_builder import iter_nodes
from treesmith.domain.constants import DEFAULT_ARCHIVE_NAME, DEFAULT_COMPRESSION_LEVEL
from treesmith.domain.errors import ArchiveError
from treesmith.domain.tree_models import TreeNode
from treesmith.infra.fs import check_existing_output_files

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

async def generate_archive(
        tree: TreeNode,
        *,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """
    Produce the zip archive for a tree.

    Args:
        tree: Root node of the tree to serialize.
        compression_level: Deflate level (0-9).

    Returns:
        bytes: The complete archive.

    Raises:
        ArchiveError: If the archive cannot be generated.
    """
    try:
        data = await asyncio.to_thread(build_archive_bytes, tree, compression_level)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        logger.error(f"Archive generation failed: {e}")
        raise ArchiveError(f"Failed to generate archive: {e}") from e

    logger.info(f"Archive generated ({len(data)} bytes).")
    return data


def build_archive_bytes(tree: TreeNode, compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """
    Synchronously build the zip archive for a tree.

    Args:
        tree: Root node of the tree to serialize.
        compression_level: Deflate level (0-9).

    Returns:
        bytes: The complete archive.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(
            buffer,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=compression_level,
    ) as zf:
        for file_path in collect_file_paths(tree):
            zf.writestr(file_path, b"")
    return buffer.getvalue()


def collect_file_paths(tree: TreeNode) -> List[str]:
    """
    List the archive member names of every file node, in tree order.

    Args:
        tree: Root node (its own name is never part of a member path).

    Returns:
        List[str]: Slash-joined member names.
    """
    return [node.path for node in iter_nodes(tree) if not node.is_directory]


async def save_archive(
        data: bytes,
        output_dir: str,
        file_name: str = DEFAULT_ARCHIVE_NAME,
        *,
        overwrite: bool = False,
) -> str:
    """
    Persist archive bytes to the host filesystem.

    Args:
        data: Archive content from generate_archive.
        output_dir: Destination directory (created when missing).
        file_name: Target file name.
        overwrite: Replace an existing file instead of failing.

    Returns:
        str: Absolute path of the written archive.

    Raises:
        ArchiveError: If the target exists (without overwrite) or cannot be written.
    """
    target = os.path.abspath(os.path.join(output_dir, file_name))
    if not overwrite and check_existing_output_files(output_dir, [file_name]):
        raise ArchiveError(f"Archive already exists: {target}")

    try:
        await asyncio.to_thread(_write_file, target, data)
    except OSError as e:
        logger.error(f"Failed to save archive to '{target}': {e}")
        raise ArchiveError(f"Failed to save archive to '{target}': {e}") from e

    logger.info(f"Archive saved to: {target}")
    return target

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _write_file(path: str, data: bytes) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
