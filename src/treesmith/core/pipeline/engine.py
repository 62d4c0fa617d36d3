from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the path-to-tree workflow:
1. Validates the raw text input.
2. Processes paths into entries and issues.
3. Builds the rendered tree.
4. Aggregates summary metrics for the interface layer.

Materialization (archive or directory) is exposed as separate coroutines that
consume a successful result; a failed materialization never invalidates the
result, so callers may retry.
"""

import logging
from typing import Any, Dict, Optional

from treesmith.core.analysis.tree_builder import build_tree, count_nodes
from treesmith.core.materializers.archive_writer import generate_archive, save_archive
from treesmith.core.materializers.directory_writer import (
    DirectoryHandle,
    ProgressCallback,
    write_tree_to_directory,
)
from treesmith.core.pipeline.validator import validate_config
from treesmith.core.processing.path_processor import (
    count_non_blank_lines,
    process_paths,
    summarize_issues,
)
from treesmith.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from treesmith.infra.fs import resolve_dir

logger = logging.getLogger(__name__)


def run_pipeline(text: Any) -> PipelineResult:
    """
    Execute the path-to-tree pipeline on a text blob.

    Args:
        text: Newline-delimited path declarations.

    Returns:
        PipelineResult: Object containing status, entries, tree and summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Input Validation
    # -------------------------------------------------------------------------
    if not isinstance(text, str):
        msg = f"Invalid input type: expected str, received {type(text).__name__}."
        logger.error(msg)
        return create_error_result(msg)

    line_count = count_non_blank_lines(text)
    if line_count == 0:
        msg = "No paths provided."
        logger.warning(msg)
        return create_error_result(msg, summary_extra={"lines": 0})

    # -------------------------------------------------------------------------
    # 2) Processing & Tree Construction
    # -------------------------------------------------------------------------
    processed = process_paths(text)
    tree = build_tree(processed.entries)
    issue_summary = summarize_issues(processed)

    # -------------------------------------------------------------------------
    # 3) Summary
    # -------------------------------------------------------------------------
    summary: Dict[str, Any] = {
        "lines": line_count,
        "folders": processed.folder_count,
        "files": processed.file_count,
        "nodes": count_nodes(tree) - 1,
        "issues": {
            "total": issue_summary.total,
            "duplicate": issue_summary.duplicates,
            "conflict": issue_summary.conflicts,
            "invalid": issue_summary.invalid,
            "sanitized": issue_summary.sanitized,
            "depth": issue_summary.depth,
        },
        "label": issue_summary.label,
    }

    logger.info(f"Pipeline completed: {issue_summary.label}")
    return create_success_result(processed, tree, summary)


async def export_archive(
        result: PipelineResult,
        config: Optional[Dict[str, Any]] = None,
        *,
        output_dir: Optional[str] = None,
) -> str:
    """
    Generate and persist the zip archive for a successful result.

    Args:
        result: Successful pipeline result.
        config: Raw configuration (archive name, compression, overwrite).
        output_dir: Override of the configured output directory.

    Returns:
        str: Absolute path of the written archive.

    Raises:
        ValueError: If the result is not successful.
        ArchiveError: If generation or persistence fails.
    """
    if not result.ok:
        raise ValueError(f"Cannot export a failed pipeline result: {result.error}")

    cfg, warnings = validate_config(config or {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    target_dir = resolve_dir(output_dir, cfg["output_dir"])
    data = await generate_archive(result.tree, compression_level=cfg["compression_level"])
    return await save_archive(data, target_dir, cfg["archive_name"], overwrite=cfg["overwrite"])


async def export_directory(
        result: PipelineResult,
        root_handle: DirectoryHandle,
        on_progress: Optional[ProgressCallback] = None,
        config: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Write the tree of a successful result below a writable root.

    Args:
        result: Successful pipeline result.
        root_handle: Capability returned by pick_writable_root.
        on_progress: Optional (visited, total) callback.
        config: Raw configuration (progress interval).

    Returns:
        int: Number of created entries.

    Raises:
        ValueError: If the result is not successful.
        MaterializationError: If any entry cannot be created.
    """
    if not result.ok:
        raise ValueError(f"Cannot export a failed pipeline result: {result.error}")

    cfg, _ = validate_config(config or {}, strict=False)
    return await write_tree_to_directory(
        root_handle,
        result.tree,
        on_progress,
        progress_interval=cfg["progress_interval"],
    )
