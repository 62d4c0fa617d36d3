from __future__ import annotations

"""
Pipeline Outcome.

'run_pipeline' never raises for bad user input; it returns one of these
records instead. A failed outcome carries an empty tree so the interface
layer can render it without special cases.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from treesmith.domain.path_models import ProcessedPaths
from treesmith.domain.tree_models import TreeNode, create_root


@dataclass(frozen=True)
class PipelineResult:
    """
    Outcome of turning a path list into a tree.

    Attributes:
        ok: False when the input was rejected outright.
        error: Reason for the rejection; empty on success.
        processed: Validated entries, issues and counters.
        tree: Root of the built hierarchy.
        summary: Flat counters and the label shown to the user.
    """
    ok: bool
    error: str
    processed: ProcessedPaths = field(default_factory=ProcessedPaths)
    tree: TreeNode = field(default_factory=create_root)
    summary: Dict[str, Any] = field(default_factory=dict)


def create_error_result(error: str, summary_extra: Optional[Dict[str, Any]] = None) -> PipelineResult:
    """Rejected run: no entries and a bare root."""
    return PipelineResult(False, error, summary=dict(summary_extra or {}))


def create_success_result(
        processed: ProcessedPaths,
        tree: TreeNode,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Completed run.

    Args:
        processed: Path Processor output.
        tree: Root returned by the Tree Builder.
        summary_extra: Counters for the summary payload.

    Returns:
        PipelineResult: Frozen outcome with ok=True.
    """
    return PipelineResult(True, "", processed, tree, dict(summary_extra or {}))
