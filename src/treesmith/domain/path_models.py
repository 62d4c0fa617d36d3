from __future__ import annotations

"""
Path Processing Domain Models.

Defines the Data Transfer Objects produced by the Path Processor: immutable
diagnostics, the surviving path entries and the aggregated processing result.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PathIssue:
    """
    Non-fatal diagnostic attached to an entry, a node or the whole input.

    Attributes:
        type: Issue category (duplicate, conflict, invalid, reserved, depth, sanitized).
        path: Canonical path or single segment the issue refers to.
        message: Human-readable description.
        line: 1-based source line number, when the issue is line-bound.
    """
    type: str
    path: str
    message: str
    line: Optional[int] = None


# -----------------------------------------------------------------------------
# ENTRIES
# -----------------------------------------------------------------------------

@dataclass
class PathEntry:
    """
    One logical path declaration that survived duplicate and conflict resolution.

    Attributes:
        path: Canonical path (slash-separated, no empty segments).
        is_directory: True when declared (or upgraded) as a directory.
        original_line: 1-based line of the first declaration.
        issues: Diagnostics discovered for this entry, in discovery order.
    """
    path: str
    is_directory: bool
    original_line: int
    issues: List[PathIssue] = field(default_factory=list)

    def to_line(self) -> str:
        """Render the entry back to its input form (trailing '/' for directories)."""
        return f"{self.path}/" if self.is_directory else self.path


@dataclass
class ProcessedPaths:
    """
    Output of the Path Processor.

    Attributes:
        entries: Final list of surviving entries.
        issues: Every issue discovered, including global ones.
        folder_count: Number of directory entries.
        file_count: Number of file entries.
    """
    entries: List[PathEntry] = field(default_factory=list)
    issues: List[PathIssue] = field(default_factory=list)
    folder_count: int = 0
    file_count: int = 0


@dataclass(frozen=True)
class IssueSummary:
    """Aggregated issue counters used by the preview summary line."""
    total: int = 0
    duplicates: int = 0
    conflicts: int = 0
    invalid: int = 0
    sanitized: int = 0
    depth: int = 0
    label: str = ""


@dataclass(frozen=True)
class InputValidation:
    """Outcome of the raw input size pre-check."""
    ok: bool
    error: str = ""
