from __future__ import annotations

"""
Path Processor.

Parses a newline-delimited list of path declarations into canonical,
validated entries. Every finding is recorded as a PathIssue; no single line
can abort the batch. Duplicate declarations and file/directory conflicts are
resolved deterministically (the directory declaration always wins).
"""

import logging
from typing import Dict, List

from treesmith.core.processing.sanitizer import (
    NAME_INVALID_CHARS,
    NAME_RESERVED,
    normalize_path,
    split_segments,
    validate_file_name,
)
from treesmith.domain.constants import (
    ISSUE_CONFLICT,
    ISSUE_DEPTH,
    ISSUE_DUPLICATE,
    ISSUE_INVALID,
    ISSUE_RESERVED,
    ISSUE_SANITIZED,
    MAX_CHARS_PER_LINE,
    MAX_DEPTH,
    MAX_LINES,
)
from treesmith.domain.errors import PathTraversalError
from treesmith.domain.path_models import (
    InputValidation,
    IssueSummary,
    PathEntry,
    PathIssue,
    ProcessedPaths,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_input(text: str) -> InputValidation:
    """
    Pre-check the raw input size before processing.

    Oversized input is not rejected by the processor; the outcome is only
    used to warn the caller.

    Args:
        text: Raw multi-line input.

    Returns:
        InputValidation: ok flag and error message.
    """
    if len(text) > MAX_LINES * MAX_CHARS_PER_LINE:
        return InputValidation(
            ok=False,
            error=f"Input too large. Maximum {MAX_LINES} lines recommended.",
        )
    return InputValidation(ok=True)


def count_non_blank_lines(text: str) -> int:
    """Count the lines that contain at least one non-whitespace character."""
    return sum(1 for line in text.split("\n") if line.strip())


def process_paths(text: str) -> ProcessedPaths:
    """
    Convert raw multi-line text into validated path entries.

    Entries live in an arena (list plus canonical path to index map) so that
    the directory upgrade of a conflict is a write to one slot.

    Args:
        text: Newline-delimited path declarations; a trailing '/' marks a directory.

    Returns:
        ProcessedPaths: Surviving entries, every issue and aggregate counts.
    """
    validation = validate_input(text)
    if not validation.ok:
        logger.warning(f"Input validation warning: {validation.error}")

    issues: List[PathIssue] = []
    entries: List[PathEntry] = []
    index_by_path: Dict[str, int] = {}
    seen_lines: Dict[str, List[int]] = {}

    line_count = count_non_blank_lines(text)
    if line_count > MAX_LINES:
        issues.append(PathIssue(
            type=ISSUE_DEPTH,
            path="",
            message=(
                f"Input exceeds {MAX_LINES} lines. "
                "Processing anyway, but performance may be affected."
            ),
        ))

    for index, line in enumerate(text.split("\n")):
        trimmed = line.strip()
        if not trimmed:
            continue

        line_no = index + 1
        is_directory = trimmed.endswith("/")
        raw_path = trimmed[:-1] if is_directory else trimmed

        # 1. Canonical form (traversal attempts drop the line)
        try:
            path = normalize_path(raw_path)
        except PathTraversalError as e:
            issues.append(PathIssue(ISSUE_INVALID, trimmed, str(e), line_no))
            continue

        if not path:
            continue

        # 2. Structural and per-segment validation
        entry_issues = _check_depth(path, line_no)
        entry_issues.extend(_validate_segments(path, line_no))

        # 3. Duplicate tracking
        prior_lines = seen_lines.get(path)
        if prior_lines is not None:
            entry_issues.append(PathIssue(
                type=ISSUE_DUPLICATE,
                path=path,
                message=f"Duplicate path (also on lines: {', '.join(map(str, prior_lines))})",
                line=line_no,
            ))
            prior_lines.append(line_no)
        else:
            seen_lines[path] = [line_no]

        # 4. Conflict resolution against the representative entry
        existing_index = index_by_path.get(path)
        if existing_index is None:
            index_by_path[path] = len(entries)
            entries.append(PathEntry(path, is_directory, line_no, entry_issues))
            issues.extend(entry_issues)
            continue

        resolution = _resolve_conflict(entries[existing_index], is_directory, line_no)
        entry_issues.extend(resolution[:1])
        issues.extend(entry_issues)
        issues.extend(resolution[1:])

    folder_count = sum(1 for e in entries if e.is_directory)
    file_count = len(entries) - folder_count

    logger.debug(
        f"Processed {line_count} lines: {folder_count} folders, "
        f"{file_count} files, {len(issues)} issues."
    )

    return ProcessedPaths(
        entries=entries,
        issues=issues,
        folder_count=folder_count,
        file_count=file_count,
    )


def format_cleaned_paths(processed: ProcessedPaths) -> str:
    """
    Render the surviving entries back to the input format.

    Canonical paths keep entry order; directories get their trailing '/'.
    Re-processing the output yields no duplicate or conflict issues.
    """
    return "\n".join(entry.to_line() for entry in processed.entries)


def summarize_issues(processed: ProcessedPaths) -> IssueSummary:
    """
    Aggregate issue counters and build the preview summary label.

    Reserved names are counted together with invalid names.

    Args:
        processed: Output of process_paths.

    Returns:
        IssueSummary: Counters plus a label such as
                      '2 folders, 4 files (1 duplicate, 1 sanitized)'.
    """
    counts: Dict[str, int] = {}
    for issue in processed.issues:
        counts[issue.type] = counts.get(issue.type, 0) + 1

    duplicates = counts.get(ISSUE_DUPLICATE, 0)
    conflicts = counts.get(ISSUE_CONFLICT, 0)
    invalid = counts.get(ISSUE_INVALID, 0) + counts.get(ISSUE_RESERVED, 0)
    sanitized = counts.get(ISSUE_SANITIZED, 0)
    depth = counts.get(ISSUE_DEPTH, 0)

    label = (
        f"{_plural(processed.folder_count, 'folder')}, "
        f"{_plural(processed.file_count, 'file')}"
    )

    parts: List[str] = []
    if duplicates:
        parts.append(_plural(duplicates, "duplicate"))
    if conflicts:
        parts.append(_plural(conflicts, "conflict"))
    if invalid:
        parts.append(f"{invalid} invalid")
    if sanitized:
        parts.append(f"{sanitized} sanitized")
    if depth:
        parts.append(f"{depth} too deep")
    if parts:
        label += f" ({', '.join(parts)})"

    return IssueSummary(
        total=len(processed.issues),
        duplicates=duplicates,
        conflicts=conflicts,
        invalid=invalid,
        sanitized=sanitized,
        depth=depth,
        label=label,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _check_depth(path: str, line_no: int) -> List[PathIssue]:
    """Flag paths nested deeper than the supported limit."""
    if len(split_segments(path)) > MAX_DEPTH:
        return [PathIssue(ISSUE_DEPTH, path, f"Path depth exceeds {MAX_DEPTH} levels", line_no)]
    return []


def _validate_segments(path: str, line_no: int) -> List[PathIssue]:
    """Produce at most one issue per failing segment, in segment order."""
    found: List[PathIssue] = []
    for segment in split_segments(path):
        result = validate_file_name(segment)
        if result.valid:
            continue

        if result.issue == NAME_INVALID_CHARS and result.sanitized is not None:
            found.append(PathIssue(
                type=ISSUE_SANITIZED,
                path=segment,
                message=f'Sanitized: "{segment}" → "{result.sanitized}"',
                line=line_no,
            ))
        elif result.issue == NAME_RESERVED:
            found.append(PathIssue(ISSUE_RESERVED, segment, result.issue, line_no))
        else:
            found.append(PathIssue(ISSUE_INVALID, segment, result.issue or "Invalid name", line_no))
    return found


def _resolve_conflict(existing: PathEntry, is_directory: bool, line_no: int) -> List[PathIssue]:
    """
    Compare a repeated declaration with its representative entry.

    Returns the conflict issue of the new line first, followed by the
    'Resolved' issue attached retroactively to the representative when the
    new declaration upgrades it to a directory. Same-kind repeats return
    nothing.
    """
    if existing.is_directory == is_directory:
        return []

    path = existing.path
    issues = [PathIssue(
        type=ISSUE_CONFLICT,
        path=path,
        message=(
            f"Conflict: defined as both {_kind(existing.is_directory)} "
            f"and {_kind(is_directory)}"
        ),
        line=line_no,
    )]

    if is_directory and not existing.is_directory:
        existing.is_directory = True
        resolved = PathIssue(
            type=ISSUE_CONFLICT,
            path=path,
            message="Resolved: treating as directory",
            line=existing.original_line,
        )
        existing.issues.append(resolved)
        issues.append(resolved)
        logger.debug(f"Upgraded '{path}' (line {existing.original_line}) to directory.")

    return issues


def _kind(is_directory: bool) -> str:
    return "directory" if is_directory else "file"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"
