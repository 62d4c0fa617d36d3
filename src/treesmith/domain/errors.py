from __future__ import annotations

"""
Domain Exception Hierarchy.

Validation findings are reported as PathIssue values; the exceptions below
are reserved for conditions that abort an operation (path traversal during
normalization, archive generation and filesystem materialization failures).
"""


class TreesmithError(Exception):
    """Base class for all application-level failures."""


class PathTraversalError(TreesmithError, ValueError):
    """Raised when a path contains a parent directory reference."""


class ArchiveError(TreesmithError):
    """Raised when the zip archive cannot be generated or persisted."""


class MaterializationError(TreesmithError):
    """
    Raised when a single directory or file cannot be created on disk.

    Attributes:
        kind: Either 'directory' or 'file'.
        name: Name of the offending entry.
    """

    def __init__(self, kind: str, name: str, reason: str):
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(f'Failed to create {kind} "{name}": {reason}')
