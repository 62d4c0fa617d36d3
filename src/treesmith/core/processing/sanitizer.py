from __future__ import annotations

"""
Path Normalization and Name Sanitization Service.

Canonicalizes user supplied path strings and classifies individual path
segments against the portable naming rules (forbidden characters, reserved
device names, length limits). Rejection of parent directory references is
the security boundary that keeps every materialized entry inside the
declared root.
"""

import re
from dataclasses import dataclass
from typing import Final, List, Optional

from treesmith.domain.constants import (
    INVALID_CHARS,
    MAX_NAME_LENGTH,
    REPLACEMENT_CHAR,
    RESERVED_NAMES,
)
from treesmith.domain.errors import PathTraversalError

_SLASH_RUNS: Final[re.Pattern] = re.compile(r"/+")

TRAVERSAL_MESSAGE: Final[str] = "Parent directory references (..) are not allowed"

# Issue identifiers returned by validate_file_name
NAME_EMPTY: Final[str] = "Empty name"
NAME_INVALID_CHARS: Final[str] = "Contains invalid characters"
NAME_RESERVED: Final[str] = "Reserved name"
NAME_TOO_LONG: Final[str] = "Name too long"


@dataclass(frozen=True)
class NameValidation:
    """
    Classification of a single path segment.

    Attributes:
        valid: True when the segment passes every rule.
        issue: Identifier of the first failing rule.
        sanitized: Replacement name, only for invalid-character failures.
    """
    valid: bool
    issue: Optional[str] = None
    sanitized: Optional[str] = None

# -----------------------------------------------------------------------------
# NORMALIZATION API
# -----------------------------------------------------------------------------

def normalize_path(path: str) -> str:
    """
    Canonicalize a raw path string.

    Converts backslashes to forward slashes, collapses slash runs, strips
    leading and trailing slashes and drops '.' segments. The result of
    normalizing an already canonical path is the path itself.

    Args:
        path: Raw path declaration (directory marker already removed).

    Returns:
        str: Canonical path, possibly empty.

    Raises:
        PathTraversalError: If any segment equals '..'.
    """
    path = path.replace("\\", "/")
    path = _SLASH_RUNS.sub("/", path)
    path = path.strip("/")

    parts = [p for p in path.split("/") if p != "."]
    if any(p == ".." for p in parts):
        raise PathTraversalError(TRAVERSAL_MESSAGE)

    return "/".join(parts)


def split_segments(path: str) -> List[str]:
    """Split a canonical path into its segments ('' yields no segments)."""
    return path.split("/") if path else []

# -----------------------------------------------------------------------------
# NAME VALIDATION API
# -----------------------------------------------------------------------------

def sanitize_file_name(name: str) -> str:
    """
    Replace every forbidden character with the replacement character.

    Idempotent: the replacement character is itself a valid character.
    """
    return INVALID_CHARS.sub(REPLACEMENT_CHAR, name)


def is_reserved_name(name: str) -> bool:
    """Check for Windows device names (CON, PRN, COM1, LPT9.txt, ...)."""
    return RESERVED_NAMES.match(name) is not None


def validate_file_name(name: str) -> NameValidation:
    """
    Classify a single path segment.

    Rules are evaluated in order and only the first failing one is reported:
    empty name, forbidden characters, reserved device name, excessive length.

    Args:
        name: A single path segment.

    Returns:
        NameValidation: Validation outcome.
    """
    if not name or not name.strip():
        return NameValidation(valid=False, issue=NAME_EMPTY)

    if INVALID_CHARS.search(name):
        return NameValidation(
            valid=False,
            issue=NAME_INVALID_CHARS,
            sanitized=sanitize_file_name(name),
        )

    if is_reserved_name(name):
        return NameValidation(valid=False, issue=NAME_RESERVED)

    if len(name) > MAX_NAME_LENGTH:
        return NameValidation(valid=False, issue=NAME_TOO_LONG)

    return NameValidation(valid=True)
