from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the validation limits, character classes and
naming defaults shared by the path processing and materialization layers.
"""

import re
from typing import Final

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# PROCESSING LIMITS
# -----------------------------------------------------------------------------

MAX_DEPTH: Final[int] = 30
MAX_LINES: Final[int] = 5000
MAX_NAME_LENGTH: Final[int] = 255

# Raw character budget per line used by the input size pre-check
MAX_CHARS_PER_LINE: Final[int] = 200

# -----------------------------------------------------------------------------
# NAME VALIDATION PATTERNS
# -----------------------------------------------------------------------------

INVALID_CHARS: Final[re.Pattern] = re.compile(r'[<>:"|?*\x00-\x1F]')
RESERVED_NAMES: Final[re.Pattern] = re.compile(
    r"^(CON|PRN|AUX|NUL|COM[1-9]|LPT[1-9])(\.|$)",
    re.IGNORECASE,
)
REPLACEMENT_CHAR: Final[str] = "-"

# -----------------------------------------------------------------------------
# ISSUE TAXONOMY
# -----------------------------------------------------------------------------

ISSUE_DUPLICATE: Final[str] = "duplicate"
ISSUE_CONFLICT: Final[str] = "conflict"
ISSUE_INVALID: Final[str] = "invalid"
ISSUE_RESERVED: Final[str] = "reserved"
ISSUE_DEPTH: Final[str] = "depth"
ISSUE_SANITIZED: Final[str] = "sanitized"

# -----------------------------------------------------------------------------
# MATERIALIZATION DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_ARCHIVE_NAME: Final[str] = "project-structure.zip"
DEFAULT_COMPRESSION_LEVEL: Final[int] = 6
DEFAULT_PROGRESS_INTERVAL: Final[int] = 10
