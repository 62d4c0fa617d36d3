from __future__ import annotations

"""
Preference Validation.

Preferences reach the engine from three places (defaults, config.json and
command-line overrides) and are checked here before use. Each known key has
an expected type; values of the wrong type are coerced when the intent is
unambiguous ('yes', ' 3 ') and otherwise replaced by the default. Every
correction is reported as a human-readable warning. In strict mode the
first problem raises instead.
"""

import logging
from typing import Any, Dict, List, Tuple

from treesmith.domain.config import get_default_config

logger = logging.getLogger(__name__)

_FIELD_TYPES: Dict[str, type] = {
    "output_dir": str,
    "archive_name": str,
    "log_level": str,
    "overwrite": bool,
    "show_issues": bool,
    "compression_level": int,
    "progress_interval": int,
}

_RANGES: Dict[str, Tuple[int, int]] = {
    "compression_level": (0, 9),
    "progress_interval": (1, 10),
}

_TRUTHY = frozenset({"true", "1", "yes", "y", "on"})
_FALSY = frozenset({"false", "0", "no", "n", "off"})


class _Findings:
    """Collects corrections, or raises on the first one in strict mode."""

    def __init__(self, strict: bool) -> None:
        self.strict = strict
        self.messages: List[str] = []

    def note(self, message: str) -> None:
        self.messages.append(message)

    def reject(self, message: str, error: type = TypeError, suffix: str = "Using fallback.") -> None:
        if self.strict:
            raise error(message)
        self.messages.append(f"{message} {suffix}")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Check and normalize a preferences dictionary.

    Args:
        config: Raw preferences, normally a dict. Missing keys take defaults;
                unknown keys are passed through untouched.
        strict: Raise TypeError/ValueError instead of correcting.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized preferences and the
                                          warnings describing each correction.
    """
    defaults = get_default_config()
    findings = _Findings(strict)

    if not isinstance(config, dict):
        findings.reject(
            f"Invalid config type: expected dict, received {type(config).__name__}.",
            suffix="Using defaults.",
        )
        logger.warning(findings.messages[-1])
        return defaults, findings.messages

    result: Dict[str, Any] = {**defaults, **config}

    for field, expected in _FIELD_TYPES.items():
        result[field] = _coerce(result.get(field), expected, defaults[field], field, findings)

    for field, (low, high) in _RANGES.items():
        result[field] = _clamp(result[field], low, high, field, findings)

    result["archive_name"] = _with_zip_suffix(result["archive_name"], findings)
    result["log_level"] = result["log_level"].upper()

    return result, findings.messages

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _coerce(value: Any, expected: type, fallback: Any, field: str, findings: _Findings) -> Any:
    """Return 'value' as 'expected', a coerced equivalent, or 'fallback'."""
    if value is None:
        return fallback

    if expected is str and isinstance(value, str):
        return value.strip() or fallback
    if expected is bool and isinstance(value, bool):
        return value
    # bool is an int subclass but never a valid count or level
    if expected is int and isinstance(value, int) and not isinstance(value, bool):
        return value

    if not findings.strict:
        converted = _convert_loosely(value, expected)
        if converted is not None:
            findings.note(f"Field '{field}' converted from {value!r} to {converted!r}.")
            return converted

    findings.reject(
        f"Invalid field '{field}': expected {expected.__name__}, "
        f"received {type(value).__name__}."
    )
    return fallback


def _convert_loosely(value: Any, expected: type) -> Any:
    """Unambiguous conversions from strings (and 0/1 for booleans)."""
    if expected is bool:
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            token = value.strip().lower()
            if token in _TRUTHY:
                return True
            if token in _FALSY:
                return False
        return None

    if expected is int and isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None

    return None


def _clamp(value: int, low: int, high: int, field: str, findings: _Findings) -> int:
    if low <= value <= high:
        return value
    bounded = min(max(value, low), high)
    findings.reject(
        f"Invalid field '{field}': {value} outside [{low}, {high}].",
        error=ValueError,
        suffix=f"Clamped to {bounded}.",
    )
    return bounded


def _with_zip_suffix(name: str, findings: _Findings) -> str:
    if name.lower().endswith(".zip"):
        return name
    findings.reject(
        f"Archive name '{name}' lacks the '.zip' extension.",
        error=ValueError,
        suffix=f"Using '{name}.zip'.",
    )
    return f"{name}.zip"
