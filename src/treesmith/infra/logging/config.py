from __future__ import annotations

"""
Logging Settings.

A single frozen dataclass describes where records go (stderr, a rotating
diagnostics file or both) and how they are formatted. Severity names are
resolved here so that the CLI '--debug' switch and the persisted
'log_level' preference share one parser.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_SEVERITIES: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(name: Optional[str]) -> int:
    """Map a severity name to its numeric level; unknown names mean INFO."""
    if not name:
        return logging.INFO
    return _SEVERITIES.get(str(name).strip().upper(), logging.INFO)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem.

    Attributes:
        level: Minimum severity name ('DEBUG', 'INFO', ...).
        console: Emit records on stderr.
        log_file: Diagnostics file; None disables file output.
        max_bytes: Size at which the diagnostics file is rolled over.
        backup_count: Rolled-over files to keep.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the diagnostics file.
        datefmt: Timestamp layout of the diagnostics file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_number(self) -> int:
        return resolve_level(self.level)
