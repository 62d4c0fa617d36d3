from __future__ import annotations

"""
Handler Factories.

Builds the stderr and rotating-file sinks fed by the queue listener and
marks every handler created here, so that reconfiguration only ever
removes handlers this package owns (pytest's capture handlers and those of
embedding applications are left alone).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from treesmith.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_treesmith_handler"


def mark_owned(handler: logging.Handler) -> logging.Handler:
    """Flag a handler as created by this package and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_owned(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the output handlers requested by the settings.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Console and/or file handlers, possibly empty
                               when nothing is enabled or the file is unusable.
    """
    sinks: List[logging.Handler] = []
    level = cfg.level_number

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(mark_owned(console))

    if cfg.log_file:
        rotating = _open_rotating_file(cfg)
        if rotating is not None:
            rotating.setLevel(level)
            rotating.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            sinks.append(mark_owned(rotating))

    return sinks


def _open_rotating_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Open the diagnostics file; an unwritable location disables file output."""
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: diagnostics log disabled ({path}): {e}\n")
        return None
