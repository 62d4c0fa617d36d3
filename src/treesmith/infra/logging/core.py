from __future__ import annotations

"""
Logging Lifecycle.

Every record produced by the pipeline or by the materializers is put on an
in-memory queue by a single QueueHandler attached to the root logger. A
QueueListener thread drains that queue into the real sinks, so a slow disk
never stalls the event loop driving a directory write.

The listener and a 'configured' flag are stored on the root logger itself;
a second call is a no-op unless 'force' is given.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from treesmith.infra.fs import get_user_data_dir
from treesmith.infra.logging.config import LoggingConfig
from treesmith.infra.logging.handlers import build_sinks, is_owned, mark_owned

_CONFIGURED_FLAG_ATTR: str = "_treesmith_configured"
_QUEUE_LISTENER_ATTR: str = "_treesmith_queue_listener"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_default_log_path(file_name: str = "treesmith.log") -> str:
    """Location of the diagnostics file inside the application data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route all records through a queue to the sinks described by 'cfg'.

    Args:
        cfg: Logging settings.
        force: Tear down and rebuild an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        _teardown(root)
        root.setLevel(cfg.level_number)

        sinks = build_sinks(cfg)
        if not sinks:
            return root

        records: queue.Queue = queue.Queue(-1)
        listener = QueueListener(records, *sinks, respect_handler_level=True)
        listener.start()
        atexit.register(_stop_listener, listener)

        root.addHandler(mark_owned(QueueHandler(records)))
        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        return root

    except Exception as e:
        return _emergency_console(root, e)


def get_logger(name: str) -> logging.Logger:
    """Named logger below the configured root."""
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the last lines of the diagnostics file.

    Args:
        n_lines: How many trailing lines to return.
        log_path: Explicit file; defaults to get_default_log_path().

    Returns:
        str: The tail, or a short notice when the file is missing or unreadable.
    """
    path = log_path or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return "".join(f.readlines()[-n_lines:])
    except OSError as e:
        return f"Error retrieving logs: {e}"

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _teardown(root: logging.Logger) -> None:
    """Stop the running listener and detach owned handlers."""
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)

    for handler in [h for h in root.handlers if is_owned(h)]:
        root.removeHandler(handler)
        handler.close()


def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener once; a second stop (atexit after a reset) is skipped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()


def _emergency_console(root: logging.Logger, error: Exception) -> logging.Logger:
    """Fall back to a plain stderr handler when the queue setup fails."""
    for handler in [h for h in root.handlers if is_owned(h)]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("LOGGING FALLBACK | %(levelname)s | %(message)s"))
    root.addHandler(mark_owned(console))
    root.setLevel(logging.INFO)
    root.warning(f"Logging setup failed ({error}); using console only.")
    return root
