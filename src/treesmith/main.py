from __future__ import annotations

"""
Process Entry Point.

Installs a last-resort exception hook and hands control to the CLI
controller. A crash that escapes the controller is written to the
diagnostics log and echoed on stderr together with the most recent log
lines, then the process exits with status 1. Ctrl+C always maps to 130.
"""

import logging
import os
import sys
import traceback
from typing import Any, List, Optional

# Running this file directly ('python src/treesmith/main.py') needs 'src' importable
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, "frozen", False):
    _src_root = os.path.dirname(PACKAGE_DIR)
    if _src_root not in sys.path:
        sys.path.insert(0, _src_root)

_BANNER_WIDTH = 80
_LOG_TAIL_LINES = 20

# -----------------------------------------------------------------------------
# CRASH REPORTING
# -----------------------------------------------------------------------------

def _echo_log_tail() -> None:
    """Print the last diagnostics log lines, if the log can be located."""
    from treesmith.infra.logging import get_default_log_path, get_recent_logs

    log_path = get_default_log_path()
    print(f"Recent log entries ({log_path}):", file=sys.stderr)
    print(get_recent_logs(n_lines=_LOG_TAIL_LINES, log_path=log_path), file=sys.stderr)


def global_exception_handler(exctype: type, value: BaseException, tb: Any) -> None:
    """
    sys.excepthook replacement.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    if issubclass(exctype, KeyboardInterrupt):
        print("\nInterrupted by user.", file=sys.stderr)
        sys.exit(130)

    trace_text = "".join(traceback.format_exception(exctype, value, tb))
    supervisor_log = logging.getLogger("treesmith.supervisor")
    supervisor_log.critical(f"Unhandled {exctype.__name__}: {value}\n{trace_text}")

    rule = "=" * _BANNER_WIDTH
    sys.stderr.write(f"\n{rule}\nCRITICAL ERROR (TREESMITH CLI)\n{rule}\n{trace_text}\n")

    try:
        _echo_log_tail()
    except Exception as e:
        supervisor_log.error(f"Diagnostics log tail unavailable: {e}")

    sys.exit(1)


sys.excepthook = global_exception_handler

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI under the crash supervisor.

    Args:
        argv: Argument list without the program name; None reads sys.argv.

    Returns:
        int: Process exit code.
    """
    from treesmith.interface.cli.app import main as run_cli

    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
