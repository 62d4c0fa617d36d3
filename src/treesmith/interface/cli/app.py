from __future__ import annotations

"""
CLI Controller.

One invocation runs these phases:

    settings   defaults or config.json, then flags, then validation
    input      a path-list file, or stdin
    preview    tree view, cleaned list or JSON on stdout
    export     optional zip archive and/or folder structure

Exit codes: 0 success or user cancellation, 1 export failure, 2 unusable
input, 130 Ctrl+C.
"""

import argparse
import asyncio
import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from treesmith.core.analysis.tree_renderer import render_tree
from treesmith.core.pipeline.engine import export_archive, export_directory, run_pipeline
from treesmith.core.pipeline.validator import validate_config
from treesmith.core.processing.path_processor import format_cleaned_paths
from treesmith.domain.config import get_default_config, load_config, save_config
from treesmith.domain.errors import TreesmithError
from treesmith.domain.pipeline_models import PipelineResult
from treesmith.infra.fs import pick_writable_root
from treesmith.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from treesmith.interface.cli import args as cli_args
from treesmith.interface.cli.prompt import display_progress, prompt_yes_no

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one CLI invocation.

    Args:
        argv: Arguments without the program name; None reads sys.argv.

    Returns:
        int: Process exit code.
    """
    _use_utf8_console()
    args = cli_args.build_parser().parse_args(argv)

    settings = _resolve_settings(args)

    if args.save_config:
        save_config(settings)
        logger.info("Preferences saved for the next session.")

    if args.dump_config:
        print(json.dumps(settings, ensure_ascii=False, indent=2))
        return EXIT_OK

    try:
        text = _read_input(args.input_file)
    except OSError as e:
        return _fail(EXIT_BAD_INPUT, f"Cannot read input: {e}")

    try:
        result = run_pipeline(text)
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_BAD_INPUT

    _show_preview(result, args, settings)

    try:
        return _export(result, args, settings)
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except TreesmithError as e:
        logger.critical(f"Export failed: {e}", exc_info=args.debug)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_EXPORT_FAILED
    except OSError as e:
        logger.critical(f"Filesystem failure during export: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_EXPORT_FAILED

# -----------------------------------------------------------------------------
# SETTINGS
# -----------------------------------------------------------------------------

_OVERRIDABLE_KEYS: Tuple[str, ...] = (
    "output_dir",
    "archive_name",
    "compression_level",
    "overwrite",
    "show_issues",
    "log_level",
)


def _resolve_settings(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Start logging, then layer flags over stored (or default) preferences.

    Logging is started before anything else at the flag-derived level and is
    rebuilt if the stored preferences ask for a different one.
    """
    flag_level = "DEBUG" if args.debug else "INFO"
    log_file = get_default_log_path()
    configure_logging(LoggingConfig(level=flag_level, console=True, log_file=log_file))
    logger.debug(f"CLI started with arguments: {vars(args)}")

    stored = get_default_config() if args.use_defaults else load_config()
    merged = _merge_config(stored, cli_args.args_to_overrides(args))

    settings, warnings = validate_config(merged, strict=False)
    for warning in warnings:
        logger.warning(f"Preference corrected: {warning}")

    if settings["log_level"] != flag_level:
        configure_logging(
            LoggingConfig(level=settings["log_level"], console=True, log_file=log_file),
            force=True,
        )
    return settings


def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay the known, non-None flag values on the stored preferences."""
    given = {
        key: overrides[key]
        for key in _OVERRIDABLE_KEYS
        if overrides.get(key) is not None
    }
    return {**base, **given}

# -----------------------------------------------------------------------------
# INPUT / PREVIEW
# -----------------------------------------------------------------------------

def _read_input(input_file: Optional[str]) -> str:
    """Whole path list from 'input_file', or from stdin for None and '-'."""
    if input_file in (None, "", "-"):
        return sys.stdin.read()

    if not os.path.isfile(input_file):
        raise FileNotFoundError(f"Input file does not exist: {input_file}")

    with open(input_file, "r", encoding="utf-8") as f:
        return f.read()


def _show_preview(result: PipelineResult, args: argparse.Namespace, settings: Dict[str, Any]) -> None:
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif args.cleaned:
        print(format_cleaned_paths(result.processed))
    else:
        _print_human_summary(result, show_issues=settings["show_issues"])


def _print_human_summary(result: PipelineResult, show_issues: bool = True) -> None:
    """
    Summary label, tree view and, unless hidden, a numbered issue list.

    Args:
        result: Successful pipeline outcome.
        show_issues: Render issue badges and the list below the tree.
    """
    lines: List[str] = [result.summary.get("label", ""), ""]
    lines.extend(render_tree(result.tree, show_issues=show_issues))

    issues = result.processed.issues
    if show_issues and issues:
        lines.extend(["", "Issues:"])
        for issue in issues:
            where = "input" if issue.line is None else f"line {issue.line}"
            subject = f" {issue.path}" if issue.path else ""
            lines.append(f"  - {where}: [{issue.type}]{subject}: {issue.message}")

    print("\n".join(lines))

# -----------------------------------------------------------------------------
# EXPORT
# -----------------------------------------------------------------------------

def _export(result: PipelineResult, args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    """Run the requested exports: the archive first, then the folder structure."""
    if args.zip_dir is not None:
        archive_path = asyncio.run(export_archive(result, settings))
        print(f"Archive written: {archive_path}")

    if not args.write_dir:
        return EXIT_OK

    ask = None if args.yes else _confirm_write
    root_handle = pick_writable_root(args.write_dir, confirm=ask)
    if root_handle is None:
        print("Directory creation cancelled.")
        return EXIT_OK

    created = asyncio.run(export_directory(result, root_handle, display_progress, settings))
    print(f"Folder structure created successfully: {root_handle.path} ({created} entries)")
    return EXIT_OK


def _confirm_write(path: str) -> bool:
    return prompt_yes_no(f"Create the folder structure in '{path}'?")


def _fail(code: int, message: str) -> int:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    return code


def _use_utf8_console() -> None:
    """Windows consoles default to a legacy code page; tree glyphs need UTF-8."""
    if sys.platform != "win32":
        return
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")


if __name__ == "__main__":
    sys.exit(main())
