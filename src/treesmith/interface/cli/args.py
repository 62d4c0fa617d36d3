from __future__ import annotations

"""
Command-line Flags.

Declares every flag of the treesmith command and maps the parsed values
onto preference keys understood by the validator.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treesmith CLI.

    Returns:
        argparse.ArgumentParser: Parser for the treesmith command.
    """
    p = argparse.ArgumentParser(
        prog="treesmith",
        description=(
            "Turn a list of paths into a project structure: preview it, "
            "download it as a zip or create it on disk."
        ),
    )

    # --- Input ---
    p.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="File with one path per line (trailing '/' marks a directory). "
             "Reads stdin when omitted or '-'.",
    )

    # --- Materialization ---
    p.add_argument(
        "--zip",
        dest="zip_dir",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Write the structure as a zip archive into DIR (default: configured output dir).",
    )
    p.add_argument(
        "--archive-name",
        dest="archive_name",
        default=None,
        help="File name of the generated archive.",
    )
    p.add_argument(
        "--compression",
        dest="compression_level",
        type=int,
        default=None,
        metavar="LEVEL",
        help="Deflate compression level (0-9).",
    )
    p.add_argument(
        "--write",
        dest="write_dir",
        default=None,
        metavar="DIR",
        help="Create the directories and empty files below DIR.",
    )
    p.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation before writing to a directory.",
    )
    p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace an existing archive with the same name.",
    )

    # --- Output Formats ---
    p.add_argument(
        "--cleaned",
        action="store_true",
        help="Print the cleaned path list instead of the tree.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full result as JSON.",
    )
    p.add_argument(
        "--no-issues",
        action="store_true",
        help="Hide issue badges in the tree preview.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration as the new defaults.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level (stderr and the diagnostics file).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Preference values given on the command line.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset (None means 'not set').
    """
    overrides: Dict[str, Any] = {}

    overrides["output_dir"] = args.zip_dir or None
    overrides["archive_name"] = args.archive_name
    overrides["compression_level"] = args.compression_level

    if args.overwrite:
        overrides["overwrite"] = True
    if args.no_issues:
        overrides["show_issues"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
