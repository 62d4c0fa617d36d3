from __future__ import annotations

"""
Terminal Interaction Helpers.

Confirmation prompt used as the directory permission request, and the
progress bar driven by the directory writer callback.
"""

import sys
from typing import Optional, TextIO


def prompt_yes_no(message: str, default: bool = False) -> bool:
    """
    Prompt user for a yes/no response.

    Interrupting the prompt (Ctrl+C / Ctrl+D) counts as a 'no', which the
    caller treats as a cancellation.

    Args:
        message: Message to display to user.
        default: Default response if user just presses Enter.

    Returns:
        bool: True for yes, False for no.
    """
    default_prompt = "[y/N]" if not default else "[Y/n]"
    prompt_str = f"{message} {default_prompt}: "

    while True:
        try:
            response = input(prompt_str).strip().lower()
        except (KeyboardInterrupt, EOFError):
            print("\nOperation cancelled by user", file=sys.stderr)
            return False

        if not response:
            return default
        if response.startswith("y"):
            return True
        if response.startswith("n"):
            return False

        print("Please enter 'yes' or 'no'")


def display_progress(
        current: int,
        total: int,
        message: str = "Creating...",
        width: int = 40,
        stream: Optional[TextIO] = None,
) -> None:
    """
    Display a simple progress bar in the terminal.

    Args:
        current: Number of visited entries.
        total: Number of entries to create.
        message: Label printed before the bar.
        width: Width of the bar in characters.
        stream: Output stream (defaults to stderr).
    """
    stream = stream or sys.stderr
    progress = min(1.0, current / total if total > 0 else 1.0)
    filled_width = int(width * progress)
    bar = "#" * filled_width + "-" * (width - filled_width)

    stream.write(f"\r{message} [{bar}] {round(progress * 100)}% ({current}/{total})")
    stream.flush()

    if current >= total:
        stream.write("\n")
