from __future__ import annotations

"""
Host Filesystem Access.

Everything that touches the real disk outside the materializers lives here:
the per-user data directory (preferences and diagnostics log), expansion
of user-supplied directory strings, and the awaitable directory capability
the directory writer drives. Blocking calls run in worker threads via
asyncio.to_thread.
"""

import asyncio
import logging
import os
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

APP_DIR_NAME = "Treesmith"
UNIX_APP_DIR_NAME = ".treesmith"

# -----------------------------------------------------------------------------
# LOCATIONS
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Per-user directory holding config.json and the logs folder.

    '%LOCALAPPDATA%\\Treesmith' (or '%APPDATA%') on Windows, '~/.treesmith'
    elsewhere or when neither variable is set. Creation is attempted on
    every call; a read-only home is tolerated.

    Returns:
        str: Absolute directory path.
    """
    windows_base = None
    if os.name == "nt":
        windows_base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")

    if windows_base:
        data_dir = os.path.join(windows_base, APP_DIR_NAME)
    else:
        data_dir = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(data_dir, exist_ok=True)
    except OSError as e:
        logger.debug(f"Data directory {data_dir} not created: {e}")

    return os.path.abspath(data_dir)


def resolve_dir(path: Optional[str], fallback: str) -> str:
    """
    Turn a user-typed directory into an absolute path.

    '~' and environment variables are expanded; a blank value selects
    'fallback' (which is expanded the same way).
    """
    chosen = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(chosen)))


def check_existing_output_files(output_dir: str, names: List[str]) -> List[str]:
    """
    Report which of 'names' already exist inside 'output_dir'.

    Args:
        output_dir: Directory the files would be written to.
        names: Candidate file names.

    Returns:
        List[str]: Full paths of the names that are taken, in input order.
    """
    candidates = (os.path.join(output_dir, name) for name in names)
    return [candidate for candidate in candidates if os.path.exists(candidate)]


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """Create 'path' with parents; returns (created_or_present, error_text)."""
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return False, str(e)
    return True, None

# -----------------------------------------------------------------------------
# WRITABLE DIRECTORY CAPABILITY
# -----------------------------------------------------------------------------

class LocalFileHandle:
    """Reference to a created file on the host filesystem."""

    def __init__(self, path: str):
        self.path = path

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class LocalDirectoryHandle:
    """
    Host-filesystem implementation of the writable directory capability.

    Every operation is awaitable; directory creation is idempotent and file
    creation never truncates until 'write_and_close' is issued.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    async def create_subdirectory(self, name: str) -> "LocalDirectoryHandle":
        """Create (or reuse) a child directory and return its handle."""
        target = os.path.join(self.path, name)
        await asyncio.to_thread(os.makedirs, target, exist_ok=True)
        return LocalDirectoryHandle(target)

    async def create_file(self, name: str) -> LocalFileHandle:
        """Create a child file if missing and return its handle."""
        target = os.path.join(self.path, name)
        await asyncio.to_thread(_touch, target)
        return LocalFileHandle(target)

    async def write_and_close(self, handle: LocalFileHandle, data: bytes) -> None:
        """Replace the content of a previously created file."""
        await asyncio.to_thread(_write_bytes, handle.path, data)

    def __repr__(self) -> str:
        return f"LocalDirectoryHandle({self.path!r})"


def pick_writable_root(
        path: str,
        confirm: Optional[Callable[[str], bool]] = None,
) -> Optional[LocalDirectoryHandle]:
    """
    Resolve the root directory the tree will be written into.

    Args:
        path: Target directory (created when missing).
        confirm: Optional permission prompt receiving the absolute path.
                 Returning False is treated as a user cancellation.

    Returns:
        Optional[LocalDirectoryHandle]: The writable root, or None when the
                                        user cancelled the prompt.

    Raises:
        PermissionError: If the directory cannot be created or written.
    """
    target = resolve_dir(path, os.getcwd())

    if confirm is not None and not confirm(target):
        logger.info(f"Directory selection cancelled by user: {target}")
        return None

    ok, err = safe_mkdir(target)
    if not ok:
        raise PermissionError(f"Cannot create target directory '{target}': {err}")
    if not os.access(target, os.W_OK):
        raise PermissionError(f"Target directory is not writable: {target}")

    logger.debug(f"Writable root selected: {target}")
    return LocalDirectoryHandle(target)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _touch(path: str) -> None:
    """Create an empty file without truncating existing content."""
    with open(path, "ab"):
        pass


def _write_bytes(path: str, data: bytes) -> None:
    """Write the payload and close the file."""
    with open(path, "wb") as f:
        f.write(data)
