from __future__ import annotations

"""
Persisted Preferences.

The only state Treesmith keeps between runs is a small JSON document in the
user data directory:

    {"version": "...", "last_session": {<materialization and display prefs>}}

Path lists and generated trees are never written here. Reading is lenient:
a missing, unreadable or malformed document yields the defaults, and keys
added in newer releases are filled in from the defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from treesmith.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_ARCHIVE_NAME,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_PROGRESS_INTERVAL,
)
from treesmith.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")

_SESSION_KEY = "last_session"

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Preferences used when nothing has been saved yet.

    'output_dir' follows the current working directory, so the dictionary is
    built fresh on every call.
    """
    session: Dict[str, Any] = dict(
        output_dir=os.getcwd(),
        archive_name=DEFAULT_ARCHIVE_NAME,
        compression_level=DEFAULT_COMPRESSION_LEVEL,
        progress_interval=DEFAULT_PROGRESS_INTERVAL,
        overwrite=False,
        show_issues=True,
        log_level="INFO",
    )
    return session


def get_default_app_state() -> Dict[str, Any]:
    """The whole config.json document with default preferences."""
    return {"version": CURRENT_CONFIG_VERSION, _SESSION_KEY: get_default_config()}

# -----------------------------------------------------------------------------
# DOCUMENT I/O
# -----------------------------------------------------------------------------

def _read_document(path: str) -> Optional[Dict[str, Any]]:
    """Parsed JSON object at 'path', or None when absent or unusable."""
    if not os.path.isfile(path):
        logger.debug(f"No preferences at {path}; defaults apply.")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Unreadable preferences file {path}: {e}. Defaults apply.")
        return None

    if isinstance(document, dict):
        return document
    logger.warning(f"Preferences file {path} is not a JSON object. Defaults apply.")
    return None


def load_app_state() -> Dict[str, Any]:
    """
    Read config.json, completing it with default keys.

    Returns:
        Dict[str, Any]: A document whose version is always the current one.
    """
    state = get_default_app_state()
    document = _read_document(CONFIG_FILE)
    if document is None:
        return state

    saved_session = document.get(_SESSION_KEY)
    if isinstance(saved_session, dict):
        state[_SESSION_KEY] = {**state[_SESSION_KEY], **saved_session}
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Write the document to config.json, stamping the current version.

    Write failures are logged and otherwise ignored; losing preferences must
    not abort a run.
    """
    document = {**state, "version": CURRENT_CONFIG_VERSION}
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.error(f"Could not store preferences in {CONFIG_FILE}: {e}")
        return
    logger.debug(f"Preferences stored in {CONFIG_FILE}")

# -----------------------------------------------------------------------------
# SESSION SHORTCUTS
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """Effective preferences of the last session."""
    return dict(load_app_state()[_SESSION_KEY])


def save_config(config: Dict[str, Any]) -> None:
    """Replace the stored last session with 'config'."""
    state = load_app_state()
    state[_SESSION_KEY] = dict(config)
    save_app_state(state)
