from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and sample path lists.
"""

import asyncio
import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict(tmp_path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'treesmith.domain.config',
    ensuring all keys expected by the pipeline are present.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Materialization
        "output_dir": str(tmp_path / "out"),
        "archive_name": "structure.zip",
        "compression_level": 6,
        "progress_interval": 10,
        "overwrite": False,

        # Presentation
        "show_issues": True,

        # Diagnostics
        "log_level": "INFO",
    }


@pytest.fixture
def sample_paths_text() -> str:
    """A small React-style project with one duplicate and one sanitized name."""
    return "\n".join([
        "src/",
        "src/components/Button.tsx",
        "src/components/Button.tsx",
        "src/App.tsx",
        "src/file:name.ts",
        "README.md",
    ])


@pytest.fixture
def run_async():
    """Drive a coroutine to completion on a fresh event loop."""
    def _run(coro):
        return asyncio.run(coro)
    return _run
