from __future__ import annotations

"""
Integration tests for the Directory Writer.

Runs the writer against the host filesystem handle and against an
in-memory recording handle to verify creation order, progress reporting
and failure wrapping.
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from treesmith.core.analysis.tree_builder import build_tree
from treesmith.core.materializers.directory_writer import write_tree_to_directory
from treesmith.core.processing.path_processor import process_paths
from treesmith.domain.errors import MaterializationError
from treesmith.infra.fs import LocalDirectoryHandle


class RecordingHandle:
    """In-memory directory capability that logs every call."""

    def __init__(self, path: str = "", log: Optional[List[Tuple[str, str]]] = None,
                 fail_on: Optional[str] = None):
        self.path = path
        self.log = log if log is not None else []
        self.fail_on = fail_on

    def _child(self, name: str) -> str:
        return f"{self.path}/{name}" if self.path else name

    async def create_subdirectory(self, name: str) -> "RecordingHandle":
        path = self._child(name)
        if path == self.fail_on:
            raise PermissionError("Permission denied")
        self.log.append(("mkdir", path))
        return RecordingHandle(path, self.log, self.fail_on)

    async def create_file(self, name: str) -> str:
        path = self._child(name)
        if path == self.fail_on:
            raise OSError("Disk full")
        self.log.append(("touch", path))
        return path

    async def write_and_close(self, handle: str, data: bytes) -> None:
        self.log.append(("write", handle))


def _tree(text: str):
    return build_tree(process_paths(text).entries)


def test_writes_structure_to_disk(tmp_path: Path):
    tree = _tree("src/components/Button.tsx\nsrc/utils/\nREADME.md")
    created = asyncio.run(write_tree_to_directory(LocalDirectoryHandle(str(tmp_path)), tree))

    assert created == 5
    assert (tmp_path / "src" / "components").is_dir()
    assert (tmp_path / "src" / "utils").is_dir()
    assert (tmp_path / "src" / "components" / "Button.tsx").read_bytes() == b""
    assert (tmp_path / "README.md").is_file()


def test_rewriting_existing_structure_is_idempotent(tmp_path: Path):
    tree = _tree("a/b/\na/c.txt")
    root = LocalDirectoryHandle(str(tmp_path))

    asyncio.run(write_tree_to_directory(root, tree))
    assert asyncio.run(write_tree_to_directory(root, tree)) == 3


def test_creation_order_matches_rendered_order():
    handle = RecordingHandle()
    tree = _tree("z.txt\nsrc/b.py\nsrc/a/\nlib/x.py")

    asyncio.run(write_tree_to_directory(handle, tree))

    assert handle.log == [
        ("mkdir", "lib"),
        ("touch", "lib/x.py"),
        ("write", "lib/x.py"),
        ("mkdir", "src"),
        ("mkdir", "src/a"),
        ("touch", "src/b.py"),
        ("write", "src/b.py"),
        ("touch", "z.txt"),
        ("write", "z.txt"),
    ]


def test_progress_reported_every_interval_and_at_end():
    lines = "\n".join(f"f{i:02d}.txt" for i in range(23))
    calls: List[Tuple[int, int]] = []

    asyncio.run(write_tree_to_directory(
        RecordingHandle(), _tree(lines), lambda v, t: calls.append((v, t))
    ))

    assert calls == [(10, 23), (20, 23), (23, 23)]


def test_progress_custom_interval():
    calls: List[Tuple[int, int]] = []
    asyncio.run(write_tree_to_directory(
        RecordingHandle(), _tree("a/b/c.txt"), lambda v, t: calls.append((v, t)),
        progress_interval=1,
    ))
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_empty_tree_creates_nothing():
    calls: List[Tuple[int, int]] = []
    assert asyncio.run(write_tree_to_directory(
        RecordingHandle(), _tree(""), lambda v, t: calls.append((v, t))
    )) == 0
    assert calls == []


@pytest.mark.parametrize("fail_on, kind, name", [
    ("src", "directory", "src"),
    ("src/main.py", "file", "main.py"),
])
def test_failure_is_wrapped_and_aborts(fail_on, kind, name):
    handle = RecordingHandle(fail_on=fail_on)
    tree = _tree("src/main.py\nzzz.txt")

    with pytest.raises(MaterializationError) as excinfo:
        asyncio.run(write_tree_to_directory(handle, tree))

    err = excinfo.value
    assert err.kind == kind
    assert err.name == name
    assert str(err).startswith(f'Failed to create {kind} "{name}"')
    assert ("touch", "zzz.txt") not in handle.log


def test_partial_output_is_left_on_disk(tmp_path: Path):
    blocker = tmp_path / "b"
    tree = _tree("a/x.txt\nb/y.txt")
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(MaterializationError):
        asyncio.run(write_tree_to_directory(LocalDirectoryHandle(str(tmp_path)), tree))

    assert (tmp_path / "a" / "x.txt").is_file()
