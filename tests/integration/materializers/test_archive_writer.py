from __future__ import annotations

"""
Integration tests for the Archive Writer.

Reads the generated bytes back with zipfile to verify member names,
compression method and the persistence rules of save_archive.
"""

import asyncio
import io
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from treesmith.core.analysis.tree_builder import build_tree
from treesmith.core.materializers.archive_writer import (
    collect_file_paths,
    generate_archive,
    save_archive,
)
from treesmith.core.processing.path_processor import process_paths
from treesmith.domain.errors import ArchiveError


def _tree(text: str):
    return build_tree(process_paths(text).entries)


def test_collect_file_paths_skips_directories():
    tree = _tree("src/\nsrc/app/\nsrc/app/main.py\nREADME.md\nempty/")
    assert collect_file_paths(tree) == ["src/app/main.py", "README.md"]


def test_generate_archive_contains_one_empty_entry_per_file():
    tree = _tree("src/components/Button.tsx\nsrc/utils/helpers.ts\nREADME.md\ndocs/")
    data = asyncio.run(generate_archive(tree, compression_level=9))

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        infos = zf.infolist()
        names = [i.filename for i in infos]

        assert names == [
            "src/components/Button.tsx",
            "src/utils/helpers.ts",
            "README.md",
        ]
        assert all(i.file_size == 0 for i in infos)
        assert all(i.compress_type == zipfile.ZIP_DEFLATED for i in infos)
        assert zf.testzip() is None


def test_generate_archive_for_empty_tree_is_valid_zip():
    data = asyncio.run(generate_archive(_tree("")))

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == []


def test_generate_archive_wraps_failures():
    with patch(
        "treesmith.core.materializers.archive_writer.build_archive_bytes",
        side_effect=ValueError("bad level"),
    ):
        with pytest.raises(ArchiveError) as excinfo:
            asyncio.run(generate_archive(_tree("a.txt")))

    assert "bad level" in str(excinfo.value)


def test_save_archive_writes_file(tmp_path: Path):
    target = asyncio.run(save_archive(b"PK", str(tmp_path / "out"), "layout.zip"))

    assert target == str(tmp_path / "out" / "layout.zip")
    assert (tmp_path / "out" / "layout.zip").read_bytes() == b"PK"


def test_save_archive_refuses_to_overwrite(tmp_path: Path):
    existing = tmp_path / "layout.zip"
    existing.write_bytes(b"old")

    with pytest.raises(ArchiveError):
        asyncio.run(save_archive(b"new", str(tmp_path), "layout.zip"))
    assert existing.read_bytes() == b"old"

    asyncio.run(save_archive(b"new", str(tmp_path), "layout.zip", overwrite=True))
    assert existing.read_bytes() == b"new"


def test_save_archive_io_error_is_wrapped(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ArchiveError):
        asyncio.run(save_archive(b"PK", str(blocker), "layout.zip"))


def test_archive_members_follow_case_insensitive_order():
    tree = _tree("docs/Zeta.md\ndocs/alpha.md\nREADME.md\napp.py")
    assert collect_file_paths(tree) == ["docs/alpha.md", "docs/Zeta.md", "app.py", "README.md"]
