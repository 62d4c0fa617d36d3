from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. Data integrity of PipelineResult factories (Success/Error).
2. Immutability of frozen dataclasses.
3. Default values in domain objects.
"""

import dataclasses

import pytest

from treesmith.domain.errors import MaterializationError, PathTraversalError, TreesmithError
from treesmith.domain.path_models import PathEntry, PathIssue, ProcessedPaths
from treesmith.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from treesmith.domain.tree_models import TreeNode, create_root


def test_create_success_result_populates_fields():
    """Verify that the success factory correctly populates the PipelineResult object."""
    processed = ProcessedPaths(entries=[PathEntry("a.txt", False, 1)], file_count=1)
    tree = create_root()

    result = create_success_result(processed, tree, {"files": 1})

    assert isinstance(result, PipelineResult)
    assert result.ok is True
    assert result.error == ""
    assert result.processed is processed
    assert result.tree is tree
    assert result.summary == {"files": 1}


def test_create_error_result_defaults():
    result = create_error_result("boom")

    assert result.ok is False
    assert result.error == "boom"
    assert result.processed.entries == []
    assert result.tree.is_root
    assert result.summary == {}


def test_frozen_models_are_immutable():
    issue = PathIssue("duplicate", "a", "msg", 2)
    result = create_error_result("boom")

    with pytest.raises(dataclasses.FrozenInstanceError):
        issue.message = "changed"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.ok = True  # type: ignore[misc]


def test_path_issue_line_is_optional():
    assert PathIssue("depth", "", "too many").line is None


def test_path_entry_to_line():
    assert PathEntry("src", True, 1).to_line() == "src/"
    assert PathEntry("src/a.py", False, 2).to_line() == "src/a.py"


def test_tree_node_defaults():
    node = TreeNode("a", "a", True)
    assert node.children == []
    assert node.issues == []
    assert node.is_root is False
    assert create_root().is_root is True


def test_error_hierarchy():
    err = MaterializationError("file", "a.txt", "Permission denied")

    assert isinstance(err, TreesmithError)
    assert str(err) == 'Failed to create file "a.txt": Permission denied'
    assert err.kind == "file"
    assert err.name == "a.txt"
    assert issubclass(PathTraversalError, ValueError)
