from __future__ import annotations

"""
Unit tests for the Tree Builder.

Verifies:
1. Implicit intermediate directory creation.
2. Rendered child order (directories first, then by name).
3. Issue attachment when several entries reach the same node.
4. Traversal helpers (iteration, counting).
5. Case-insensitive, locale-independent name ordering.
"""

from typing import Optional

from treesmith.core.analysis.tree_builder import (
    build_tree,
    collation_key,
    count_nodes,
    iter_nodes,
    sort_tree,
)
from treesmith.core.processing.path_processor import process_paths
from treesmith.domain.path_models import PathEntry, PathIssue
from treesmith.domain.tree_models import TreeNode


def _names(node: TreeNode):
    return [c.name for c in node.children]


def _find(tree: TreeNode, path: str) -> Optional[TreeNode]:
    """Node with the given canonical path; '' is the root itself."""
    return next((n for n in iter_nodes(tree) if n.path == path), tree if not path else None)


# -----------------------------------------------------------------------------
# Structure Tests
# -----------------------------------------------------------------------------
def test_build_tree_creates_intermediate_directories():
    tree = build_tree(process_paths("a/b/c.txt").entries)

    assert tree.is_root
    a = _find(tree, "a")
    b = _find(tree, "a/b")
    c = _find(tree, "a/b/c.txt")

    assert a.is_directory and a.issues == []
    assert b.is_directory and b.issues == []
    assert c.is_directory is False
    assert c.path == "a/b/c.txt"


def test_children_sorted_directories_first():
    text = "z.txt\nsrc/main.py\na.txt\nlib/\nsrc/app/\nsrc/index.py"
    tree = build_tree(process_paths(text).entries)

    assert _names(tree) == ["lib", "src", "a.txt", "z.txt"]
    assert _names(_find(tree, "src")) == ["app", "index.py", "main.py"]


def test_parent_has_unique_child_names():
    text = "src/\nsrc/a.py\nsrc/a.py\nsrc/b/\nsrc/b/c.py"
    tree = build_tree(process_paths(text).entries)

    for node in [tree] + list(iter_nodes(tree)):
        names = _names(node)
        assert len(names) == len(set(names))


def test_empty_entries_give_bare_root():
    tree = build_tree([])
    assert tree.children == []
    assert count_nodes(tree) == 1


def test_every_surviving_entry_has_a_node(sample_paths_text):
    processed = process_paths(sample_paths_text)
    tree = build_tree(processed.entries)

    for entry in processed.entries:
        node = _find(tree, entry.path)
        assert node is not None
        assert node.is_directory == entry.is_directory


# -----------------------------------------------------------------------------
# Issue Attachment Tests
# -----------------------------------------------------------------------------
def test_entry_issues_are_copied_to_final_node():
    tree = build_tree(process_paths("src/bad:name.ts").entries)

    node = _find(tree, "src/bad:name.ts")
    assert [i.type for i in node.issues] == ["sanitized"]
    assert _find(tree, "src").issues == []


def test_existing_node_receives_file_entry_issues():
    """Two file entries resolving to one node merge their issues."""
    issue = PathIssue("sanitized", "x", "first", 1)
    other = PathIssue("depth", "x", "second", 2)
    entries = [
        PathEntry("x", False, 1, [issue]),
        PathEntry("x", False, 2, [other]),
    ]
    tree = build_tree(entries)

    assert len(tree.children) == 1
    assert tree.children[0].issues == [issue, other]


def test_directory_entry_reuses_intermediate_node():
    entries = [
        PathEntry("src/app.py", False, 1),
        PathEntry("src", True, 2, [PathIssue("reserved", "src", "Reserved name", 2)]),
    ]
    tree = build_tree(entries)

    # Directories are inserted first, so the declared directory owns the node.
    src = _find(tree, "src")
    assert src.is_directory
    assert [i.type for i in src.issues] == ["reserved"]
    assert _names(src) == ["app.py"]


def test_file_node_used_as_parent_is_upgraded():
    entries = [
        PathEntry("notes", False, 1),
        PathEntry("notes/today.md", False, 2),
    ]
    tree = build_tree(entries)

    notes = _find(tree, "notes")
    assert notes.is_directory is True
    assert [i.type for i in notes.issues] == ["conflict"]
    assert notes.issues[0].message == "Resolved: treating as directory"
    assert _names(notes) == ["today.md"]


def test_conflict_resolution_yields_directory_node():
    tree = build_tree(process_paths("src/components\nsrc/components/").entries)

    node = _find(tree, "src/components")
    assert node.is_directory
    assert [i.message for i in node.issues] == ["Resolved: treating as directory"]


# -----------------------------------------------------------------------------
# Helper Tests
# -----------------------------------------------------------------------------
def test_iter_nodes_follows_rendered_order():
    tree = build_tree(process_paths("b.txt\na/\na/x.txt").entries)
    assert [n.path for n in iter_nodes(tree)] == ["a", "a/x.txt", "b.txt"]


def test_count_nodes_includes_root():
    tree = build_tree(process_paths("a/b/c.txt\nd.txt").entries)
    assert count_nodes(tree) == 5


def test_sort_tree_is_recursive():
    root = TreeNode("", "", True, children=[
        TreeNode("b.txt", "b.txt", False),
        TreeNode("z", "z", True, children=[
            TreeNode("y.txt", "z/y.txt", False),
            TreeNode("x", "z/x", True),
        ]),
    ])
    sort_tree(root)

    assert _names(root) == ["z", "b.txt"]
    assert _names(root.children[0]) == ["x", "y.txt"]


def test_file_parent_upgrade_reached_from_plain_input():
    """'a' then 'a/b' passes the processor untouched; only the tree upgrades 'a'."""
    processed = process_paths("a\na/b")

    assert processed.folder_count == 0
    assert processed.file_count == 2
    assert processed.issues == []

    tree = build_tree(processed.entries)
    a = _find(tree, "a")
    assert a.is_directory is True
    assert _names(a) == ["b"]
    assert [(i.type, i.line) for i in a.issues] == [("conflict", None)]
    assert a.issues[0].message == "Resolved: treating as directory"


# -----------------------------------------------------------------------------
# Name Ordering Tests
# -----------------------------------------------------------------------------
def test_mixed_case_siblings_sort_case_insensitively():
    tree = build_tree(process_paths("Zeta.txt\nalpha.txt\nBeta.txt").entries)
    assert _names(tree) == ["alpha.txt", "Beta.txt", "Zeta.txt"]


def test_mixed_case_directories_still_precede_files():
    tree = build_tree(process_paths("apple.txt\nZoo/\nBanana.txt\nalpha/").entries)
    assert _names(tree) == ["alpha", "Zoo", "apple.txt", "Banana.txt"]


def test_sort_tree_orders_mixed_case_nodes():
    root = TreeNode("", "", True, children=[
        TreeNode("README.md", "README.md", False),
        TreeNode("app.py", "app.py", False),
        TreeNode("Lib", "Lib", True),
        TreeNode("docs", "docs", True),
    ])
    sort_tree(root)

    assert _names(root) == ["docs", "Lib", "app.py", "README.md"]


def test_case_variants_sort_lowercase_first():
    names = ["Readme", "readme", "README"]
    assert sorted(names, key=collation_key) == ["readme", "Readme", "README"]


def test_accented_names_sort_beside_base_letter():
    names = ["zebra", "école", "Ecole", "ecole"]
    assert sorted(names, key=collation_key) == ["ecole", "Ecole", "école", "zebra"]


def test_build_order_key_ignores_case_of_paths():
    paths = ["src/Zeta.ts", "src/alpha.ts", "Src2/beta.ts", "src"]
    assert sorted(paths, key=collation_key) == [
        "src", "src/alpha.ts", "src/Zeta.ts", "Src2/beta.ts",
    ]
