from __future__ import annotations

"""
Unit tests for the Directory Size Aggregator.

Verifies:
1. Bottom-up size accumulation and the full-tree total.
2. Descending child ordering at every level.
3. Peer dependency merging with scope exclusion.
4. Progress notifications.
5. Propagation of traversal failures.
"""

import json
from pathlib import Path
from typing import List

import pytest

from conftest import write_bytes, write_manifest
from modsize.core.analysis.size_aggregator import (
    ProgressTracker,
    aggregate_sizes,
    merge_peer_dependencies,
)
from modsize.domain.manifest import ManifestError
from modsize.domain.size_models import SizeNode


def _walk(node: SizeNode):
    yield node
    for child in node.children:
        yield from _walk(child)


def _file_total(root: Path) -> int:
    return sum(p.stat().st_size for p in root.rglob("*") if p.is_file())


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """
    Structure:
    /node_modules
      .package-lock.json     10 B
      /small                 100 B
      /big
        a.js                 5000 B
        /lib
          b.js               2000 B
          /deep
            c.js             300 B
      /medium
        m.js                 1500 B
    """
    root = tmp_path / "node_modules"
    write_bytes(root / ".package-lock.json", 10)
    write_bytes(root / "small" / "s.js", 100)
    write_bytes(root / "big" / "a.js", 5000)
    write_bytes(root / "big" / "lib" / "b.js", 2000)
    write_bytes(root / "big" / "lib" / "deep" / "c.js", 300)
    write_bytes(root / "medium" / "m.js", 1500)
    return root


def test_root_size_equals_sum_of_all_files(nested_tree: Path) -> None:
    """The grand total counts every file anywhere in the tree."""
    result = aggregate_sizes(str(nested_tree))

    assert result.total_size == _file_total(nested_tree) == 8910
    assert result.root.size == result.total_size
    assert result.root.name == "node_modules"


def test_node_size_is_files_plus_children(nested_tree: Path) -> None:
    """Each directory size equals direct files plus aggregated subdirectories."""
    result = aggregate_sizes(str(nested_tree))
    big = next(c for c in result.root.children if c.name == "big")
    lib = big.children[0]

    assert lib.name == "lib"
    assert lib.size == 2000 + 300
    assert big.size == 5000 + lib.size


def test_children_sorted_descending_everywhere(nested_tree: Path) -> None:
    """Every children sequence is in non-increasing size order."""
    result = aggregate_sizes(str(nested_tree))

    assert [c.name for c in result.root.children] == ["big", "medium", "small"]
    for node in _walk(result.root):
        sizes = [c.size for c in node.children]
        assert sizes == sorted(sizes, reverse=True)


def test_equal_sizes_keep_name_order(tmp_path: Path) -> None:
    """Ties are resolved by the (sorted) listing order."""
    root = tmp_path / "node_modules"
    for name in ("zeta", "alpha", "mid"):
        write_bytes(root / name / "index.js", 64)

    result = aggregate_sizes(str(root))

    assert [c.name for c in result.root.children] == ["alpha", "mid", "zeta"]


def test_empty_directory_has_zero_size(tmp_path: Path) -> None:
    root = tmp_path / "node_modules"
    (root / "empty").mkdir(parents=True)

    result = aggregate_sizes(str(root))

    assert result.total_size == 0
    assert result.root.children[0] == SizeNode(name="empty", size=0)


def test_peer_dependencies_bubble_up(tmp_path: Path) -> None:
    """Peer names declared deep in the tree reach every ancestor."""
    root = tmp_path / "node_modules"
    write_manifest(root / "ui-kit", {"peerDependencies": {"react": "^18", "react-dom": "^18"}})
    write_manifest(root / "ui-kit" / "node_modules" / "popper", {"peerDependencies": {"react": "*"}})

    result = aggregate_sizes(str(root))
    ui_kit = result.root.children[0]

    # Names merged from below come before the package's own declarations
    assert ui_kit.peer_dependencies == ("react", "react-dom")
    assert result.root.peer_dependencies == ("react", "react-dom")
    assert len(set(ui_kit.peer_dependencies)) == len(ui_kit.peer_dependencies)


def test_root_manifest_peers_are_ignored(tmp_path: Path) -> None:
    """The scanned container never contributes its own declarations."""
    root = tmp_path / "node_modules"
    write_manifest(root, {"peerDependencies": {"should-not-appear": "*"}})
    write_manifest(root / "pkg", {"peerDependencies": {"lodash": "*"}})

    result = aggregate_sizes(str(root))

    assert result.root.peer_dependencies == ("lodash",)


def test_scope_exclusion_rule(tmp_path: Path) -> None:
    """A scope's own sub-packages are not reported as its peer dependencies."""
    root = tmp_path / "node_modules"
    write_manifest(
        root / "@scope" / "pkg",
        {"peerDependencies": {"@scope/other": "*", "external-lib": "*"}},
    )

    result = aggregate_sizes(str(root))
    scope = result.root.children[0]
    pkg = scope.children[0]

    assert pkg.peer_dependencies == ("@scope/other", "external-lib")
    assert "@scope/other" not in scope.peer_dependencies
    assert "external-lib" in scope.peer_dependencies


def test_scope_exclusion_checks_immediate_parent_only(tmp_path: Path) -> None:
    """The container above a scope receives whatever the scope kept."""
    root = tmp_path / "node_modules"
    write_manifest(root / "@scope" / "pkg", {"peerDependencies": {"@scope/other": "*"}})
    write_manifest(root / "@other" / "pkg", {"peerDependencies": {"@scope/core": "*"}})

    result = aggregate_sizes(str(root))
    by_name = {c.name: c for c in result.root.children}

    assert by_name["@scope"].peer_dependencies == ()
    assert by_name["@other"].peer_dependencies == ("@scope/core",)
    assert result.root.peer_dependencies == ("@scope/core",)


def test_merge_peer_dependencies_requires_scope_marker() -> None:
    """Prefix matches only count when the parent is a scope directory."""
    target = {}
    merge_peer_dependencies(target, "plugins", ["plugins/core", "other"])
    assert list(target) == ["plugins/core", "other"]

    scoped = {"existing": None}
    merge_peer_dependencies(scoped, "@babel", ["@babel/core", "@babelx/core", "existing"])
    assert list(scoped) == ["existing", "@babelx/core"]


def test_malformed_nested_manifest_aborts(tmp_path: Path) -> None:
    root = tmp_path / "node_modules"
    (root / "broken").mkdir(parents=True)
    (root / "broken" / "package.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestError):
        aggregate_sizes(str(root))


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        aggregate_sizes(str(tmp_path / "missing"))


def test_dangling_symlink_aborts(tmp_path: Path) -> None:
    root = tmp_path / "node_modules"
    root.mkdir()
    try:
        (root / "dangling").symlink_to(tmp_path / "nowhere")
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks not supported on this platform")

    with pytest.raises(OSError):
        aggregate_sizes(str(root))


def test_progress_notified_every_hundred_entries(tmp_path: Path) -> None:
    """250 entries produce notifications at 100 and 200."""
    root = tmp_path / "node_modules"
    for i in range(5):
        for j in range(49):
            write_bytes(root / f"pkg{i}" / f"f{j}.js", 1)
    # 5 directories + 245 files = 250 entries

    seen: List[int] = []
    result = aggregate_sizes(str(root), progress=seen.append)

    assert result.entries_processed == 250
    assert seen == [100, 200]


def test_progress_does_not_change_results(nested_tree: Path) -> None:
    silent = aggregate_sizes(str(nested_tree))
    noisy = aggregate_sizes(str(nested_tree), progress=lambda n: None)

    assert silent == noisy


def test_progress_tracker_without_sink() -> None:
    tracker = ProgressTracker(interval=2)
    for _ in range(5):
        tracker.advance()
    assert tracker.count == 5


def test_manifest_does_not_count_twice(tmp_path: Path) -> None:
    """package.json files are regular files and count toward the size once."""
    root = tmp_path / "node_modules"
    manifest = write_manifest(root / "pkg", {"name": "pkg"})

    result = aggregate_sizes(str(root))

    assert result.total_size == manifest.stat().st_size
    assert json.loads(manifest.read_text(encoding="utf-8"))["name"] == "pkg"
