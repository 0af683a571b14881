from __future__ import annotations

"""
Directory Size Aggregator.

Walks a dependency installation directory depth-first and builds the
SizeNode tree bottom-up. Peer dependency declarations found in nested
manifests are merged upward, except for a scope's own sub-packages.
"""

import logging
import os
import stat
from typing import Callable, Dict, List, Optional

from modsize.domain.constants import MANIFEST_FILE, PROGRESS_INTERVAL, SCOPE_MARKER
from modsize.domain.manifest import find_manifest
from modsize.domain.size_models import ScanResult, SizeNode

logger = logging.getLogger(__name__)

ProgressSink = Callable[[int], None]


# -----------------------------------------------------------------------------
# PROGRESS TRACKING
# -----------------------------------------------------------------------------

class ProgressTracker:
    """
    Counts processed directory entries and notifies a sink periodically.

    The sink receives the running count every 'interval' entries. It is
    purely observational and has no influence on the aggregated data.
    """

    def __init__(self, sink: Optional[ProgressSink] = None, interval: int = PROGRESS_INTERVAL) -> None:
        self.count = 0
        self.sink = sink
        self.interval = interval

    def advance(self) -> None:
        self.count += 1
        if self.sink is not None and self.count % self.interval == 0:
            self.sink(self.count)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def aggregate_sizes(
        root_path: str,
        progress: Optional[ProgressSink] = None,
        manifest_name: str = MANIFEST_FILE,
) -> ScanResult:
    """
    Compute the size tree of a directory.

    Listing or stat failures are not handled here: they propagate and
    abort the whole computation.

    Args:
        root_path: Directory to measure.
        progress: Optional callback receiving the processed entry count.
        manifest_name: File name of per-package manifests.

    Returns:
        ScanResult: The root node, grand total and processed entry count.
    """
    tracker = ProgressTracker(progress)
    root_path = os.path.abspath(root_path)
    logger.debug(f"Aggregating sizes under: {root_path}")

    root = _calculate_node(root_path, tracker, manifest_name, is_root=True)

    # Idempotent re-sort of the top level
    root = SizeNode(
        name=root.name,
        size=root.size,
        peer_dependencies=root.peer_dependencies,
        children=_sorted_by_size(list(root.children)),
    )

    logger.debug(f"Aggregated {tracker.count} entries, total {root.size} bytes")
    return ScanResult(root=root, total_size=root.size, entries_processed=tracker.count)


def merge_peer_dependencies(
        target: Dict[str, None],
        parent_name: str,
        names: List[str],
) -> None:
    """
    Merge child peer dependency names into a parent's ordered set.

    A name is skipped when the parent is a scope directory and the name
    lives inside that scope, e.g. '@scope/other' under '@scope'. Only the
    immediate parent is considered.

    Args:
        target: Ordered set (dict keys) being accumulated, updated in place.
        parent_name: Base name of the directory receiving the names.
        names: Names contributed by the child.
    """
    scope_prefix = parent_name + "/"
    is_scope = parent_name.startswith(SCOPE_MARKER)
    for dep in names:
        if is_scope and dep.startswith(scope_prefix):
            continue
        target.setdefault(dep, None)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _calculate_node(
        dir_path: str,
        tracker: ProgressTracker,
        manifest_name: str,
        is_root: bool = False,
) -> SizeNode:
    """Recursively build the node for a single directory."""
    name = os.path.basename(dir_path.rstrip(os.sep)) or dir_path
    size = 0
    children: List[SizeNode] = []
    peers: Dict[str, None] = {}

    with os.scandir(dir_path) as it:
        entry_names = sorted(entry.name for entry in it)

    for entry_name in entry_names:
        entry_path = os.path.join(dir_path, entry_name)
        st = os.stat(entry_path)
        tracker.advance()

        if stat.S_ISDIR(st.st_mode):
            child = _calculate_node(entry_path, tracker, manifest_name)
            children.append(child)
            size += child.size
            merge_peer_dependencies(peers, name, list(child.peer_dependencies))
        else:
            size += st.st_size

    # Own declarations come after everything merged from below.
    # The scan root is a container, not a package.
    manifest = find_manifest(dir_path, manifest_name)
    if manifest is not None and manifest.peer_dependencies and not is_root:
        for dep in manifest.peer_dependencies:
            peers.setdefault(dep, None)

    return SizeNode(
        name=name,
        size=size,
        peer_dependencies=tuple(peers),
        children=_sorted_by_size(children),
    )


def _sorted_by_size(nodes: List[SizeNode]) -> tuple:
    """Stable descending sort by size."""
    return tuple(sorted(nodes, key=lambda n: n.size, reverse=True))
