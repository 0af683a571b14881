from __future__ import annotations

"""
Size Tree Data Models.

Provides the recursive node type produced by the size aggregator, the
scan result wrapper, and the flat row model consumed by the renderers.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SizeNode:
    """
    Represents one directory in the aggregated size tree.

    Attributes:
        name: Base name of the directory.
        size: Cumulative byte count of every file beneath the directory.
        peer_dependencies: Ordered, deduplicated peer dependency names
                           declared at or beneath this directory.
        children: Child directories sorted by descending size.
    """
    name: str
    size: int = 0
    peer_dependencies: Tuple[str, ...] = ()
    children: Tuple["SizeNode", ...] = ()


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of a complete aggregation pass.

    Attributes:
        root: Node representing the scanned directory.
        total_size: Grand total in bytes (always equal to root.size).
        entries_processed: Number of directory entries visited.
    """
    root: SizeNode
    total_size: int
    entries_processed: int = 0


@dataclass(frozen=True)
class TreeLine:
    """
    A single qualifying row of the rendered size tree.

    Attributes:
        depth: Nesting level (0 for the scanned root).
        name: Directory base name.
        percentage: Share of the total size, rounded to one decimal.
        size_mb: Size in megabytes, rounded to one decimal.
        is_dev: Whether the name is a declared development dependency.
        peer_dependencies: Peer names to annotate (always empty for the root).
    """
    depth: int
    name: str
    percentage: float
    size_mb: float
    is_dev: bool = False
    peer_dependencies: Tuple[str, ...] = field(default_factory=tuple)


# -----------------------------------------------------------------------------
# REPORT RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SizeReport:
    """
    Unified result of a size report execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        project_path: Directory holding the project manifest.
        node_modules_path: Directory that was (or would have been) measured.
        min_percentage: Threshold applied by the renderer.
        total_size: Grand total in bytes.
        lines: Qualifying tree rows in output order.
        scan: Raw aggregation result, None when the run failed early.
        dev_dependencies: Development-only dependency names of the project.
    """
    ok: bool
    error: str
    project_path: str
    node_modules_path: str
    min_percentage: float
    total_size: int = 0
    lines: List[TreeLine] = field(default_factory=list)
    scan: Optional[ScanResult] = None
    dev_dependencies: FrozenSet[str] = frozenset()


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        project_path: str,
        node_modules_path: str = "",
        min_percentage: float = 0.0,
) -> SizeReport:
    """
    Create a failed report instance.

    Args:
        error: Detailed error description.
        project_path: The project directory that was targeted.
        node_modules_path: The dependency directory that was targeted.
        min_percentage: The threshold requested for the run.

    Returns:
        SizeReport: An immutable error result object.
    """
    return SizeReport(
        ok=False,
        error=error,
        project_path=project_path,
        node_modules_path=node_modules_path,
        min_percentage=min_percentage,
    )


def create_success_result(
        project_path: str,
        node_modules_path: str,
        min_percentage: float,
        scan: ScanResult,
        lines: List[TreeLine],
        dev_dependencies: FrozenSet[str],
) -> SizeReport:
    """
    Create a successful report instance.

    Args:
        project_path: The project directory.
        node_modules_path: The measured dependency directory.
        min_percentage: Threshold applied by the renderer.
        scan: Aggregation result.
        lines: Rendered tree rows.
        dev_dependencies: Development-only dependency names.

    Returns:
        SizeReport: An immutable success result object.
    """
    return SizeReport(
        ok=True,
        error="",
        project_path=project_path,
        node_modules_path=node_modules_path,
        min_percentage=min_percentage,
        total_size=scan.total_size,
        lines=list(lines),
        scan=scan,
        dev_dependencies=dev_dependencies,
    )
