from __future__ import annotations

"""
Size Tree Renderer.

Converts an aggregated SizeNode tree into percentage-gated rows and formats
them as styled console lines or as a JSON document. A node below the
threshold is dropped together with its whole subtree.
"""

import json
from typing import AbstractSet, Any, Dict, List, Optional

from rich.markup import escape

from modsize.domain.constants import INDENT_STEP
from modsize.domain.size_models import ScanResult, SizeNode, TreeLine
from modsize.utils.formatting import bytes_to_mb, format_fixed, percentage_of

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_size_tree(
        node: SizeNode,
        total_size: int,
        dev_dependencies: AbstractSet[str],
        min_percentage: float,
        indent: str = "",
) -> List[TreeLine]:
    """
    Collect the qualifying rows of a size tree, depth-first and pre-order.

    The node passed in is treated as the synthetic top-level container:
    its peer dependencies are never annotated.

    Args:
        node: Root of the tree to render.
        total_size: Grand total in bytes used as the 100% reference.
        dev_dependencies: Names declared as development-only dependencies.
        min_percentage: Inclusive lower bound for a row to be emitted.
        indent: Starting indentation prefix.

    Returns:
        List[TreeLine]: Rows in output order.
    """
    lines: List[TreeLine] = []
    if total_size <= 0:
        return lines

    depth = len(indent) // len(INDENT_STEP)
    _collect(node, total_size, dev_dependencies, min_percentage, depth, lines, is_root=True)
    return lines


def format_tree_line(line: TreeLine) -> str:
    """
    Format a row as rich console markup.

    Layout: '<indent>- [<pct>%] <name> (<mb> MB) (peer deps: a, b)'.
    """
    indent = INDENT_STEP * line.depth
    pct = escape(f"[{format_fixed(line.percentage, 1)}%]")
    name_style = "grey50" if line.is_dev else "bold"
    text = (
        f"{indent}- [yellow]{pct}[/yellow] "
        f"[{name_style}]{escape(line.name)}[/{name_style}] "
        f"[grey50]({format_fixed(line.size_mb, 1)} MB)[/grey50]"
    )
    if line.peer_dependencies:
        peers = escape(", ".join(line.peer_dependencies))
        text += f" [cyan](peer deps: {peers})[/cyan]"
    return text


def format_plain_line(line: TreeLine) -> str:
    """Format a row without any styling."""
    text = (
        f"{INDENT_STEP * line.depth}- [{format_fixed(line.percentage, 1)}%] "
        f"{line.name} ({format_fixed(line.size_mb, 1)} MB)"
    )
    if line.peer_dependencies:
        text += f" (peer deps: {', '.join(line.peer_dependencies)})"
    return text


def render_json(
        result: ScanResult,
        dev_dependencies: AbstractSet[str],
        min_percentage: float,
) -> str:
    """
    Render the pruned size tree as a JSON string.

    Args:
        result: Aggregation result.
        dev_dependencies: Names declared as development-only dependencies.
        min_percentage: Inclusive lower bound for a node to be included.

    Returns:
        str: Indented JSON document.
    """
    output = {
        "total_size": result.total_size,
        "total_size_mb": bytes_to_mb(result.total_size, 2),
        "min_percentage": min_percentage,
        "tree": _node_to_dict(result.root, result.total_size, dev_dependencies, min_percentage, is_root=True),
    }
    return json.dumps(output, indent=2)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _collect(
        node: SizeNode,
        total_size: int,
        dev_dependencies: AbstractSet[str],
        min_percentage: float,
        depth: int,
        lines: List[TreeLine],
        is_root: bool = False,
) -> None:
    """Append the row for 'node' and recurse into its children."""
    percentage = percentage_of(node.size, total_size)
    if percentage < min_percentage:
        return

    lines.append(TreeLine(
        depth=depth,
        name=node.name,
        percentage=percentage,
        size_mb=bytes_to_mb(node.size),
        is_dev=node.name in dev_dependencies,
        peer_dependencies=() if is_root else node.peer_dependencies,
    ))

    for child in node.children:
        _collect(child, total_size, dev_dependencies, min_percentage, depth + 1, lines)


def _node_to_dict(
        node: SizeNode,
        total_size: int,
        dev_dependencies: AbstractSet[str],
        min_percentage: float,
        is_root: bool = False,
) -> Optional[Dict[str, Any]]:
    """Convert a node to a JSON-serializable dictionary, None if pruned."""
    if total_size <= 0:
        return None
    percentage = percentage_of(node.size, total_size)
    if percentage < min_percentage:
        return None

    children = []
    for child in node.children:
        child_dict = _node_to_dict(child, total_size, dev_dependencies, min_percentage)
        if child_dict is not None:
            children.append(child_dict)

    return {
        "name": node.name,
        "size": node.size,
        "percentage": percentage,
        "is_dev": node.name in dev_dependencies,
        "peer_dependencies": [] if is_root else list(node.peer_dependencies),
        "children": children,
    }
