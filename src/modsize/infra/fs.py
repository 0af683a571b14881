from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the locations a size report reads from and performs the
existence checks that must succeed before any traversal starts.
"""

import os
from typing import Tuple

from modsize.domain.constants import MANIFEST_FILE, NODE_MODULES_DIR

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: str, fallback: str) -> str:
    """
    Expand and absolutize a user-provided path.

    Args:
        path: Raw path (may be empty or contain '~').
        fallback: Path used when 'path' is empty.

    Returns:
        str: Absolute normalized path.
    """
    raw = path.strip() if path else ""
    if not raw:
        raw = fallback
    return os.path.abspath(os.path.expanduser(raw))


def resolve_project_paths(project_path: str) -> Tuple[str, str]:
    """
    Locate the dependency directory and the project manifest.

    Args:
        project_path: Absolute project directory.

    Returns:
        Tuple[str, str]: (node_modules directory, package.json path).
    """
    return (
        os.path.join(project_path, NODE_MODULES_DIR),
        os.path.join(project_path, MANIFEST_FILE),
    )


def is_existing_dir(path: str) -> bool:
    """True when 'path' exists and is a directory."""
    return os.path.isdir(path)


def is_existing_file(path: str) -> bool:
    """True when 'path' exists and is a regular file."""
    return os.path.isfile(path)
