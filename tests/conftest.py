from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Builders for throwaway projects with a populated node_modules tree.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

MB = 1024 * 1024


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def write_bytes(path: Path, size: int) -> Path:
    """Create a file of exactly 'size' bytes, creating parents as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


def write_manifest(directory: Path, data: Dict[str, Any]) -> Path:
    """Write a package.json into 'directory' and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a factory creating a project directory.

    The project gets a root package.json (with optional devDependencies)
    and an empty node_modules directory unless disabled.
    """
    def _make(
            dev_dependencies: Optional[Dict[str, str]] = None,
            with_node_modules: bool = True,
            with_manifest: bool = True,
    ) -> Path:
        project = tmp_path / "project"
        project.mkdir(exist_ok=True)
        if with_manifest:
            data: Dict[str, Any] = {"name": "app", "version": "1.0.0"}
            if dev_dependencies is not None:
                data["devDependencies"] = dev_dependencies
            write_manifest(project, data)
        if with_node_modules:
            (project / "node_modules").mkdir(exist_ok=True)
        return project

    return _make


@pytest.fixture
def scenario_project(make_project: Callable[..., Path]) -> Path:
    """
    Project used by the reference scenario.

    Structure:
    /project
      package.json            (devDependencies: pkg-b)
      /node_modules
        /pkg-a                3 MB, peerDependencies: react
          index.js
          package.json
        /pkg-b                1 MB
          index.js
    """
    project = make_project(dev_dependencies={"pkg-b": "^1.0.0"})
    nm = project / "node_modules"

    manifest = write_manifest(nm / "pkg-a", {"name": "pkg-a", "peerDependencies": {"react": "*"}})
    write_bytes(nm / "pkg-a" / "index.js", 3 * MB - manifest.stat().st_size)
    write_bytes(nm / "pkg-b" / "index.js", 1 * MB)
    return project
