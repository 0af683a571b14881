from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess from inside a project
directory and validates exit codes and the stdout/stderr streams.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List

from conftest import write_bytes, write_manifest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "modsize" / "main.py"


def run_cli(args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("FORCE_COLOR", None)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


def test_cli_reference_scenario(scenario_project: Path) -> None:
    """Default threshold, run from the project directory."""
    result = run_cli(["--no-color"], cwd=scenario_project)

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert "Total size of node_modules: 4.00 MB" in lines
    assert "  - [75.0%] pkg-a (3.0 MB) (peer deps: react)" in lines
    assert "  - [25.0%] pkg-b (1.0 MB)" in lines
    assert lines[-3] == "- [100.0%] node_modules (4.0 MB)"


def test_cli_threshold_prunes_subtrees(make_project: Callable[..., Path]) -> None:
    project = make_project()
    nm = project / "node_modules"
    write_bytes(nm / "huge" / "index.js", 9000)
    write_bytes(nm / "minor" / "index.js", 500)
    write_bytes(nm / "minor" / "node_modules" / "nested" / "index.js", 500)

    result = run_cli(["--min-percentage=15", "--no-progress", "--no-color"], cwd=project)

    assert result.returncode == 0, result.stderr
    assert "huge" in result.stdout
    assert "minor" not in result.stdout
    assert "nested" not in result.stdout


def test_cli_invalid_threshold(scenario_project: Path) -> None:
    result = run_cli(["--min-percentage=150"], cwd=scenario_project)

    assert result.returncode == 1
    assert "Invalid value for --min-percentage" in result.stderr
    assert "Total size" not in result.stdout


def test_cli_missing_node_modules(tmp_path: Path) -> None:
    write_manifest(tmp_path, {"name": "empty"})

    result = run_cli([], cwd=tmp_path)

    assert result.returncode == 1
    assert "does not exist" in result.stderr
    assert "Total size" not in result.stdout


def test_cli_missing_package_json(make_project: Callable[..., Path]) -> None:
    project = make_project(with_manifest=False)

    result = run_cli(["--no-progress"], cwd=project)

    assert result.returncode == 1
    assert "package.json not found" in result.stderr


def test_cli_project_argument(scenario_project: Path, tmp_path: Path) -> None:
    """A project path argument replaces the working directory lookup."""
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()

    result = run_cli([str(scenario_project), "--p=50", "--no-progress", "--no-color"], cwd=elsewhere)

    assert result.returncode == 0, result.stderr
    assert "pkg-a" in result.stdout
    assert "pkg-b" not in result.stdout
