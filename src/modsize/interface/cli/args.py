from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
domain configuration overrides. The threshold is kept as raw text here;
range and number checks belong to the validator so that every input path
reports them the same way.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the modsize CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="modsize",
        description="Report the disk footprint of node_modules as a percentage-weighted tree.",
    )

    # --- Path Management ---
    p.add_argument(
        "project_path",
        nargs="?",
        default=None,
        help="Project directory containing node_modules and package.json (default: current directory).",
    )

    # --- Report Shape ---
    p.add_argument(
        "--min-percentage", "--p",
        dest="min_percentage",
        default=None,
        metavar="PERCENT",
        help="Hide entries smaller than this share of the total, 0-100 (default: 2).",
    )

    # --- Presentation ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the report as JSON.",
    )
    p.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not print progress while scanning.",
    )
    p.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write log records to this file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["project_path"] = args.project_path
    overrides["min_percentage"] = args.min_percentage

    if args.json_output:
        overrides["json_output"] = True
        overrides["show_progress"] = False
    if args.no_progress:
        overrides["show_progress"] = False
    if args.no_color:
        overrides["color"] = False

    return overrides
