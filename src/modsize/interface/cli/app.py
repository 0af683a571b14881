from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging,
report execution and console rendering. Fatal traversal errors are caught
only here, at the boundary, so that nothing but an error message reaches
the user.
"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from modsize.core.analysis.tree_renderer import format_tree_line, render_json
from modsize.core.pipeline.engine import run_size_report
from modsize.domain.config import get_default_config, merge_config
from modsize.domain.constants import NODE_MODULES_DIR
from modsize.domain.size_models import SizeReport
from modsize.infra.logging import LoggingConfig, configure_logging, get_logger
from modsize.interface.cli import args as cli_args
from modsize.utils.formatting import bytes_to_mb, format_fixed

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr keeps stdout for the report)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy: defaults < command line
    conf = merge_config(get_default_config(), cli_args.args_to_overrides(args))
    color = bool(conf.get("color", True))
    show_progress = bool(conf.get("show_progress", True)) and not conf.get("json_output")

    out = _make_console(color)
    err = _make_console(color, stderr=True)
    progress = _ProgressLine(out) if show_progress else None

    # 4. Report execution phase
    try:
        report = run_size_report(conf, progress=progress)
    except KeyboardInterrupt:
        _end_progress(progress)
        logger.warning("Interrupted by user.")
        err.print("[red]Interrupted.[/red]")
        return 130
    except Exception as e:
        _end_progress(progress)
        logger.critical(f"Size computation failed: {e}", exc_info=True)
        err.print(f"[red]ERROR: Size computation failed: {escape(str(e))}[/red]")
        return 1

    _end_progress(progress)

    if not report.ok:
        err.print(f"[red]{escape(report.error)}[/red]")
        return 1

    # 5. Output rendering phase
    if conf.get("json_output"):
        print(render_json(report.scan, report.dev_dependencies, report.min_percentage))
    else:
        if show_progress:
            out.print()
        _print_human_report(out, report)

    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_report(console: Console, report: SizeReport) -> None:
    """Print the total size summary followed by the size tree."""
    total_mb = format_fixed(bytes_to_mb(report.total_size, 2), 2)
    console.print(f"[green]Total size of {NODE_MODULES_DIR}: {total_mb} MB[/green]")
    console.print()
    for line in report.lines:
        console.print(format_tree_line(line))


class _ProgressLine:
    """Progress sink that keeps overwriting a single console line."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.active = False

    def __call__(self, count: int) -> None:
        self.console.file.write(f"\rProcessed {count} entries...")
        self.console.file.flush()
        self.active = True


def _end_progress(progress: Optional[_ProgressLine]) -> None:
    """Terminate the transient progress line if one was written."""
    if progress is not None and progress.active:
        progress.console.file.write("\n")
        progress.console.file.flush()
        progress.active = False


def _make_console(color: bool, stderr: bool = False) -> Console:
    """Build a console that never wraps or auto-highlights report lines."""
    return Console(
        stderr=stderr,
        color_system="auto" if color else None,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
