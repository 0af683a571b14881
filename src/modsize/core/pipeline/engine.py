from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates a complete size report:
1. Validates configuration (threshold range).
2. Checks that the dependency directory and project manifest exist.
3. Loads the development dependency names.
4. Aggregates directory sizes.
5. Renders the percentage-gated tree rows.

Pre-flight failures are returned as error results. Failures during
traversal are not caught here and abort the run.
"""

import logging
from typing import Any, Dict, Optional

from modsize.core.analysis.size_aggregator import ProgressSink, aggregate_sizes
from modsize.core.analysis.tree_renderer import render_size_tree
from modsize.core.pipeline.validator import ConfigError, validate_config
from modsize.domain.manifest import ManifestError, load_manifest
from modsize.domain.size_models import (
    SizeReport,
    create_error_result,
    create_success_result,
)
from modsize.infra.fs import (
    is_existing_dir,
    is_existing_file,
    normalize_path,
    resolve_project_paths,
)

logger = logging.getLogger(__name__)


def run_size_report(
        config: Optional[Dict[str, Any]],
        *,
        progress: Optional[ProgressSink] = None,
) -> SizeReport:
    """
    Execute the full size report pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        progress: Optional sink receiving the processed entry count.

    Returns:
        SizeReport: Object containing status, totals and tree rows.

    Raises:
        OSError: If listing or reading the dependency directory fails.
        ManifestError: If a nested manifest cannot be decoded.
    """
    logger.debug("Size report execution started.")

    # -------------------------------------------------------------------------
    # 1) Config Validation
    # -------------------------------------------------------------------------
    try:
        cfg, warnings = validate_config(config if config is not None else {})
    except ConfigError as e:
        logger.error(str(e))
        raw_project = config.get("project_path") if isinstance(config, dict) else None
        return create_error_result(str(e), normalize_path(raw_project if isinstance(raw_project, str) else "", "."))

    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_path = normalize_path(cfg["project_path"], ".")
    min_percentage = cfg["min_percentage"]
    node_modules_path, manifest_path = resolve_project_paths(project_path)

    # -------------------------------------------------------------------------
    # 2) Pre-flight Input Checks
    # -------------------------------------------------------------------------
    if not is_existing_dir(node_modules_path):
        msg = f'The folder "{node_modules_path}" does not exist.'
        logger.error(msg)
        return create_error_result(msg, project_path, node_modules_path, min_percentage)

    if not is_existing_file(manifest_path):
        msg = f"package.json not found in {project_path}."
        logger.error(msg)
        return create_error_result(msg, project_path, node_modules_path, min_percentage)

    # -------------------------------------------------------------------------
    # 3) Development Dependencies
    # -------------------------------------------------------------------------
    try:
        manifest = load_manifest(manifest_path)
    except (ManifestError, OSError) as e:
        msg = f"Failed to read {manifest_path}: {e}"
        logger.error(msg)
        return create_error_result(msg, project_path, node_modules_path, min_percentage)

    dev_dependencies = manifest.dev_dependency_names
    logger.debug(f"Loaded {len(dev_dependencies)} development dependencies.")

    # -------------------------------------------------------------------------
    # 4) Aggregation & Rendering
    # -------------------------------------------------------------------------
    scan = aggregate_sizes(node_modules_path, progress=progress)
    lines = render_size_tree(scan.root, scan.total_size, dev_dependencies, min_percentage)

    logger.debug(f"Rendered {len(lines)} rows above {min_percentage}%.")
    return create_success_result(
        project_path=project_path,
        node_modules_path=node_modules_path,
        min_percentage=min_percentage,
        scan=scan,
        lines=lines,
        dev_dependencies=dev_dependencies,
    )
