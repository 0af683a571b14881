from __future__ import annotations

"""
Configuration Domain Management.

Defines the runtime configuration dictionary that drives a size report and
the defaults applied when a value is not overridden.
"""

import logging
import os
from typing import Any, Dict

from modsize.domain.constants import DEFAULT_MIN_PERCENTAGE

logger = logging.getLogger(__name__)

# Keys accepted from interface overrides
CONFIG_KEYS = (
    "project_path",
    "min_percentage",
    "show_progress",
    "json_output",
    "color",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "project_path": os.getcwd(),

        # Report
        "min_percentage": DEFAULT_MIN_PERCENTAGE,

        # Presentation
        "show_progress": True,
        "json_output": False,
        "color": True,
    }


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and None means "not overridden".

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    ignored = set(overrides) - set(CONFIG_KEYS)
    if ignored:
        logger.debug(f"Ignoring unknown configuration keys: {sorted(ignored)}")
    return out
