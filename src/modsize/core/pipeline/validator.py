from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw interface input and the pipeline. Coerces types,
injects defaults and rejects threshold values that cannot produce a
meaningful report.
"""

import logging
import math
import os
from typing import Any, Dict, List, Tuple

from modsize.domain.config import get_default_config
from modsize.domain.constants import MIN_PERCENTAGE_LOWER, MIN_PERCENTAGE_UPPER

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value is unusable."""


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of non-fatal warnings.

    Raises:
        ConfigError: If the minimum percentage is not a finite number
                     within the accepted range.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["project_path"] = os.path.abspath(
        _as_str(merged.get("project_path"), defaults["project_path"], "project_path", warnings)
    )

    for field in ("show_progress", "json_output", "color"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings)

    merged["min_percentage"] = parse_min_percentage(merged.get("min_percentage"))

    return merged, warnings


def parse_min_percentage(value: Any) -> float:
    """
    Convert a threshold value into a float in the inclusive 0-100 range.

    Args:
        value: Raw value (number or numeric string).

    Returns:
        float: The validated threshold.

    Raises:
        ConfigError: If the value is not a finite in-range number.
    """
    msg = (
        f"Invalid value for --min-percentage: {value!r}. "
        f"It should be a number between {MIN_PERCENTAGE_LOWER:g} and {MIN_PERCENTAGE_UPPER:g}."
    )
    if isinstance(value, bool):
        raise ConfigError(msg)
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ConfigError(msg) from None

    if not math.isfinite(number) or not (MIN_PERCENTAGE_LOWER <= number <= MIN_PERCENTAGE_UPPER):
        raise ConfigError(msg)
    return number


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str]) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    warnings.append(f"Invalid field '{field}': expected str, received {type(value).__name__}. Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str]) -> bool:
    """Coerce common truthy/falsy representations into bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "y", "on"):
            return True
        if v in ("0", "false", "no", "n", "off"):
            return False
    warnings.append(f"Invalid field '{field}': expected bool, received {value!r}. Using fallback.")
    return fallback
