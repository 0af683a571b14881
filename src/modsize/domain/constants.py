from __future__ import annotations

"""
Global Domain Constants.

Names, markers and thresholds shared by the aggregation, rendering and
interface layers.
"""

from typing import Final

# -----------------------------------------------------------------------------
# FILESYSTEM LAYOUT
# -----------------------------------------------------------------------------

NODE_MODULES_DIR: Final[str] = "node_modules"
MANIFEST_FILE: Final[str] = "package.json"

# Namespace directories (e.g. '@babel') start with this character
SCOPE_MARKER: Final[str] = "@"

# -----------------------------------------------------------------------------
# REPORTING
# -----------------------------------------------------------------------------

DEFAULT_MIN_PERCENTAGE: Final[float] = 2.0
MIN_PERCENTAGE_LOWER: Final[float] = 0.0
MIN_PERCENTAGE_UPPER: Final[float] = 100.0

# A progress notification is emitted every N processed entries
PROGRESS_INTERVAL: Final[int] = 100

INDENT_STEP: Final[str] = "  "
BYTES_PER_MB: Final[int] = 1024 * 1024
