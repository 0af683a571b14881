from __future__ import annotations

"""
Package Manifest Domain Model.

Typed view over 'package.json' files. Only the fields consumed by the size
report are modelled; version specifiers are kept but never interpreted.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when a manifest file exists but cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid manifest '{path}': {reason}")
        self.path = path
        self.reason = reason


# -----------------------------------------------------------------------------
# DATA MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Manifest:
    """
    Parsed package manifest.

    Attributes:
        name: Declared package name, if any.
        dev_dependencies: Mapping of development-only dependency names to specs.
        peer_dependencies: Mapping of peer dependency names to specs.
    """
    name: Optional[str] = None
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)

    @property
    def dev_dependency_names(self) -> FrozenSet[str]:
        """Names declared under 'devDependencies'."""
        return frozenset(self.dev_dependencies)

    @classmethod
    def from_dict(cls, data: Any, source: str = "<memory>") -> "Manifest":
        """
        Build a Manifest from decoded JSON data.

        Absent or malformed dependency sections are treated as empty.

        Args:
            data: Decoded JSON document.
            source: Origin of the data, used in diagnostics only.

        Returns:
            Manifest: Normalized manifest.
        """
        if not isinstance(data, dict):
            logger.debug(f"Manifest root is not an object: {source}")
            return cls()

        name = data.get("name")
        return cls(
            name=name if isinstance(name, str) else None,
            dev_dependencies=_as_dependency_map(data.get("devDependencies"), "devDependencies", source),
            peer_dependencies=_as_dependency_map(data.get("peerDependencies"), "peerDependencies", source),
        )


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_manifest(path: str) -> Manifest:
    """
    Read and decode a manifest file.

    Args:
        path: Path to a 'package.json' file.

    Returns:
        Manifest: Parsed manifest.

    Raises:
        FileNotFoundError: If the file does not exist.
        ManifestError: If the file is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestError(path, str(e)) from e
    return Manifest.from_dict(data, source=path)


def find_manifest(directory: str, file_name: str) -> Optional[Manifest]:
    """
    Load the manifest of a directory if it has one.

    Args:
        directory: Directory to inspect.
        file_name: Manifest file name.

    Returns:
        Optional[Manifest]: The parsed manifest, or None if absent.
    """
    path = os.path.join(directory, file_name)
    if not os.path.isfile(path):
        return None
    return load_manifest(path)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_dependency_map(value: Any, key: str, source: str) -> Dict[str, str]:
    """Coerce a dependency section into a name -> spec mapping."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.debug(f"Ignoring non-mapping '{key}' in {source}")
        return {}
    return {str(k): str(v) for k, v in value.items()}
