"""
Schema Registry

Locally known resume schemas, loaded from packaged JSON definitions
(definitions/<version>.json) and cached on first use. Additional schemas can be
registered at runtime with register_schema().
"""

import copy
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from vitae.contexts.schemas.versions import parse_version

DEFINITIONS_PATH = Path(__file__).parent / "definitions"

# Only plain MAJOR.MINOR.PATCH strings ever name a definition file
DEFINITION_VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+")


class SchemaNotFoundError(KeyError):
    """Raised when no local schema exists for a version."""


class SchemaRegistry:
    """
    Registry for loading and caching local schemas by version string.

    Returned schemas are shared cached objects and must not be mutated; callers
    that need a variant (e.g. relaxed version constants) take a deep copy.
    """

    def __init__(self, definitions_path: Path = None):
        """
        Initialize the schema registry.

        Args:
            definitions_path: Directory of <version>.json files. Defaults to the
                              packaged definitions directory
        """
        self.definitions_path = definitions_path or DEFINITIONS_PATH
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._registered: Dict[str, Dict[str, Any]] = {}

    def _definition_file(self, version: str) -> Optional[Path]:
        """Path of the packaged definition for version, or None if version is not a plain version string."""
        if not isinstance(version, str) or not DEFINITION_VERSION_PATTERN.fullmatch(version):
            return None
        return self.definitions_path / f"{version}.json"

    def available_versions(self) -> List[str]:
        """All known versions (packaged and registered), sorted oldest first."""
        versions = {path.stem for path in self.definitions_path.glob("*.json")}
        versions.update(self._registered)
        return sorted(versions, key=lambda v: parse_version(v) or (0, 0, 0))

    def is_version_supported(self, version: str) -> bool:
        if version in self._registered:
            return True
        path = self._definition_file(version)
        return path is not None and path.exists()

    def get_schema(self, version: str) -> Dict[str, Any]:
        """
        Get the schema for an exact version, loading and caching it if necessary.

        Args:
            version: Version string (e.g. "0.1.0")

        Returns:
            JSON schema dictionary

        Raises:
            SchemaNotFoundError: If no schema is known for the version
            json.JSONDecodeError: If a definition file is not valid JSON
        """
        if version in self._registered:
            return self._registered[version]

        if version in self._cache:
            return self._cache[version]

        path = self._definition_file(version)
        if path is None or not path.exists():
            raise SchemaNotFoundError(f"No local schema for version {version!r}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        self._cache[version] = schema
        return schema

    def register_schema(self, version: str, schema: Dict[str, Any]) -> None:
        """Register (or replace) a schema at runtime; the registry keeps its own copy."""
        if parse_version(version) is None:
            raise ValueError(f"Not a version string: {version!r}")
        self._registered[version] = copy.deepcopy(schema)

    def clear_cache(self):
        """Clear the loaded-definition cache (registered schemas are kept)."""
        self._cache.clear()

    def is_cached(self, version: str) -> bool:
        return version in self._cache
