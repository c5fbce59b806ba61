"""
Migration graph engine.

Migration steps are directed edges between exact versions. A migration request
finds the shortest step sequence with a breadth-first search (ties broken by
registration order) and applies it to a deep copy of the record.
"""

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from vitae.contexts.migration.catalogue import BUILTIN_MIGRATIONS
from vitae.contexts.migration.logger import _log_debug, log_migration_path, log_migration_result
from vitae.contexts.schemas.envelope import detect_version, set_version_marker
from vitae.contexts.schemas.resolver import is_version_supported
from vitae.utils.exceptions import ErrorCode
from vitae.utils.settings import get_settings


@dataclass
class MigrationStep:
    """A transform from one exact version to another."""

    from_version: str
    to_version: str
    transform: Callable[[Dict[str, Any]], Dict[str, Any]]
    description: str = ""

    @property
    def label(self) -> str:
        return f"{self.from_version} → {self.to_version}: {self.description}"


@dataclass
class MigrationResult:
    """Outcome of a migration request."""

    ok: bool
    from_version: str
    to_version: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    steps: List[str] = field(default_factory=list)
    error_code: Optional[ErrorCode] = None
    failed_step: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "from_version": self.from_version,
            "to_version": self.to_version,
            "error": self.error,
            "steps": list(self.steps),
            "error_code": self.error_code.value if self.error_code else None,
            "failed_step": self.failed_step,
        }


class ResumeMigrator:
    """
    Registry of migration steps plus the path search and application logic.

    Steps are kept in an adjacency map keyed by from_version; each bucket keeps
    registration order so path search is deterministic.
    """

    def __init__(self, steps: Iterable[MigrationStep] = ()):
        self._edges: Dict[str, List[MigrationStep]] = {}
        for step in steps:
            self.add_migration(step)

    def add_migration(self, step: MigrationStep) -> None:
        """Register a step. Cycles and duplicate edges are allowed."""
        self._edges.setdefault(step.from_version, []).append(step)
        _log_debug(f"Registered migration {step.label}")

    def list_migrations(self) -> List[MigrationStep]:
        return [step for bucket in self._edges.values() for step in bucket]

    def get_available_migrations(self, from_version: str) -> List[str]:
        """Versions reachable in one step from from_version."""
        return [step.to_version for step in self._edges.get(from_version, [])]

    def find_path(self, from_version: str, to_version: str) -> Optional[List[MigrationStep]]:
        """
        Shortest step sequence between two versions.

        Returns:
            [] if the versions are equal, the list of steps if a path exists,
            otherwise None
        """
        if from_version == to_version:
            return []

        queue = deque([(from_version, [])])
        visited = {from_version}
        while queue:
            version, path = queue.popleft()
            for step in self._edges.get(version, []):
                next_path = path + [step]
                if step.to_version == to_version:
                    return next_path
                if step.to_version not in visited:
                    visited.add(step.to_version)
                    queue.append((step.to_version, next_path))
        return None

    def can_migrate(self, from_version: str, to_version: str) -> bool:
        return self.find_path(from_version, to_version) is not None

    def migrate(self, record: Dict[str, Any], target_version: Optional[str] = None) -> MigrationResult:
        """
        Migrate a record to target_version (default: the configured current version).

        The input is never mutated. On success the result's version marker is
        set to exactly target_version. A raising step stops the migration; the
        steps applied before it are reported.

        Args:
            record: Resume record
            target_version: Version to migrate to

        Returns:
            MigrationResult
        """
        target = target_version or get_settings().versions.current
        source = detect_version(record)

        if source == target:
            return MigrationResult(ok=True, from_version=source, to_version=target, data=record)

        path = self.find_path(source, target)
        log_migration_path(source, target, path)
        if path is None:
            result = MigrationResult(
                ok=False,
                from_version=source,
                to_version=target,
                error=f"No migration path found from {source} to {target}",
                error_code=ErrorCode.NO_MIGRATION_PATH,
            )
            log_migration_result(result)
            return result

        data = copy.deepcopy(record)
        applied = []
        for step in path:
            try:
                data = step.transform(data)
                if not isinstance(data, dict):
                    raise TypeError(f"transform returned {type(data).__name__}, expected a mapping")
            except Exception as e:
                result = MigrationResult(
                    ok=False,
                    from_version=source,
                    to_version=target,
                    error=f"Migration step {step.from_version} → {step.to_version} failed: {e}",
                    steps=applied,
                    error_code=ErrorCode.MIGRATION_FAILED,
                    failed_step=step.label,
                )
                log_migration_result(result)
                return result
            applied.append(step.label)

        set_version_marker(data, target)
        result = MigrationResult(ok=True, from_version=source, to_version=target, data=data, steps=applied)
        log_migration_result(result)
        return result


_default_migrator: Optional[ResumeMigrator] = None


def get_default_migrator() -> ResumeMigrator:
    """Process-wide migrator preloaded with the built-in catalogue."""
    global _default_migrator
    if _default_migrator is None:
        _default_migrator = ResumeMigrator(MigrationStep(*entry) for entry in BUILTIN_MIGRATIONS)
    return _default_migrator


def migrate_resume(record: Dict[str, Any], target_version: Optional[str] = None) -> MigrationResult:
    return get_default_migrator().migrate(record, target_version)


def can_migrate_resume(from_version: str, to_version: str) -> bool:
    return get_default_migrator().can_migrate(from_version, to_version)


def add_migration_step(step: MigrationStep) -> None:
    """Register a step with the default migrator."""
    get_default_migrator().add_migration(step)


def get_version_compatibility(version: str) -> Dict[str, Any]:
    """
    Support and upgrade information for a version.

    Returns:
        {"is_supported": bool, "can_migrate_to_latest": bool, "latest_version": str}
    """
    latest = get_settings().versions.current
    return {
        "is_supported": is_version_supported(version),
        "can_migrate_to_latest": can_migrate_resume(version, latest),
        "latest_version": latest,
    }
