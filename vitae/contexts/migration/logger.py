"""
Migration context logger.

Provides logging interface for the migration context with automatic [migrate] prefix.
All migration modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger
from vitae.utils.settings import get_settings

CONTEXT_PREFIX = "[migrate]"


def setup_migration_logger(log_dir: Path) -> Path:
    """Setup logger for the migration context."""
    return _setup_logger(
        context_name="migrate",
        log_dir=log_dir,
        extra_provenance={"Current version": get_settings().versions.current},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_migration_path(from_version: str, to_version: str, path) -> None:
    """Log the planned step sequence (path: list of MigrationStep, or None)."""
    if path is None:
        _log_warning(f"No migration path from {from_version} to {to_version}")
        return
    _log_info(f"Migrating {from_version} -> {to_version} in {len(path)} step(s)")
    for step in path:
        _log_debug(f"  {step.label}")


def log_migration_result(result) -> None:
    """Log a MigrationResult."""
    if result.ok:
        if result.steps:
            _log_success(
                f"Migrated {result.from_version} -> {result.to_version} ({len(result.steps)} steps)"
            )
    else:
        _log_warning(f"Migration {result.from_version} -> {result.to_version} failed: {result.error}")
