"""
Schema context logger.

Provides logging interface for the schema context with automatic [schema] prefix.
All schema modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger
from vitae.utils.settings import get_settings

CONTEXT_PREFIX = "[schema]"


def setup_schema_logger(log_dir: Path) -> Path:
    """Setup logger for the schema context."""
    settings = get_settings()
    return _setup_logger(
        context_name="schema",
        log_dir=log_dir,
        extra_provenance={
            "Current version": settings.versions.current,
            "Remote schemas": settings.remote_schemas.enabled,
        },
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_resolution(resolution) -> None:
    """Log where a schema came from (resolution: SchemaResolution)."""
    if resolution.source == "fallback":
        _log_warning(
            f"No schema for version {resolution.requested_version}; using fallback schema"
        )
    elif resolution.source == "compatible":
        _log_info(
            f"Version {resolution.requested_version} resolved to nearest known "
            f"{resolution.resolved_version}"
        )
    else:
        _log_debug(
            f"Version {resolution.requested_version} resolved from {resolution.source}"
            + (f" ({resolution.url})" if resolution.url else "")
        )
    if resolution.relaxed:
        _log_debug("  Version constants relaxed to any string")


def log_remote_failure(url: str, error: Exception) -> None:
    _log_warning(f"Remote schema fetch failed for {url}: {error}")


def log_rejected_url(url: str) -> None:
    _log_warning(f"Schema URL not in allow-list, not fetching: {url}")
