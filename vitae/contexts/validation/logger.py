"""
Validation context logger.

Provides logging interface for the validation context with automatic [validate] prefix.
All validation modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[validate]"


def setup_validation_logger(log_dir: Path) -> Path:
    """Setup logger for the validation context."""
    return _setup_logger(context_name="validate", log_dir=log_dir)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_rule_failure(rule_id: str, error: Exception) -> None:
    _log_warning(f"Rule '{rule_id}' raised {type(error).__name__}: {error}")


def log_validation_result(result, verbose: bool = False) -> None:
    """
    Log a ValidationResult summary.

    Args:
        result: ValidationResult
        verbose: Log every issue at debug level (default: first 5)
    """
    status = "valid" if result.ok else "invalid"
    _log_info(
        f"Record {status} (version {result.version}): "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    limit = len(result.issues) if verbose else 5
    for issue in result.issues[:limit]:
        _log_debug(f"  {issue}")
    if len(result.issues) > limit:
        _log_debug(f"  ... and {len(result.issues) - limit} more issues")
