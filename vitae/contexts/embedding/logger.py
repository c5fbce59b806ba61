"""
Embedding context logger.

Provides logging interface for the embedding context with automatic [embed] prefix.
All embedding modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger
from vitae.utils.compression import get_compression_ratio
from vitae.utils.settings import get_settings
from vitae.utils.timestamp import format_timestamp

CONTEXT_PREFIX = "[embed]"


def setup_embedding_logger(log_dir: Path) -> Path:
    """
    Setup logger for the embedding context.

    Example:
        from vitae.contexts.embedding.logger import setup_embedding_logger

        log_file = setup_embedding_logger(Path("outs/logs/embed_20251114_123456"))
    """
    settings = get_settings()
    return _setup_logger(
        context_name="embed",
        log_dir=log_dir,
        extra_provenance={
            "Current version": settings.versions.current,
            "Compress threshold": settings.embedding.compress_threshold,
            "Max file size": settings.embedding.max_file_size,
        },
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


def log_embed_start(version: str, size: int) -> None:
    _log_info(f"Embedding resume (version {version}, {size} bytes)")


def log_embed_result(descriptor, pdf_size: int) -> None:
    """Log a completed embed (descriptor: ArtifactDescriptor)."""
    stored = "compressed" if descriptor.compressed else "uncompressed"
    _log_success(
        f"Embedded resume {descriptor.version}: {descriptor.original_size} bytes "
        f"stored {stored} as {descriptor.compressed_size} bytes"
    )
    if descriptor.compressed:
        ratio = get_compression_ratio(descriptor.original_size, descriptor.compressed_size)
        _log_debug(f"  Compression ratio: {ratio:.2f}")
    _log_debug(f"  Checksum: {descriptor.checksum}")
    _log_debug(f"  PDF size: {pdf_size} bytes")


def log_extract_result(result) -> None:
    """Log an ExtractResult."""
    if result.error_code is not None and result.data is None:
        _log_info(f"No resume extracted: {result.error}")
        return

    warnings = [issue for issue in result.issues if not issue.is_error]
    errors = [issue for issue in result.issues if issue.is_error]
    if result.ok:
        _log_success(
            f"Extracted resume {result.metadata.version if result.metadata else '?'}"
            f" ({len(warnings)} warnings)"
        )
    else:
        _log_warning(f"Extracted resume with {len(errors)} errors, {len(warnings)} warnings")
    if result.metadata is not None and result.metadata.created:
        _log_debug(f"  Created: {format_timestamp(result.metadata.created)}")
    if result.migrated:
        _log_info(f"  Migrated from {result.migrated_from}")
