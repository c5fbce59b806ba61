"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers are defined in contexts/{context}/logger.py.

Library calls never install sinks on their own; applications (or tests)
call setup_logger() when they want a log file and a console stream.
"""

import sys
from importlib import metadata
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console: bool = True,
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up dual output (file + optional console) and writes a provenance
    header (command, working directory, package versions).

    Args:
        context_name: Context identifier (e.g., "embed", "validate", "migrate")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console: Also log INFO and above to stdout

    Returns:
        Path to log file

    Example:
        from vitae.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="embed",
            log_dir=Path("outs/logs/embed_20251114_123456"),
            extra_provenance={"Current version": "0.1.0"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # Remove default logger
    logger.remove()

    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # File handler captures everything
    logger.add(log_file, format=LOG_FORMAT, level="DEBUG")

    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def _package_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def log_provenance(extra_context: dict = None) -> None:
    """
    Log the session header: how the process was invoked, plus the installed
    versions of vitae and the libraries that write and check its output.

    Args:
        extra_context: Additional key-value pairs to log
    """
    header = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        "vitae": _package_version("vitae-embed"),
        "pypdf": _package_version("pypdf"),
        "jsonschema": _package_version("jsonschema"),
        **(extra_context or {}),
    }

    logger.info("-" * 60)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("-" * 60)
