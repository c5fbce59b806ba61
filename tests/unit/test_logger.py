"""Unit tests for loguru setup and the per-context prefixes."""

import sys

import pytest
from loguru import logger

from vitae.contexts.embedding.logger import setup_embedding_logger
from vitae.contexts.migration.logger import _log_info as migrate_info
from vitae.contexts.schemas.logger import log_rejected_url
from vitae.contexts.validation.logger import _log_warning as validate_warning
from vitae.utils.logger import setup_logger


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_setup_logger_writes_provenance(tmp_path, restore_logger):
    log_file = setup_logger(
        context_name="embed",
        log_dir=tmp_path / "logs",
        extra_provenance={"Current version": "0.1.0"},
        console=False,
    )
    logger.debug("debug line")
    logger.remove()

    assert log_file == tmp_path / "logs" / "embed.log"
    content = log_file.read_text()
    assert "Command:" in content
    assert "pypdf:" in content
    assert "Python:" in content
    assert "Current version: 0.1.0" in content
    assert "debug line" in content


@pytest.mark.unit
def test_context_prefixes(tmp_path, restore_logger):
    log_file = setup_logger(context_name="all", log_dir=tmp_path, console=False)
    migrate_info("path found")
    validate_warning("rule crashed")
    log_rejected_url("http://evil.example/schema.json")
    logger.remove()

    content = log_file.read_text()
    assert "[migrate] path found" in content
    assert "[validate] rule crashed" in content
    assert "[schema]" in content and "evil.example" in content


@pytest.mark.unit
def test_setup_embedding_logger_records_settings(tmp_path, restore_logger):
    log_file = setup_embedding_logger(tmp_path)
    logger.remove()

    assert log_file.name == "embed.log"
    assert "Compress threshold:" in log_file.read_text()
