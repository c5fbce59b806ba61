"""
vitae - structured resume data embedded in PDF files

Embeds a versioned resume record inside a PDF (as resume.json plus a technical
descriptor and an XMP discovery tag), and extracts, verifies, validates and
migrates it back out.

Architecture:
- Schemas Context: Version detection and schema resolution
- Migration Context: Version-to-version migration graph
- Validation Context: Schema validation plus ordered business rules
- Embedding Context: PDF embed/extract protocol
"""

__version__ = "0.1.0"

from vitae.contexts.embedding import (
    ExtractResult,
    HasResumeResult,
    embed_resume,
    extract_resume,
    has_resume,
    has_resume_detailed,
)
from vitae.contexts.migration import (
    MigrationResult,
    MigrationStep,
    add_migration_step,
    can_migrate_resume,
    get_version_compatibility,
    migrate_resume,
)
from vitae.contexts.schemas import detect_version
from vitae.contexts.validation import (
    FunctionRule,
    Rule,
    ValidationIssue,
    ValidationResult,
    add_custom_rule,
    add_custom_rules,
    get_custom_rule_by_id,
    get_rules_by_category,
    list_custom_rules,
    remove_custom_rule,
    remove_rules_by_category,
    validate_resume,
)
from vitae.utils.checksum import calculate_checksum, verify_checksum
from vitae.utils.compression import compress_data, decompress_data, get_data_size, should_compress
from vitae.utils.constants import (
    CHECKSUM_ALGORITHM,
    RESUME_FILENAME,
    VITAEFLOW_NAMESPACE,
    VITAEFLOW_SPEC,
    VITAEFLOW_TYPE,
)
from vitae.utils.exceptions import ErrorCode, VitaeError

__all__ = [
    "CHECKSUM_ALGORITHM",
    "ErrorCode",
    "ExtractResult",
    "FunctionRule",
    "HasResumeResult",
    "MigrationResult",
    "MigrationStep",
    "RESUME_FILENAME",
    "Rule",
    "VITAEFLOW_NAMESPACE",
    "VITAEFLOW_SPEC",
    "VITAEFLOW_TYPE",
    "ValidationIssue",
    "ValidationResult",
    "VitaeError",
    "add_custom_rule",
    "add_custom_rules",
    "add_migration_step",
    "calculate_checksum",
    "can_migrate_resume",
    "compress_data",
    "decompress_data",
    "detect_version",
    "embed_resume",
    "extract_resume",
    "get_custom_rule_by_id",
    "get_data_size",
    "get_rules_by_category",
    "get_version_compatibility",
    "has_resume",
    "has_resume_detailed",
    "list_custom_rules",
    "migrate_resume",
    "remove_custom_rule",
    "remove_rules_by_category",
    "should_compress",
    "validate_resume",
    "verify_checksum",
]
