"""
Extracting a resume record from a PDF.

    1. Read the discovery tag (optional, never fatal)
    2. Locate the reserved embedded file (absence is a normal "not found" result)
    3. Decompress if the descriptor says so; parse JSON
    4. Verify the fingerprint (mismatch is a warning)
    5. Validate per the requested mode
    6. Optionally migrate to the current version (failure is a warning)
"""

import json
import zlib
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from vitae.contexts.embedding.container import PdfContainer, PdfSource
from vitae.contexts.embedding.detection import read_discovery_tag
from vitae.contexts.embedding.logger import _log_debug, _log_warning, log_extract_result
from vitae.contexts.embedding.xmp import DiscoveryTag
from vitae.contexts.migration.graph import ResumeMigrator, get_default_migrator
from vitae.contexts.schemas.envelope import detect_version
from vitae.contexts.validation.issues import (
    IssueKind,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from vitae.contexts.validation.validator import ResumeValidator, get_default_validator
from vitae.utils.checksum import calculate_checksum, verify_checksum
from vitae.utils.compression import decompress_data, looks_compressed
from vitae.utils.exceptions import ERROR_MESSAGES, ErrorCode, VitaeError
from vitae.utils.settings import get_settings


@dataclass
class ArtifactMetadata:
    version: str
    checksum: str
    checksum_valid: Optional[bool]  # None when the PDF carries no descriptor
    created: Optional[str]
    compressed: bool
    original_size: int
    compressed_size: int

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


@dataclass
class ExtractResult:
    ok: bool
    data: Optional[Dict[str, Any]] = None
    metadata: Optional[ArtifactMetadata] = None
    xmp: Optional[DiscoveryTag] = None
    issues: List[ValidationIssue] = field(default_factory=list)
    validation: Optional[ValidationResult] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    migrated: bool = False
    migrated_from: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "data": self.data,
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "xmp": self.xmp.to_dict() if self.xmp else None,
            "issues": [issue.to_dict() for issue in self.issues],
            "error": self.error,
            "error_code": self.error_code.value if self.error_code else None,
            "migrated": self.migrated,
            "migrated_from": self.migrated_from,
        }


def _warning(message: str, rule_id: str, context: Optional[Dict[str, Any]] = None) -> ValidationIssue:
    return ValidationIssue(
        kind=IssueKind.RULE,
        severity=Severity.WARNING,
        message=message,
        rule_id=rule_id,
        context=context,
    )


def _decode_payload(payload: bytes, compressed: bool) -> Tuple[Dict[str, Any], bytes]:
    """
    Payload bytes -> (record, uncompressed bytes).

    Raises:
        VitaeError: INVALID_RESUME_DATA if decompression, decoding or parsing fails,
                    or the payload is not a JSON object
    """
    try:
        raw = decompress_data(payload) if compressed else payload
    except zlib.error as e:
        raise VitaeError(
            ErrorCode.INVALID_RESUME_DATA, f"Could not decompress resume data: {e}"
        ) from e

    try:
        record = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise VitaeError(ErrorCode.INVALID_RESUME_DATA, f"Resume data is not valid JSON: {e}") from e

    if not isinstance(record, dict):
        raise VitaeError(
            ErrorCode.INVALID_RESUME_DATA,
            f"Resume data must be a JSON object, got {type(record).__name__}",
        )
    return record, raw


def _tag_mismatches(tag: Optional[DiscoveryTag], checksum: str, version: str) -> List[ValidationIssue]:
    """Discovery tag fields that disagree with the payload (informational only)."""
    if tag is None:
        return []
    issues = []
    if tag.checksum and tag.checksum.lower() != checksum:
        issues.append(
            _warning(
                "Discovery tag checksum does not match the embedded resume data",
                "discovery-tag-mismatch",
                {"tag": tag.checksum, "payload": checksum},
            )
        )
    if tag.spec_version and tag.spec_version != version:
        issues.append(
            _warning(
                f"Discovery tag version {tag.spec_version} does not match resume version {version}",
                "discovery-tag-mismatch",
                {"tag": tag.spec_version, "payload": version},
            )
        )
    return issues


def extract_resume(
    pdf: PdfSource,
    *,
    mode: str = "compatible",
    validate_rules: bool = True,
    migrate_to_latest: bool = False,
    include_xmp: bool = False,
    skip_rules: Iterable[str] = (),
    validator: Optional[ResumeValidator] = None,
    migrator: Optional[ResumeMigrator] = None,
) -> ExtractResult:
    """
    Extract, verify and validate the resume record embedded in a PDF.

    Args:
        pdf: PDF bytes or path
        mode: Validation mode ("strict", "compatible" or "lenient")
        validate_rules: Run business rules
        migrate_to_latest: Migrate the record to the current version
        include_xmp: Include the parsed discovery tag in the result
        skip_rules: Rule ids to skip
        validator: Validator to use (defaults to the process-wide validator)
        migrator: Migrator to use (defaults to the process-wide migrator)

    Returns:
        ExtractResult; a PDF without resume data gives ok=False with
        error_code NO_RESUME_FOUND

    Raises:
        VitaeError: Container problems (see PdfContainer.load) or INVALID_RESUME_DATA
    """
    container = PdfContainer.load(pdf)
    tag = read_discovery_tag(container)

    artifact = container.find_artifact()
    if artifact is None:
        result = ExtractResult(
            ok=False,
            xmp=tag if include_xmp else None,
            error=ERROR_MESSAGES[ErrorCode.NO_RESUME_FOUND],
            error_code=ErrorCode.NO_RESUME_FOUND,
        )
        log_extract_result(result)
        return result

    descriptor = artifact.descriptor
    if descriptor is not None:
        compressed = descriptor.compressed
    else:
        compressed = looks_compressed(artifact.payload)
        _log_debug(f"No descriptor; payload {'looks' if compressed else 'does not look'} compressed")

    record, raw = _decode_payload(artifact.payload, compressed)
    checksum = calculate_checksum(raw)
    version = detect_version(record)

    issues: List[ValidationIssue] = []
    checksum_valid = None
    if descriptor is not None:
        checksum_valid = verify_checksum(raw, descriptor.checksum)
        if not checksum_valid:
            _log_warning("Checksum mismatch: resume data may have been modified")
            issues.append(
                _warning(
                    "Checksum mismatch: resume data may have been modified",
                    "checksum-validation",
                    {"expected": descriptor.checksum, "actual": checksum},
                )
            )
    issues.extend(_tag_mismatches(tag, checksum, version))

    validation = (validator or get_default_validator()).validate(
        record, mode=mode, validate_rules=validate_rules, skip_rules=skip_rules
    )
    issues.extend(validation.issues)

    result = ExtractResult(
        ok=False,
        data=record,
        metadata=ArtifactMetadata(
            version=descriptor.version if descriptor else version,
            checksum=descriptor.checksum if descriptor else checksum,
            checksum_valid=checksum_valid,
            created=descriptor.created if descriptor else None,
            compressed=compressed,
            original_size=descriptor.original_size if descriptor else len(raw),
            compressed_size=descriptor.compressed_size if descriptor else len(artifact.payload),
        ),
        xmp=tag if include_xmp else None,
        validation=validation,
    )

    current = get_settings().versions.current
    if migrate_to_latest and version != current:
        migration = (migrator or get_default_migrator()).migrate(record, current)
        if migration.ok:
            result.data = migration.data
            result.migrated = True
            result.migrated_from = version
        else:
            issues.append(
                _warning(
                    f"Could not migrate to version {current}: {migration.error}",
                    "version-migration",
                    {"from": version, "to": current, "steps": migration.steps},
                )
            )

    result.issues = issues
    result.ok = not any(issue.is_error for issue in issues)
    log_extract_result(result)
    return result
