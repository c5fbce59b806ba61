"""
Embedding a resume record into a PDF.

    1. Stamp the version marker if the record has none
    2. Validate (strict); refuse to embed a record with errors
    3. Serialize deterministically and fingerprint the uncompressed bytes
    4. Compress according to policy ("auto" uses the size threshold)
    5. Replace any existing artifact (unreachable objects are dropped on save)
    6. Write the discovery tag unless skipped
"""

import copy
import json
from typing import Any, Dict, Optional, Union

from vitae.contexts.embedding.container import PdfContainer, PdfSource
from vitae.contexts.embedding.descriptor import ArtifactDescriptor
from vitae.contexts.embedding.logger import _log_debug, _log_error, log_embed_result, log_embed_start
from vitae.contexts.embedding.xmp import DiscoveryTag, build_xmp
from vitae.contexts.schemas.envelope import (
    EnvelopeKind,
    candidate_name,
    detect_version,
    envelope_kind,
    extract_schema_url,
    primary_email,
    set_version_marker,
    version_marker,
)
from vitae.contexts.validation.validator import ResumeValidator, get_default_validator
from vitae.utils.checksum import calculate_checksum
from vitae.utils.compression import compress_data, should_compress
from vitae.utils.exceptions import ErrorCode, VitaeError
from vitae.utils.settings import get_settings
from vitae.utils.timestamp import now_iso


def serialize_resume(record: Dict[str, Any]) -> bytes:
    """
    Canonical payload bytes: compact JSON, UTF-8, key order preserved.

    Raises:
        VitaeError: INVALID_RESUME_DATA if the record is not JSON-serializable
    """
    try:
        text = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise VitaeError(
            ErrorCode.INVALID_RESUME_DATA, f"Resume data is not JSON-serializable: {e}"
        ) from e
    return text.encode("utf-8")


def stamp_version(record: Dict[str, Any]) -> str:
    """
    Ensure the record carries a version marker (in place) and return its version.

    An unmarked record gets the version declared by its $schema URL, else the
    current version (namespaced shape) or the legacy version (flat shape).
    """
    version = version_marker(record)
    if version:
        return version

    versions = get_settings().versions
    if extract_schema_url(record):
        version = detect_version(record)
    elif envelope_kind(record) == EnvelopeKind.NAMESPACED:
        version = versions.current
    else:
        version = versions.legacy
    set_version_marker(record, version)
    return version


def embed_resume(
    pdf: PdfSource,
    resume: Dict[str, Any],
    *,
    validate: bool = True,
    validate_rules: bool = True,
    compress: Union[bool, str] = "auto",
    skip_xmp: bool = False,
    resume_id: Optional[str] = None,
    validator: Optional[ResumeValidator] = None,
) -> bytes:
    """
    Embed a resume record into a PDF.

    Args:
        pdf: PDF bytes or path
        resume: Resume record (not modified)
        validate: Validate before embedding (strict mode)
        validate_rules: Include business rules in validation
        compress: True, False, or "auto" (compress above embedding.compress_threshold)
        skip_xmp: Do not write the discovery tag
        resume_id: Optional identifier written to the discovery tag
        validator: Validator to use (defaults to the process-wide validator)

    Returns:
        Bytes of the new PDF

    Raises:
        VitaeError: Container problems (see PdfContainer.load),
                    VALIDATION_FAILED, or INVALID_RESUME_DATA
    """
    if not isinstance(resume, dict):
        raise VitaeError(
            ErrorCode.INVALID_RESUME_DATA,
            f"Resume data must be a mapping, got {type(resume).__name__}",
        )

    container = PdfContainer.load(pdf)

    record = copy.deepcopy(resume)
    version = stamp_version(record)

    if validate:
        result = (validator or get_default_validator()).validate(
            record, mode="strict", version=version, validate_rules=validate_rules
        )
        if not result.ok:
            _log_error(f"Refusing to embed invalid resume ({len(result.errors)} errors)")
            raise VitaeError.validation_failed(
                f"Resume validation failed with {len(result.errors)} errors", result
            )

    payload = serialize_resume(record)
    log_embed_start(version, len(payload))

    checksum = calculate_checksum(payload)
    compressed = should_compress(payload, compress)
    stored = compress_data(payload) if compressed else payload
    _log_debug(f"Compression: {compressed} ({len(payload)} -> {len(stored)} bytes)")

    descriptor = ArtifactDescriptor(
        version=version,
        checksum=checksum,
        created=now_iso(),
        compressed=compressed,
        original_size=len(payload),
        compressed_size=len(stored),
    )

    container.add_artifact(stored, descriptor)

    if not skip_xmp:
        tag = DiscoveryTag(
            has_structured_data=True,
            spec_version=version,
            candidate_name=candidate_name(record),
            candidate_email=primary_email(record)[0],
            checksum=checksum,
            last_modified=descriptor.created,
            resume_id=resume_id,
        )
        container.write_xmp(build_xmp(tag))

    # Drop the replaced artifact and metadata streams from the output
    output = container.compacted().save()
    log_embed_result(descriptor, len(output))
    return output
