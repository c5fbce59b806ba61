"""
Record envelope helpers.

Resume records come in two shapes:

    Legacy (flat):      schema_version, personal_information{...},
                        work_experience[], education[], skills[], certifications[]
    Namespaced:         $schema, specVersion, meta{language, country, ...},
                        resume{basics, experience[], education[], skills{...},
                               certifications[]}

All accessors are null-safe: missing or mistyped sections read as empty.
Each list accessor yields (path, entry) pairs where path is the record path of
the entry, e.g. "work_experience[2]" or "resume.experience[2]".
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from vitae.utils.settings import get_settings

LEGACY_VERSION_FIELD = "schema_version"
SPEC_VERSION_FIELD = "specVersion"
SCHEMA_URL_FIELD = "$schema"

SCHEMA_URL_VERSION_PATTERN = re.compile(r"v(\d+\.\d+\.\d+)")


class EnvelopeKind(str, Enum):
    LEGACY = "legacy"
    NAMESPACED = "namespaced"


@dataclass
class Entry:
    """A normalized view of a dated list entry (work, education, certification)."""

    path: str
    start: Optional[str]
    end: Optional[str]
    organization: Optional[str]
    title: Optional[str]
    raw: Dict[str, Any]


def envelope_kind(record: Any) -> EnvelopeKind:
    """Namespaced when specVersion or a resume mapping is present, otherwise legacy."""
    if isinstance(record, dict) and (
        SPEC_VERSION_FIELD in record or isinstance(record.get("resume"), dict)
    ):
        return EnvelopeKind.NAMESPACED
    return EnvelopeKind.LEGACY


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


def _body(record: Any) -> Tuple[Dict[str, Any], str]:
    """Container holding the resume sections, and its path prefix."""
    if envelope_kind(record) == EnvelopeKind.NAMESPACED:
        return _dict(record.get("resume")), "resume."
    return _dict(record), ""


def _entries(record: Any, legacy_key: str, namespaced_key: str, fields: Dict[str, tuple]) -> List[Entry]:
    body, prefix = _body(record)
    key = namespaced_key if prefix else legacy_key
    entries = []
    for index, item in enumerate(_list(body.get(key))):
        if not isinstance(item, dict):
            continue

        def pick(name):
            for candidate in fields[name]:
                value = _str(item.get(candidate))
                if value:
                    return value
            return None

        entries.append(
            Entry(
                path=f"{prefix}{key}[{index}]",
                start=pick("start"),
                end=pick("end"),
                organization=pick("organization"),
                title=pick("title"),
                raw=item,
            )
        )
    return entries


def work_entries(record: Any) -> List[Entry]:
    return _entries(
        record,
        "work_experience",
        "experience",
        {
            "start": ("start_date", "startDate"),
            "end": ("end_date", "endDate"),
            "organization": ("company", "name", "organization"),
            "title": ("position", "title"),
        },
    )


def education_entries(record: Any) -> List[Entry]:
    return _entries(
        record,
        "education",
        "education",
        {
            "start": ("start_date", "startDate"),
            "end": ("end_date", "endDate"),
            "organization": ("institution",),
            "title": ("degree", "studyType", "area"),
        },
    )


def certification_entries(record: Any) -> List[Entry]:
    return _entries(
        record,
        "certifications",
        "certifications",
        {
            "start": ("date_obtained", "date", "issueDate"),
            "end": ("expiry_date", "expiryDate"),
            "organization": ("issuer", "issuing_organization"),
            "title": ("name",),
        },
    )


def _personal(record: Any) -> Tuple[Dict[str, Any], str]:
    if envelope_kind(record) == EnvelopeKind.NAMESPACED:
        return _dict(_dict(record.get("resume")).get("basics")), "resume.basics"
    return _dict(record.get("personal_information") if isinstance(record, dict) else None), "personal_information"


def primary_email(record: Any) -> Tuple[Optional[str], str]:
    """(email, path) of the candidate's primary e-mail; email is None when absent."""
    personal, path = _personal(record)
    return _str(personal.get("email")), f"{path}.email"


def birth_date(record: Any) -> Tuple[Optional[str], str]:
    """(birth date text, path); the date is None when absent."""
    personal, path = _personal(record)
    for key in ("birth_date", "birthDate"):
        value = _str(personal.get(key))
        if value:
            return value, f"{path}.{key}"
    return None, f"{path}.birth_date"


def candidate_name(record: Any) -> Optional[str]:
    """Best-effort full name from either shape."""
    personal, _ = _personal(record)
    for key in ("full_name", "name"):
        value = _str(personal.get(key))
        if value:
            return value
    first = _str(personal.get("first_name")) or _str(personal.get("firstName"))
    last = _str(personal.get("last_name")) or _str(personal.get("lastName"))
    parts = [part for part in (first, last) if part]
    return " ".join(parts) if parts else None


def extract_schema_url(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return _str(record.get(SCHEMA_URL_FIELD))
    return None


def version_marker(record: Any) -> Optional[str]:
    """The explicit version marker, if any (specVersion first, then schema_version)."""
    if not isinstance(record, dict):
        return None
    return _str(record.get(SPEC_VERSION_FIELD)) or _str(record.get(LEGACY_VERSION_FIELD))


def set_version_marker(record: Dict[str, Any], version: str) -> Dict[str, Any]:
    """Write version into the marker field for the record's shape (in place); returns record."""
    if envelope_kind(record) == EnvelopeKind.NAMESPACED:
        record[SPEC_VERSION_FIELD] = version
    else:
        record[LEGACY_VERSION_FIELD] = version
    return record


def detect_version(record: Any) -> str:
    """
    Derive the canonical version string of a record. Never raises.

    Checks, in order: specVersion, schema_version, a vX.Y.Z pattern in the
    $schema URL, then falls back to the configured current version.
    """
    marker = version_marker(record)
    if marker:
        return marker

    url = extract_schema_url(record)
    if url:
        match = SCHEMA_URL_VERSION_PATTERN.search(url)
        if match:
            return match.group(1)

    return get_settings().versions.current
