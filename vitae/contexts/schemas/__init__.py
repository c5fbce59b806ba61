"""
Schemas Context

Responsibilities:
- Detects the version of a resume record (either envelope shape)
- Resolves a version to a schema: remote, local, nearest compatible, or fallback
- Compiles and caches structural validators

Owns: Version parsing, schema definitions, envelope accessors
Never: Runs business rules or modifies records (other than stamping markers on request)
"""

from vitae.contexts.schemas.envelope import (
    EnvelopeKind,
    detect_version,
    envelope_kind,
    extract_schema_url,
    set_version_marker,
)
from vitae.contexts.schemas.registry import SchemaNotFoundError, SchemaRegistry
from vitae.contexts.schemas.remote import RemoteSchemaFetcher, is_allowed_schema_url
from vitae.contexts.schemas.resolver import (
    SchemaResolution,
    SchemaResolver,
    StructuralError,
    build_fallback_schema,
    get_available_versions,
    get_default_resolver,
    is_version_supported,
    register_schema,
    relax_version_constants,
)
from vitae.contexts.schemas.versions import find_compatible_version, parse_version, satisfies

__all__ = [
    "EnvelopeKind",
    "RemoteSchemaFetcher",
    "SchemaNotFoundError",
    "SchemaRegistry",
    "SchemaResolution",
    "SchemaResolver",
    "StructuralError",
    "build_fallback_schema",
    "detect_version",
    "envelope_kind",
    "extract_schema_url",
    "find_compatible_version",
    "get_available_versions",
    "get_default_resolver",
    "is_allowed_schema_url",
    "is_version_supported",
    "parse_version",
    "register_schema",
    "relax_version_constants",
    "satisfies",
    "set_version_marker",
]
