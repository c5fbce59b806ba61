"""
Schema resolution and structural validation.

resolve() maps a requested version to a concrete schema, trying in order:
    1. remote    - declared/explicit schema URL (only when remote schemas are enabled)
    2. local     - a registered schema for the exact version
    3. compatible - nearest known version in the same major line (non-strict modes)
    4. fallback  - a minimal schema for the record's evident shape

Resolution never raises for an unknown version; the returned SchemaResolution
says where the schema came from. Compiled validators are cached per resolution.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.validators import validator_for

from vitae.contexts.schemas.envelope import (
    LEGACY_VERSION_FIELD,
    SPEC_VERSION_FIELD,
    EnvelopeKind,
)
from vitae.contexts.schemas.logger import log_resolution
from vitae.contexts.schemas.registry import SchemaRegistry
from vitae.contexts.schemas.remote import RemoteSchemaFetcher
from vitae.contexts.schemas.versions import find_compatible_version
from vitae.utils.settings import get_settings

VERSION_CONSTANT_FIELDS = (LEGACY_VERSION_FIELD, SPEC_VERSION_FIELD)


def format_error_path(parts) -> str:
    """Dotted record path for a jsonschema error, e.g. work_experience[1].company."""
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


STRICT = "strict"
COMPATIBLE = "compatible"
LENIENT = "lenient"
MODES = (STRICT, COMPATIBLE, LENIENT)


@dataclass
class SchemaResolution:
    """Resolved schema plus where it came from."""

    schema: Dict[str, Any]
    requested_version: str
    resolved_version: Optional[str]
    source: str  # "remote" | "local" | "compatible" | "fallback"
    url: Optional[str] = None
    relaxed: bool = False
    kind: EnvelopeKind = EnvelopeKind.LEGACY

    @property
    def cache_key(self) -> Tuple:
        fallback_kind = self.kind.value if self.source == "fallback" else None
        return (self.source, self.resolved_version, self.url, self.relaxed, fallback_kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requested_version": self.requested_version,
            "resolved_version": self.resolved_version,
            "source": self.source,
            "url": self.url,
            "relaxed": self.relaxed,
        }


@dataclass
class StructuralError:
    """One structural error reported by the schema validator."""

    path: str
    keyword: str
    params: Any
    message: str
    schema_path: List[str] = field(default_factory=list)


def relax_version_constants(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Derived copy of a schema whose version fields accept any string.

    const/enum constraints on schema_version and specVersion (at any depth of
    "properties") become {"type": "string"}. The input is not modified.
    """
    relaxed = copy.deepcopy(schema)

    def walk(node):
        if isinstance(node, dict):
            properties = node.get("properties")
            if isinstance(properties, dict):
                for name in VERSION_CONSTANT_FIELDS:
                    definition = properties.get(name)
                    if isinstance(definition, dict) and (
                        "const" in definition or "enum" in definition
                    ):
                        properties[name] = {"type": "string"}
            for value in node.values():
                walk(value)
        elif isinstance(node, list):
            for item in node:
                walk(item)

    walk(relaxed)
    return relaxed


def build_fallback_schema(kind: EnvelopeKind) -> Dict[str, Any]:
    """Minimal schema requiring only the mandatory fields of the given envelope shape."""
    if kind == EnvelopeKind.NAMESPACED:
        return {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "VitaeFlow Fallback Schema (namespaced)",
            "type": "object",
            "required": [SPEC_VERSION_FIELD, "resume"],
            "properties": {
                SPEC_VERSION_FIELD: {"type": "string"},
                "meta": {"type": "object"},
                "resume": {"type": "object"},
            },
            "additionalProperties": True,
        }
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "VitaeFlow Fallback Schema (legacy)",
        "type": "object",
        "required": [LEGACY_VERSION_FIELD],
        "properties": {LEGACY_VERSION_FIELD: {"type": "string"}},
        "additionalProperties": True,
    }


class SchemaResolver:
    """
    Resolves versions to schemas and runs structural validation.

    Holds the local SchemaRegistry, the remote fetcher and a compiled-validator
    cache. Concurrent population of the caches is harmless: values are pure
    functions of their keys.
    """

    def __init__(
        self,
        registry: SchemaRegistry = None,
        fetcher: RemoteSchemaFetcher = None,
        remote_enabled: bool = None,
    ):
        self.registry = registry or SchemaRegistry()
        self.fetcher = fetcher or RemoteSchemaFetcher()
        self.remote_enabled = remote_enabled
        self._validators: Dict[Tuple, Any] = {}

    def _remote_enabled(self, override: Optional[bool]) -> bool:
        if override is not None:
            return override
        if self.remote_enabled is not None:
            return self.remote_enabled
        return get_settings().remote_schemas.enabled

    def resolve(
        self,
        version: str,
        mode: str = STRICT,
        schema_url: Optional[str] = None,
        kind: EnvelopeKind = EnvelopeKind.LEGACY,
        remote: Optional[bool] = None,
    ) -> SchemaResolution:
        """
        Resolve a version to a schema.

        Args:
            version: Requested version string
            mode: "strict", "compatible" or "lenient"; nearest-version search is
                  only attempted outside strict mode
            schema_url: Explicit or declared ($schema) URL for remote resolution
            kind: Envelope shape, used to pick the fallback schema
            remote: Override the remote_schemas.enabled setting for this call

        Returns:
            SchemaResolution (never raises for unknown versions)
        """
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

        resolution = None

        if schema_url and self._remote_enabled(remote):
            schema = self.fetcher.fetch(schema_url)
            if schema is not None:
                resolution = SchemaResolution(schema, version, version, "remote", url=schema_url, kind=kind)

        if resolution is None and self.registry.is_version_supported(version):
            resolution = SchemaResolution(
                self.registry.get_schema(version), version, version, "local", kind=kind
            )

        if resolution is None and mode != STRICT:
            nearest = find_compatible_version(version, self.registry.available_versions())
            if nearest is not None:
                resolution = SchemaResolution(
                    relax_version_constants(self.registry.get_schema(nearest)),
                    version,
                    nearest,
                    "compatible",
                    relaxed=True,
                    kind=kind,
                )

        if resolution is None:
            resolution = SchemaResolution(build_fallback_schema(kind), version, None, "fallback", kind=kind)

        log_resolution(resolution)
        return resolution

    def register_schema(self, version: str, schema: Dict[str, Any]) -> None:
        """Register a schema at runtime, dropping compiled validators that may be stale."""
        self.registry.register_schema(version, schema)
        self._validators.clear()

    def get_validator(self, resolution: SchemaResolution):
        """Compiled jsonschema validator for a resolution (cached)."""
        key = resolution.cache_key
        validator = self._validators.get(key)
        if validator is None:
            cls = validator_for(resolution.schema, default=Draft7Validator)
            # "format" stays an annotation; e-mail shape is the email-format rule's job
            validator = cls(resolution.schema)
            self._validators[key] = validator
        return validator

    def validate_structure(self, record: Any, resolution: SchemaResolution) -> List[StructuralError]:
        """Structural errors of a record against a resolved schema, in engine order."""
        validator = self.get_validator(resolution)
        errors = []
        for error in validator.iter_errors(record):
            path = format_error_path(error.absolute_path)
            errors.append(
                StructuralError(
                    path=path,
                    keyword=error.validator,
                    params=error.validator_value,
                    message=f"{path or 'root'} {error.message}",
                    schema_path=[str(part) for part in error.absolute_schema_path],
                )
            )
        return errors

    def clear_cache(self):
        """Clear compiled validators, loaded definitions and fetched schemas."""
        self._validators.clear()
        self.registry.clear_cache()
        self.fetcher.clear_cache()

    def is_cached(self, resolution: SchemaResolution) -> bool:
        return resolution.cache_key in self._validators


_default_resolver: Optional[SchemaResolver] = None


def get_default_resolver() -> SchemaResolver:
    """Process-wide resolver shared by the default validator."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = SchemaResolver()
    return _default_resolver


def register_schema(version: str, schema: Dict[str, Any]) -> None:
    """Register a schema with the default resolver's registry."""
    get_default_resolver().register_schema(version, schema)


def get_available_versions() -> List[str]:
    return get_default_resolver().registry.available_versions()


def is_version_supported(version: str) -> bool:
    return get_default_resolver().registry.is_version_supported(version)
