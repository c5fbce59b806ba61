"""
Resume validation pipeline.

validate() runs structural (schema) validation and then business rules:

    1. Detect the version (unless given) and resolve a schema for it
       (strict mode reports a version that only resolves to the fallback schema)
    2. Run the schema validator; each error becomes a schema issue
    3. Unless rules are disabled or mode is "lenient", gather rules:
       core rules for the version's major line, then per-call rules, then
       globally registered rules; drop skipped ids and rules whose
       applies_to constraint excludes the version
    4. Run rules by ascending priority (registration order breaks ties);
       a rule that raises becomes one error issue and the batch continues
    5. ok = no error-severity issue; max_issues truncates the returned list only
"""

from typing import Any, Iterable, List, Optional

from vitae.contexts.schemas.envelope import (
    LEGACY_VERSION_FIELD,
    SPEC_VERSION_FIELD,
    EnvelopeKind,
    detect_version,
    envelope_kind,
    extract_schema_url,
)
from vitae.contexts.schemas.resolver import LENIENT, MODES, STRICT, SchemaResolver, get_default_resolver
from vitae.contexts.schemas.versions import parse_version, satisfies
from vitae.contexts.validation.issues import IssueKind, Severity, ValidationIssue, ValidationResult
from vitae.contexts.validation.logger import log_rule_failure, log_validation_result
from vitae.contexts.validation.registry import RuleRegistry, RuleSpec, as_rule
from vitae.contexts.validation.rules import get_core_rules
from vitae.contexts.validation.rules.base import Rule, normalize_rule_output
from vitae.utils.exceptions import ErrorCode
from vitae.utils.settings import get_settings


class ResumeValidator:
    """
    Schema + rule validator.

    Args:
        resolver: SchemaResolver (defaults to the process-wide resolver)
        registry: RuleRegistry of global custom rules (a new empty one by default)
        core_rules: Include the built-in core rules
    """

    def __init__(
        self,
        resolver: SchemaResolver = None,
        registry: RuleRegistry = None,
        core_rules: bool = True,
    ):
        self.resolver = resolver or get_default_resolver()
        self.registry = registry if registry is not None else RuleRegistry()
        self.core_rules = core_rules

    def _schema_issues(self, record: Any, resolution) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                kind=IssueKind.SCHEMA,
                severity=Severity.ERROR,
                message=error.message,
                path=error.path or None,
                context={"keyword": error.keyword, "params": error.params},
            )
            for error in self.resolver.validate_structure(record, resolution)
        ]

    def _unsupported_version_issue(self, version: str, kind: EnvelopeKind) -> ValidationIssue:
        field = SPEC_VERSION_FIELD if kind == EnvelopeKind.NAMESPACED else LEGACY_VERSION_FIELD
        return ValidationIssue(
            kind=IssueKind.SCHEMA,
            severity=Severity.ERROR,
            message=f"No schema available for version {version}",
            path=field,
            context={"code": ErrorCode.UNSUPPORTED_VERSION.value},
        )

    def applicable_rules(
        self, version: str, custom_rules: Iterable[RuleSpec] = (), skip_rules: Iterable[str] = ()
    ) -> List[Rule]:
        """Rules that would run for a version, in execution order."""
        rules = []
        if self.core_rules:
            rules.extend(get_core_rules(version))
        rules.extend(as_rule(rule) for rule in custom_rules)
        rules.extend(self.registry.list_rules())

        skip = set(skip_rules)
        known_version = parse_version(version) is not None
        rules = [
            rule
            for rule in rules
            if rule.id not in skip
            and not (rule.applies_to and known_version and not satisfies(version, rule.applies_to))
        ]

        default_priority = get_settings().validation.default_priority
        # sorted() is stable, so registration order breaks priority ties
        return sorted(
            rules, key=lambda rule: default_priority if rule.priority is None else rule.priority
        )

    def _run_rule(self, rule: Rule, record: Any) -> List[ValidationIssue]:
        try:
            return normalize_rule_output(rule, rule.validate(record))
        except Exception as e:
            log_rule_failure(rule.id, e)
            return [
                ValidationIssue(
                    kind=IssueKind.RULE,
                    severity=Severity.ERROR,
                    message=f"Rule '{rule.id}' failed to execute: {e}",
                    rule_id=rule.id,
                    context={"exception": type(e).__name__},
                )
            ]

    def validate(
        self,
        record: Any,
        mode: str = "strict",
        version: Optional[str] = None,
        validate_rules: bool = True,
        skip_rules: Iterable[str] = (),
        custom_rules: Iterable[RuleSpec] = (),
        max_issues: Optional[int] = None,
        schema_url: Optional[str] = None,
        remote: Optional[bool] = None,
    ) -> ValidationResult:
        """
        Validate a record.

        Args:
            record: Resume record
            mode: "strict", "compatible" or "lenient"
            version: Validate as this version instead of the detected one
            validate_rules: Run business rules after the schema check
            skip_rules: Rule ids to skip (core or custom)
            custom_rules: Rules for this call only
            max_issues: Truncate the returned issue list to this many entries
            schema_url: Explicit schema URL (overrides $schema) for remote resolution
            remote: Override the remote_schemas.enabled setting for this call

        Returns:
            ValidationResult
        """
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

        version = version or detect_version(record)
        resolution = self.resolver.resolve(
            version,
            mode=mode,
            schema_url=schema_url or extract_schema_url(record),
            kind=envelope_kind(record),
            remote=remote,
        )

        schema_issues = self._schema_issues(record, resolution)
        if mode == STRICT and resolution.source == "fallback":
            schema_issues.insert(0, self._unsupported_version_issue(version, resolution.kind))

        rule_issues: List[ValidationIssue] = []
        if validate_rules and mode != LENIENT:
            for rule in self.applicable_rules(version, custom_rules, skip_rules):
                rule_issues.extend(self._run_rule(rule, record))

        issues = schema_issues + rule_issues
        result = ValidationResult(
            ok=not any(issue.is_error for issue in issues),
            schema_valid=not schema_issues,
            rules_valid=not any(issue.is_error for issue in rule_issues),
            version=version,
            issues=issues,
            resolution=resolution,
        )

        if max_issues is not None and len(issues) > max_issues:
            result.issues = issues[:max_issues]
            result.truncated = True

        log_validation_result(result)
        return result


_default_validator: Optional[ResumeValidator] = None


def get_default_validator() -> ResumeValidator:
    """Process-wide validator whose registry holds the global custom rules."""
    global _default_validator
    if _default_validator is None:
        _default_validator = ResumeValidator()
    return _default_validator


def validate_resume(record: Any, **options) -> ValidationResult:
    """Validate with the default validator (options as for ResumeValidator.validate)."""
    return get_default_validator().validate(record, **options)


def add_custom_rule(rule: RuleSpec) -> Rule:
    return get_default_validator().registry.add_rule(rule)


def add_custom_rules(rules: Iterable[RuleSpec]) -> None:
    get_default_validator().registry.add_rules(rules)


def remove_custom_rule(rule_id: str) -> bool:
    return get_default_validator().registry.remove_rule(rule_id)


def remove_rules_by_category(category: str) -> int:
    return get_default_validator().registry.remove_rules_by_category(category)


def get_rules_by_category(category: str) -> List[Rule]:
    return get_default_validator().registry.get_rules_by_category(category)


def list_custom_rules() -> List[Rule]:
    return get_default_validator().registry.list_rules()


def get_custom_rule_by_id(rule_id: str) -> Optional[Rule]:
    return get_default_validator().registry.get_rule_by_id(rule_id)


def clear_custom_rules() -> None:
    get_default_validator().registry.clear()

