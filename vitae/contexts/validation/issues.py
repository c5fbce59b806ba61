"""
Validation result data structures.

Issue ordering within a ValidationResult: schema issues first (in the order the
schema validator reported them), then rule issues by ascending rule priority,
then by rule registration order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class IssueKind(str, Enum):
    SCHEMA = "schema"
    RULE = "rule"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """A single problem found in a record."""

    kind: IssueKind
    severity: Severity
    message: str
    path: Optional[str] = None
    rule_id: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        self.kind = IssueKind(self.kind)
        self.severity = Severity(self.severity)

    def __str__(self) -> str:
        where = f" at {self.path}" if self.path else ""
        source = f" [{self.rule_id}]" if self.rule_id else ""
        return f"{self.severity.value}{source}{where}: {self.message}"

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind.value, "severity": self.severity.value, "message": self.message}
        if self.path is not None:
            data["path"] = self.path
        if self.rule_id is not None:
            data["rule_id"] = self.rule_id
        if self.context:
            data["context"] = dict(self.context)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **defaults) -> "ValidationIssue":
        """
        Build an issue from a mapping.

        Accepts "kind" or "type", and "rule_id" or "ruleId". Missing fields are
        taken from defaults (e.g. kind, severity, rule_id of the emitting rule).

        Raises:
            ValueError: If kind or severity is missing or unknown
            KeyError: If message is missing
        """
        kind = data.get("kind", data.get("type", defaults.get("kind")))
        severity = data.get("severity", defaults.get("severity"))
        rule_id = data.get("rule_id", data.get("ruleId", defaults.get("rule_id")))
        return cls(
            kind=kind,
            severity=severity,
            message=data["message"],
            path=data.get("path"),
            rule_id=rule_id,
            context=data.get("context"),
        )


@dataclass
class RuleResult:
    """What a rule returns: a validity flag and zero or more issues."""

    valid: bool = True
    issues: List[Any] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Outcome of validating a record."""

    ok: bool
    schema_valid: bool
    rules_valid: bool
    version: str
    issues: List[ValidationIssue] = field(default_factory=list)
    resolution: Any = None  # SchemaResolution
    truncated: bool = False

    @property
    def errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "schema_valid": self.schema_valid,
            "rules_valid": self.rules_valid,
            "version": self.version,
            "issues": [issue.to_dict() for issue in self.issues],
            "truncated": self.truncated,
            "resolution": self.resolution.to_dict() if self.resolution is not None else None,
        }
