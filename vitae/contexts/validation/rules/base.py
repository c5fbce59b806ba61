"""
Rule abstractions.

A rule inspects a record and emits zero or more issues. Subclass Rule and
implement validate(), or wrap a plain callable with FunctionRule.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

from vitae.contexts.validation.issues import IssueKind, RuleResult, Severity, ValidationIssue

RuleOutput = Union[RuleResult, Dict[str, Any]]


class Rule(ABC):
    """
    Abstract base for validation rules.

    Subclasses must:
    - Set id (unique name used by skip lists) and message (default issue text)
    - Optionally set severity, priority (lower runs first; None means the
      configured default), category and applies_to (a version constraint)
    - Implement validate(record)
    """

    id: str
    message: str = ""
    severity: Severity = Severity.ERROR
    priority: Optional[int] = None
    category: Optional[str] = None
    applies_to: Optional[str] = None
    description: Optional[str] = None

    @abstractmethod
    def validate(self, record: Dict[str, Any]) -> RuleOutput:
        """Inspect a record and return a RuleResult (or a {"valid", "issues"} mapping)."""

    def issue(
        self,
        message: str,
        path: Optional[str] = None,
        severity: Optional[Severity] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ValidationIssue:
        """Build a rule issue attributed to this rule."""
        return ValidationIssue(
            kind=IssueKind.RULE,
            severity=severity or self.severity,
            message=message,
            path=path,
            rule_id=self.id,
            context=context,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, priority={self.priority!r})"


class FunctionRule(Rule):
    """Rule backed by a callable: record -> RuleResult | {"valid", "issues"}."""

    def __init__(
        self,
        id: str,
        validate: Callable[[Dict[str, Any]], RuleOutput],
        message: str = "",
        severity: Union[Severity, str] = Severity.ERROR,
        priority: Optional[int] = None,
        category: Optional[str] = None,
        applies_to: Optional[str] = None,
        description: Optional[str] = None,
    ):
        self.id = id
        self._validate = validate
        self.message = message
        self.severity = Severity(severity)
        self.priority = priority
        self.category = category
        self.applies_to = applies_to
        self.description = description

    def validate(self, record: Dict[str, Any]) -> RuleOutput:
        return self._validate(record)


def normalize_rule_output(rule: Rule, output: RuleOutput) -> List[ValidationIssue]:
    """
    Convert whatever a rule returned into a list of ValidationIssue.

    Issues may be ValidationIssue objects or mappings; missing kind, severity and
    rule_id are filled from the rule. A result marked invalid with no issues
    yields one issue carrying the rule's default message.

    Raises:
        TypeError: If the output is neither a RuleResult nor a mapping
    """
    if isinstance(output, RuleResult):
        valid, raw_issues = output.valid, output.issues
    elif isinstance(output, dict):
        valid, raw_issues = output.get("valid", True), output.get("issues") or []
    else:
        raise TypeError(f"rule returned {type(output).__name__}, expected RuleResult or mapping")

    defaults = {"kind": IssueKind.RULE, "severity": rule.severity, "rule_id": rule.id}
    issues = []
    for raw in raw_issues:
        if isinstance(raw, ValidationIssue):
            if raw.rule_id is None:
                raw.rule_id = rule.id
            issues.append(raw)
        elif isinstance(raw, dict):
            issues.append(ValidationIssue.from_dict(raw, **defaults))
        else:
            raise TypeError(f"rule issue has type {type(raw).__name__}, expected mapping")

    if not valid and not issues:
        issues.append(rule.issue(rule.message or f"Rule '{rule.id}' failed"))
    return issues
