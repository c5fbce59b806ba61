"""
Validation Context

Responsibilities:
- Runs structural (schema) validation through the schemas context
- Runs ordered, fault-isolated business rules (core and custom)
- Merges issues with severity and provenance into a ValidationResult

Owns: Rules, the rule registry, validation results
Never: Modifies the record being validated
"""

from vitae.contexts.validation.issues import (
    IssueKind,
    RuleResult,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from vitae.contexts.validation.registry import RuleRegistry
from vitae.contexts.validation.rules import CORE_RULES, FunctionRule, Rule, get_core_rules
from vitae.contexts.validation.validator import (
    ResumeValidator,
    add_custom_rule,
    add_custom_rules,
    clear_custom_rules,
    get_custom_rule_by_id,
    get_default_validator,
    get_rules_by_category,
    list_custom_rules,
    remove_custom_rule,
    remove_rules_by_category,
    validate_resume,
)

__all__ = [
    "CORE_RULES",
    "FunctionRule",
    "IssueKind",
    "ResumeValidator",
    "Rule",
    "RuleRegistry",
    "RuleResult",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "add_custom_rule",
    "add_custom_rules",
    "clear_custom_rules",
    "get_core_rules",
    "get_custom_rule_by_id",
    "get_default_validator",
    "get_rules_by_category",
    "list_custom_rules",
    "remove_custom_rule",
    "remove_rules_by_category",
    "validate_resume",
]
