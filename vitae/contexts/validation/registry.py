"""
Rule Registry

Holds globally registered custom rules in registration order. Duplicate ids are
kept (all of them run); skip lists and remove_rule() act on every rule with the id.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from vitae.contexts.validation.logger import _log_debug
from vitae.contexts.validation.rules.base import FunctionRule, Rule

RuleSpec = Union[Rule, Dict[str, Any]]


def as_rule(spec: RuleSpec) -> Rule:
    """
    Accept a Rule or a mapping of FunctionRule arguments.

    Raises:
        TypeError: If spec is neither
    """
    if isinstance(spec, Rule):
        return spec
    if isinstance(spec, dict):
        return FunctionRule(**spec)
    raise TypeError(f"Expected a Rule or mapping, got {type(spec).__name__}")


class RuleRegistry:
    """Ordered collection of custom rules."""

    def __init__(self, rules: Iterable[RuleSpec] = ()):
        self._rules: List[Rule] = []
        self.add_rules(rules)

    def __len__(self) -> int:
        return len(self._rules)

    def add_rule(self, rule: RuleSpec) -> Rule:
        rule = as_rule(rule)
        self._rules.append(rule)
        _log_debug(f"Registered rule '{rule.id}'")
        return rule

    def add_rules(self, rules: Iterable[RuleSpec]) -> None:
        for rule in rules:
            self.add_rule(rule)

    def remove_rule(self, rule_id: str) -> bool:
        """Remove every rule with this id. Returns True if any was removed."""
        before = len(self._rules)
        self._rules = [rule for rule in self._rules if rule.id != rule_id]
        return len(self._rules) < before

    def remove_rules_by_category(self, category: str) -> int:
        """Remove every rule in a category. Returns the number removed."""
        before = len(self._rules)
        self._rules = [rule for rule in self._rules if rule.category != category]
        return before - len(self._rules)

    def get_rules_by_category(self, category: str) -> List[Rule]:
        return [rule for rule in self._rules if rule.category == category]

    def list_rules(self) -> List[Rule]:
        return list(self._rules)

    def get_rule_by_id(self, rule_id: str) -> Optional[Rule]:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def clear(self):
        self._rules.clear()
