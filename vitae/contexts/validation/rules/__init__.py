"""
Core validation rules, grouped into rulesets per major version line.

Records in a major line with no ruleset of its own are checked with the
newest ruleset.
"""

from typing import Dict, List

from vitae.contexts.schemas.versions import parse_version
from vitae.contexts.validation.rules.base import FunctionRule, Rule, normalize_rule_output
from vitae.contexts.validation.rules.content import (
    EmailFormatRule,
    NoDuplicateEntriesRule,
    RequiredExperienceOrEducationRule,
)
from vitae.contexts.validation.rules.dates import (
    BirthDateValidRule,
    DatesChronologicalRule,
    DatesNotFutureRule,
    ExperienceDurationRule,
)

CORE_RULES = [
    DatesChronologicalRule(),
    DatesNotFutureRule(),
    BirthDateValidRule(),
    ExperienceDurationRule(),
    EmailFormatRule(),
    RequiredExperienceOrEducationRule(),
    NoDuplicateEntriesRule(),
]

# Both lines currently share the same checks (the rules read either envelope shape)
CORE_RULESETS: Dict[int, List[Rule]] = {
    0: CORE_RULES,
    1: CORE_RULES,
}


def get_core_rules(version: str) -> List[Rule]:
    """Core rules for a version's major line (newest ruleset for unknown majors)."""
    parsed = parse_version(version)
    if parsed is not None and parsed[0] in CORE_RULESETS:
        return list(CORE_RULESETS[parsed[0]])
    return list(CORE_RULESETS[max(CORE_RULESETS)])


__all__ = [
    "CORE_RULES",
    "CORE_RULESETS",
    "FunctionRule",
    "Rule",
    "get_core_rules",
    "normalize_rule_output",
]
