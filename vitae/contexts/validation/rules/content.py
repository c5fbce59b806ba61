"""Content core rules."""

import re

from vitae.contexts.schemas.envelope import education_entries, primary_email, work_entries
from vitae.contexts.validation.issues import RuleResult, Severity
from vitae.contexts.validation.rules.base import Rule

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class EmailFormatRule(Rule):
    id = "email-format"
    message = "Email addresses must be valid"
    severity = Severity.ERROR
    category = "content"

    def validate(self, record):
        email, path = primary_email(record)
        if email and not EMAIL_PATTERN.match(email):
            return RuleResult(valid=False, issues=[self.issue("Invalid email format", path)])
        return RuleResult()


class RequiredExperienceOrEducationRule(Rule):
    id = "required-experience-or-education"
    message = "Resume must have at least work experience or education"
    severity = Severity.ERROR
    category = "content"

    def validate(self, record):
        if work_entries(record) or education_entries(record):
            return RuleResult()
        return RuleResult(
            valid=False,
            issues=[self.issue("Resume must have at least a work experience or education section")],
        )


class NoDuplicateEntriesRule(Rule):
    """Flags work entries repeating an earlier organization and position."""

    id = "no-duplicate-entries"
    message = "Avoid duplicate entries with same organization and position"
    severity = Severity.WARNING
    category = "content"

    def validate(self, record):
        issues = []
        seen = {}
        for index, entry in enumerate(work_entries(record)):
            if not (entry.organization and entry.title):
                continue
            key = (entry.organization.lower(), entry.title.lower())
            if key in seen:
                issues.append(
                    self.issue(
                        f"Possible duplicate entry: {entry.title} at {entry.organization} "
                        f"(also at {seen[key]})",
                        entry.path,
                    )
                )
            else:
                seen[key] = entry.path
        return RuleResult(valid=True, issues=issues)
