"""Date-related core rules."""

from vitae.contexts.schemas.envelope import (
    birth_date,
    certification_entries,
    education_entries,
    work_entries,
)
from vitae.contexts.validation.issues import RuleResult, Severity
from vitae.contexts.validation.rules.base import Rule
from vitae.utils.dates import (
    calculate_age,
    calculate_duration_years,
    format_date,
    is_chronological,
    is_future_date,
    parse_partial_date,
)

MIN_AGE = 16
MAX_AGE = 100
HIGH_AGE = 80
MAX_JOB_YEARS = 50


class DatesChronologicalRule(Rule):
    """End dates must not precede start dates (work, education, certifications)."""

    id = "dates-chronological"
    message = "End dates must be after or equal to start dates"
    severity = Severity.ERROR
    category = "dates"

    SECTIONS = (
        ("Work experience", work_entries, "start date"),
        ("Education", education_entries, "start date"),
        ("Certification", certification_entries, "obtained date"),
    )

    def validate(self, record):
        issues = []
        for label, entries, start_name in self.SECTIONS:
            for entry in entries(record):
                if not (entry.start and entry.end):
                    continue
                start = parse_partial_date(entry.start)
                end = parse_partial_date(entry.end, fill_end=True)
                if start and end and not is_chronological(start, end):
                    end_name = "expiry date" if label == "Certification" else "end date"
                    issues.append(
                        self.issue(
                            f"{label} {end_name} ({format_date(end)}) must be after "
                            f"{start_name} ({format_date(start)})",
                            path=entry.path,
                        )
                    )
        return RuleResult(valid=not issues, issues=issues)


class DatesNotFutureRule(Rule):
    """Birth, start and end dates should not lie in the future (30-day tolerance)."""

    id = "dates-not-future"
    message = "Dates should not be in the future"
    severity = Severity.WARNING
    category = "dates"

    def validate(self, record):
        issues = []

        text, path = birth_date(record)
        parsed = parse_partial_date(text) if text else None
        if parsed and is_future_date(parsed):
            issues.append(
                self.issue(f"Birth date should not be in the future: {format_date(parsed)}", path)
            )

        for label, entries in (("Work experience", work_entries), ("Education", education_entries)):
            for entry in entries(record):
                for name, value in (("start", entry.start), ("end", entry.end)):
                    parsed = parse_partial_date(value) if value else None
                    if parsed and is_future_date(parsed):
                        issues.append(
                            self.issue(
                                f"{label} {name} date should not be in the future: {format_date(parsed)}",
                                f"{entry.path}.{name}",
                            )
                        )
        return RuleResult(valid=True, issues=issues)


class BirthDateValidRule(Rule):
    """Birth date must give an age between 16 and 100; above 80 is flagged."""

    id = "birth-date-valid"
    message = "Birth date should result in a reasonable age (16-100 years)"
    severity = Severity.ERROR
    category = "dates"

    def validate(self, record):
        text, path = birth_date(record)
        parsed = parse_partial_date(text) if text else None
        if parsed is None:
            return RuleResult()

        age = calculate_age(parsed)
        if age < MIN_AGE:
            issues = [self.issue(f"Age based on birth date is too young: {age} years old", path)]
        elif age > MAX_AGE:
            issues = [self.issue(f"Age based on birth date is unrealistic: {age} years old", path)]
        elif age > HIGH_AGE:
            issues = [
                self.issue(
                    f"Age based on birth date is quite high: {age} years old",
                    path,
                    severity=Severity.WARNING,
                )
            ]
        else:
            issues = []
        return RuleResult(valid=not any(issue.is_error for issue in issues), issues=issues)


class ExperienceDurationRule(Rule):
    """A single job lasting more than 50 years is suspicious."""

    id = "experience-duration"
    message = "Individual job durations should not exceed 50 years"
    severity = Severity.WARNING
    category = "dates"

    def validate(self, record):
        issues = []
        for entry in work_entries(record):
            if not (entry.start and entry.end):
                continue
            start = parse_partial_date(entry.start)
            end = parse_partial_date(entry.end, fill_end=True)
            if start and end:
                years = calculate_duration_years(start, end)
                if years > MAX_JOB_YEARS:
                    issues.append(
                        self.issue(
                            f"Job duration is unusually long: {years} years at "
                            f"{entry.organization or 'company'}",
                            entry.path,
                            context={"years": years},
                        )
                    )
        return RuleResult(valid=True, issues=issues)
