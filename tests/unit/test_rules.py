"""Unit tests for the core validation rules."""

from datetime import date, timedelta

import pytest

from vitae.contexts.validation.issues import Severity
from vitae.contexts.validation.rules import CORE_RULES, get_core_rules
from vitae.contexts.validation.rules.base import normalize_rule_output
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


def run(rule, record):
    return normalize_rule_output(rule, rule.validate(record))


def years_ago(years: int) -> str:
    today = date.today()
    return today.replace(year=today.year - years, day=1).isoformat()


@pytest.mark.unit
def test_core_rules_pass_on_clean_records(legacy_resume, namespaced_resume):
    for rule in CORE_RULES:
        assert run(rule, legacy_resume) == [], rule.id
        assert run(rule, namespaced_resume) == [], rule.id


@pytest.mark.unit
def test_chronological_legacy(legacy_resume):
    """Test an end date before the start date is an error at the entry path."""
    legacy_resume["work_experience"][0]["end_date"] = "2014-01"

    [issue] = run(DatesChronologicalRule(), legacy_resume)

    assert issue.path == "work_experience[0]"
    assert issue.severity == Severity.ERROR
    assert issue.rule_id == "dates-chronological"
    assert "2014-01-31" in issue.message


@pytest.mark.unit
def test_chronological_compares_partial_dates_by_period(legacy_resume):
    """Test a same-year start and end with year precision is chronological."""
    legacy_resume["education"][0].update(start_date="2015-09", end_date="2015")
    assert run(DatesChronologicalRule(), legacy_resume) == []


@pytest.mark.unit
def test_chronological_namespaced_and_certifications(namespaced_resume):
    namespaced_resume["resume"]["education"][0]["endDate"] = "2009"
    namespaced_resume["resume"]["certifications"] = [
        {"name": "CKA", "date": "2021-05", "expiryDate": "2020-05"}
    ]

    paths = [issue.path for issue in run(DatesChronologicalRule(), namespaced_resume)]

    assert paths == ["resume.education[0]", "resume.certifications[0]"]


@pytest.mark.unit
def test_chronological_ignores_unparseable(legacy_resume):
    legacy_resume["work_experience"][0]["end_date"] = "Present"
    assert run(DatesChronologicalRule(), legacy_resume) == []


@pytest.mark.unit
def test_future_dates_are_warnings(legacy_resume):
    """Test future dates beyond the tolerance are flagged as warnings."""
    far = (date.today() + timedelta(days=400)).isoformat()
    near = (date.today() + timedelta(days=10)).isoformat()
    legacy_resume["work_experience"][1]["start_date"] = far
    legacy_resume["education"][0]["end_date"] = near

    issues = run(DatesNotFutureRule(), legacy_resume)

    assert [issue.path for issue in issues] == ["work_experience[1].start"]
    assert issues[0].severity == Severity.WARNING


@pytest.mark.unit
def test_future_birth_date(namespaced_resume):
    namespaced_resume["resume"]["basics"]["birthDate"] = str(date.today().year + 5)
    [issue] = run(DatesNotFutureRule(), namespaced_resume)
    assert issue.path == "resume.basics.birthDate"


@pytest.mark.unit
@pytest.mark.parametrize(
    "years, severity",
    [
        (10, Severity.ERROR),
        (30, None),
        (85, Severity.WARNING),
        (110, Severity.ERROR),
    ],
)
def test_birth_date_age_bands(legacy_resume, years, severity):
    """Test the age thresholds of the birth date rule."""
    legacy_resume["personal_information"]["birth_date"] = years_ago(years)

    issues = run(BirthDateValidRule(), legacy_resume)

    if severity is None:
        assert issues == []
    else:
        [issue] = issues
        assert issue.severity == severity
        assert issue.path == "personal_information.birth_date"


@pytest.mark.unit
def test_birth_date_missing_or_garbage(legacy_resume):
    legacy_resume["personal_information"]["birth_date"] = "sometime"
    assert run(BirthDateValidRule(), legacy_resume) == []
    del legacy_resume["personal_information"]
    assert run(BirthDateValidRule(), legacy_resume) == []


@pytest.mark.unit
def test_experience_duration(legacy_resume):
    legacy_resume["work_experience"][0].update(start_date="1950", end_date="2010")

    [issue] = run(ExperienceDurationRule(), legacy_resume)

    assert issue.severity == Severity.WARNING
    assert "Acme Corp" in issue.message
    assert issue.context["years"] > 50


@pytest.mark.unit
@pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.d", "a@b@c.d"])
def test_email_format_rejects(legacy_resume, email):
    legacy_resume["personal_information"]["email"] = email
    [issue] = run(EmailFormatRule(), legacy_resume)
    assert issue.path == "personal_information.email"


@pytest.mark.unit
def test_email_format_namespaced_path(namespaced_resume):
    namespaced_resume["resume"]["basics"]["email"] = "nope"
    [issue] = run(EmailFormatRule(), namespaced_resume)
    assert issue.path == "resume.basics.email"


@pytest.mark.unit
def test_required_experience_or_education(legacy_resume, namespaced_resume):
    del legacy_resume["work_experience"]
    assert run(RequiredExperienceOrEducationRule(), legacy_resume) == []
    del legacy_resume["education"]
    assert len(run(RequiredExperienceOrEducationRule(), legacy_resume)) == 1

    namespaced_resume["resume"]["experience"] = []
    namespaced_resume["resume"]["education"] = []
    assert len(run(RequiredExperienceOrEducationRule(), namespaced_resume)) == 1


@pytest.mark.unit
def test_duplicate_entries_case_insensitive(legacy_resume):
    legacy_resume["work_experience"].append(
        {"company": "ACME corp", "position": "software engineer", "start_date": "2020"}
    )

    [issue] = run(NoDuplicateEntriesRule(), legacy_resume)

    assert issue.path == "work_experience[2]"
    assert "work_experience[0]" in issue.message
    assert issue.severity == Severity.WARNING


@pytest.mark.unit
def test_rules_tolerate_malformed_sections():
    """Test rules skip non-list sections and non-mapping entries."""
    record = {
        "schema_version": "1.0.0",
        "personal_information": "Jane",
        "work_experience": ["oops", None, {"start_date": 5}],
        "education": {"not": "a list"},
    }
    for rule in CORE_RULES:
        run(rule, record)


@pytest.mark.unit
@pytest.mark.parametrize("version", ["0.1.0", "1.0.0", "9.0.0", "garbage"])
def test_get_core_rules(version):
    assert [rule.id for rule in get_core_rules(version)] == [rule.id for rule in CORE_RULES]
