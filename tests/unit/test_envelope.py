"""Unit tests for record envelope helpers and version detection."""

import pytest

from vitae.contexts.schemas.envelope import (
    EnvelopeKind,
    birth_date,
    candidate_name,
    detect_version,
    education_entries,
    envelope_kind,
    extract_schema_url,
    primary_email,
    set_version_marker,
    work_entries,
)
from vitae.utils.settings import get_settings


@pytest.mark.unit
def test_envelope_kind(legacy_resume, namespaced_resume):
    """Test shape detection for both envelopes."""
    assert envelope_kind(legacy_resume) == EnvelopeKind.LEGACY
    assert envelope_kind(namespaced_resume) == EnvelopeKind.NAMESPACED
    assert envelope_kind({"resume": {}}) == EnvelopeKind.NAMESPACED
    assert envelope_kind({}) == EnvelopeKind.LEGACY
    assert envelope_kind(None) == EnvelopeKind.LEGACY


@pytest.mark.unit
def test_detect_version_order():
    """Test specVersion, then schema_version, then $schema, then current version."""
    assert detect_version({"specVersion": "0.2.0", "schema_version": "1.0.0"}) == "0.2.0"
    assert detect_version({"schema_version": "1.0.0"}) == "1.0.0"
    assert (
        detect_version({"$schema": "https://vitaeflow.org/schemas/v0.3.1/vitaeflow.schema.json"})
        == "0.3.1"
    )
    assert detect_version({}) == get_settings().versions.current


@pytest.mark.unit
@pytest.mark.parametrize("record", [None, [], "text", 42, {"schema_version": 3}])
def test_detect_version_never_raises(record):
    """Test odd inputs fall back to the current version."""
    assert detect_version(record) == get_settings().versions.current


@pytest.mark.unit
def test_set_version_marker_per_shape(legacy_resume, namespaced_resume):
    """Test the marker field follows the envelope shape."""
    set_version_marker(legacy_resume, "1.1.0")
    set_version_marker(namespaced_resume, "0.2.0")

    assert legacy_resume["schema_version"] == "1.1.0"
    assert "specVersion" not in legacy_resume
    assert namespaced_resume["specVersion"] == "0.2.0"
    assert "schema_version" not in namespaced_resume


@pytest.mark.unit
def test_work_entries_paths(legacy_resume, namespaced_resume):
    """Test normalized entries carry record paths for either shape."""
    legacy = work_entries(legacy_resume)
    assert [entry.path for entry in legacy] == ["work_experience[0]", "work_experience[1]"]
    assert legacy[0].start == "2015-06"
    assert legacy[0].organization == "Acme Corp"
    assert legacy[1].end is None

    namespaced = work_entries(namespaced_resume)
    assert namespaced[0].path == "resume.experience[0]"
    assert namespaced[0].end == "2019-08"
    assert education_entries(namespaced_resume)[0].title == "BSc"


@pytest.mark.unit
def test_accessors_are_null_safe():
    """Test missing or mistyped sections read as empty."""
    record = {"work_experience": "oops", "education": [None, 5], "personal_information": []}
    assert work_entries(record) == []
    assert education_entries(record) == []
    assert primary_email(record) == (None, "personal_information.email")
    assert birth_date(record)[0] is None
    assert candidate_name(record) is None
    assert extract_schema_url(record) is None


@pytest.mark.unit
def test_candidate_identity(legacy_resume, namespaced_resume):
    """Test best-effort name and email extraction."""
    assert candidate_name(legacy_resume) == "Jane Doe"
    assert candidate_name(namespaced_resume) == "Jane Doe"
    assert primary_email(namespaced_resume) == ("jane.doe@example.com", "resume.basics.email")
    assert birth_date(legacy_resume) == ("1990-04-12", "personal_information.birth_date")
