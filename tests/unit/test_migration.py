"""Unit tests for the migration graph engine and the built-in catalogue."""

import copy

import pytest

from vitae.contexts.migration.catalogue import legacy_to_namespaced
from vitae.contexts.migration.graph import (
    MigrationStep,
    ResumeMigrator,
    get_version_compatibility,
    migrate_resume,
)
from vitae.utils.exceptions import ErrorCode


def _tag(version):
    """Transform that records which steps ran."""

    def transform(record):
        record = dict(record)
        record["trail"] = record.get("trail", []) + [version]
        return record

    return transform


@pytest.fixture
def migrator():
    return ResumeMigrator(
        [
            MigrationStep("1.0", "1.1", _tag("1.1"), "add a"),
            MigrationStep("1.1", "1.2", _tag("1.2"), "add b"),
            MigrationStep("1.2", "1.3", _tag("1.3"), "add c"),
            MigrationStep("1.0", "2.0", _tag("2.0"), "restructure"),
        ]
    )


@pytest.mark.unit
def test_migrate_follows_shortest_path(migrator):
    """Test a multi-step chain is applied in order and the marker is set."""
    result = migrator.migrate({"schema_version": "1.0"}, "1.3")

    assert result.ok
    assert result.from_version == "1.0"
    assert result.to_version == "1.3"
    assert result.steps == ["1.0 → 1.1: add a", "1.1 → 1.2: add b", "1.2 → 1.3: add c"]
    assert result.data["trail"] == ["1.1", "1.2", "1.3"]
    assert result.data["schema_version"] == "1.3"


@pytest.mark.unit
def test_migrate_direct_edge(migrator):
    """Test a direct edge is a single step."""
    result = migrator.migrate({"schema_version": "1.0"}, "2.0")
    assert result.ok
    assert len(result.steps) == 1
    assert result.data["schema_version"] == "2.0"


@pytest.mark.unit
def test_migrate_same_version_is_noop(migrator):
    """Test migrating to the current version returns the input unchanged."""
    record = {"schema_version": "1.2", "x": 1}
    result = migrator.migrate(record, "1.2")
    assert result.ok
    assert result.steps == []
    assert result.data is record


@pytest.mark.unit
def test_migrate_no_path_leaves_input_untouched(migrator):
    """Test a missing path is a typed failure without mutation."""
    record = {"schema_version": "1.3", "nested": {"a": [1, 2]}}
    snapshot = copy.deepcopy(record)

    result = migrator.migrate(record, "1.0")

    assert not result.ok
    assert result.steps == []
    assert result.error_code == ErrorCode.NO_MIGRATION_PATH
    assert "1.3" in result.error and "1.0" in result.error
    assert record == snapshot


@pytest.mark.unit
def test_migrate_failing_step_reports_trail(migrator):
    """Test a raising transform stops migration and names the failing edge."""

    def explode(record):
        raise ValueError("bad data")

    migrator = ResumeMigrator(
        [
            MigrationStep("1.0", "1.1", _tag("1.1"), "add a"),
            MigrationStep("1.1", "1.2", explode, "breaks"),
        ]
    )
    record = {"schema_version": "1.0"}
    result = migrator.migrate(record, "1.2")

    assert not result.ok
    assert result.data is None
    assert result.steps == ["1.0 → 1.1: add a"]
    assert result.failed_step == "1.1 → 1.2: breaks"
    assert result.error_code == ErrorCode.MIGRATION_FAILED
    assert "bad data" in result.error
    assert record == {"schema_version": "1.0"}


@pytest.mark.unit
def test_migrate_non_mapping_result_is_failure():
    """Test a transform returning a non-mapping fails the migration."""
    migrator = ResumeMigrator([MigrationStep("1.0", "1.1", lambda record: None, "broken")])
    result = migrator.migrate({"schema_version": "1.0"}, "1.1")
    assert not result.ok
    assert result.error_code == ErrorCode.MIGRATION_FAILED


@pytest.mark.unit
def test_migrate_overwrites_forgotten_marker():
    """Test the final marker is the target even if the transform ignored it."""
    migrator = ResumeMigrator([MigrationStep("1.0", "1.1", lambda record: dict(record), "noop")])
    result = migrator.migrate({"schema_version": "1.0"}, "1.1")
    assert result.data["schema_version"] == "1.1"


@pytest.mark.unit
def test_find_path_terminates_on_cycles():
    """Test BFS terminates on cyclic graphs with no route to the target."""
    migrator = ResumeMigrator(
        [
            MigrationStep("a", "b", _tag("b")),
            MigrationStep("b", "a", _tag("a")),
            MigrationStep("b", "c", _tag("c")),
        ]
    )
    assert migrator.find_path("a", "z") is None
    assert [step.to_version for step in migrator.find_path("a", "c")] == ["b", "c"]
    assert migrator.find_path("a", "a") == []


@pytest.mark.unit
def test_find_path_prefers_registration_order_on_ties():
    """Test equally short paths resolve to the earliest registered edge."""
    migrator = ResumeMigrator(
        [
            MigrationStep("1", "2a", _tag("2a"), "first"),
            MigrationStep("1", "2b", _tag("2b"), "second"),
            MigrationStep("2b", "3", _tag("3"), "via b"),
            MigrationStep("2a", "3", _tag("3"), "via a"),
        ]
    )
    path = migrator.find_path("1", "3")
    assert [step.description for step in path] == ["first", "via a"]


@pytest.mark.unit
def test_can_migrate_and_listing(migrator):
    """Test reachability queries and step listing."""
    assert migrator.can_migrate("1.0", "1.3")
    assert migrator.can_migrate("1.1", "1.1")
    assert not migrator.can_migrate("2.0", "1.0")
    assert migrator.get_available_migrations("1.0") == ["1.1", "2.0"]
    assert len(migrator.list_migrations()) == 4


@pytest.mark.unit
def test_add_migration_at_runtime(migrator):
    """Test runtime registration opens new paths."""
    assert not migrator.can_migrate("2.0", "3.0")
    migrator.add_migration(MigrationStep("2.0", "3.0", _tag("3.0"), "next"))
    result = migrator.migrate({"schema_version": "1.0"}, "3.0")
    assert result.ok
    assert len(result.steps) == 2


@pytest.mark.unit
def test_legacy_to_namespaced(legacy_resume):
    """Test the built-in legacy conversion."""
    converted = legacy_to_namespaced(legacy_resume)

    assert converted["specVersion"] == "0.1.0"
    assert converted["meta"] == {"language": "en", "country": "US", "source": "legacy-migration"}
    basics = converted["resume"]["basics"]
    assert basics["firstName"] == "Jane"
    assert basics["email"] == "jane.doe@example.com"
    assert basics["summary"] == "Resume for Jane Doe"

    experience = converted["resume"]["experience"]
    assert experience[0] == {
        "position": "Software Engineer",
        "company": "Acme Corp",
        "startDate": "2015-06",
        "endDate": "2019-08",
        "summary": "Built billing services",
    }
    assert "endDate" not in experience[1]
    assert converted["resume"]["education"][0]["studyType"] == "BSc"
    assert converted["resume"]["education"][0]["area"] == "Computer Science"
    assert converted["resume"]["skills"]["technical"] == [
        {"name": "Python", "level": "expert"},
        {"name": "SQL", "level": "intermediate"},
    ]


@pytest.mark.unit
def test_default_migrator_upgrades_legacy(legacy_resume):
    """Test the default migrator carries legacy records to the current version."""
    result = migrate_resume(legacy_resume)

    assert result.ok
    assert result.from_version == "1.0.0"
    assert result.to_version == "0.1.0"
    assert result.data["specVersion"] == "0.1.0"
    assert "schema_version" not in result.data
    assert legacy_resume["schema_version"] == "1.0.0"


@pytest.mark.unit
def test_get_version_compatibility():
    """Test support and upgrade information."""
    assert get_version_compatibility("1.0.0") == {
        "is_supported": True,
        "can_migrate_to_latest": True,
        "latest_version": "0.1.0",
    }
    info = get_version_compatibility("7.0.0")
    assert not info["is_supported"]
    assert not info["can_migrate_to_latest"]
