"""
Migration Context

Responsibilities:
- Keeps the graph of version-to-version migration steps
- Finds the shortest step sequence between two versions
- Applies steps to a copy of a record and reports the trail

Owns: Migration steps, the built-in catalogue, the default migrator
Never: Validates records or performs I/O
"""

from vitae.contexts.migration.catalogue import BUILTIN_MIGRATIONS, legacy_to_namespaced
from vitae.contexts.migration.graph import (
    MigrationResult,
    MigrationStep,
    ResumeMigrator,
    add_migration_step,
    can_migrate_resume,
    get_default_migrator,
    get_version_compatibility,
    migrate_resume,
)

__all__ = [
    "BUILTIN_MIGRATIONS",
    "MigrationResult",
    "MigrationStep",
    "ResumeMigrator",
    "add_migration_step",
    "can_migrate_resume",
    "get_default_migrator",
    "get_version_compatibility",
    "legacy_to_namespaced",
    "migrate_resume",
]
