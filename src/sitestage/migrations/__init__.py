"""Document migrations."""

from sitestage.migrations.generator import GeneratorMigrator, NoopMigrator

__all__ = ["GeneratorMigrator", "NoopMigrator"]
