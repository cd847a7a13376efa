##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
SQLite store implementations for smpstore data models.

Each store is bound to a specific model and SQLite table, providing the
store operations and automated table creation.

See also:
    - smpstore.backends.sqlite.sqlite_store_base: Base classes
    - smpstore.db_scripts.data_models: Data model definitions
"""

from smpstore.backends.sqlite.sqlite_store_base import SQLitePartitionedStoreBase, SQLiteStoreBase
from smpstore.db_scripts.data_models import BusinessCardEntityModel, ParticipantMigrationModel


class SQLiteBusinessCardStore(SQLitePartitionedStoreBase[BusinessCardEntityModel]):
    """
    A SQLite-based store for managing
    [`BusinessCardEntityModel`][db_scripts.data_models.BusinessCardEntityModel]
    rows, partitioned by participant.
    """

    def __init__(self, db_path: str):
        """
        Initialize the `SQLiteBusinessCardStore`.

        Args:
            db_path: Path of the SQLite database file.
        """
        super().__init__(db_path, "business_card_entity", BusinessCardEntityModel, partition_column="participant_id")


class SQLiteParticipantMigrationStore(SQLiteStoreBase[ParticipantMigrationModel]):
    """
    A SQLite-based store for managing
    [`ParticipantMigrationModel`][db_scripts.data_models.ParticipantMigrationModel] rows.
    """

    def __init__(self, db_path: str):
        """
        Initialize the `SQLiteParticipantMigrationStore`.

        Args:
            db_path: Path of the SQLite database file.
        """
        super().__init__(
            db_path,
            "participant_migration",
            ParticipantMigrationModel,
            indexes=[("direction", "participant_id")],
        )
