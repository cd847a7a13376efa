##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
SQLite backend implementation for smpstore.

This module defines the `SQLiteBackend` class, which provides a concrete
implementation of the `StorageBackend` interface using a local SQLite
database file. Business card partitions are replaced inside one transaction
and migration states are changed with a single conditional UPDATE. Through
`FilterSupportMixin` it also supports filtering inside SQL.
"""

import logging
import os

from smpstore.backends.filter_support_mixin import FilterSupportMixin
from smpstore.backends.sqlite.sqlite_connection import SQLiteConnection
from smpstore.backends.sqlite.sqlite_stores import SQLiteBusinessCardStore, SQLiteParticipantMigrationStore
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, PARTICIPANT_MIGRATION_STORE, StorageBackend


LOG = logging.getLogger(__name__)


class SQLiteBackend(StorageBackend, FilterSupportMixin):
    """
    A SQLite-based implementation of the `StorageBackend` interface.

    Attributes:
        backend_name (str): The name of the backend ("sqlite").
        db_path (str): Path of the SQLite database file.

    Methods:
        get_version:
            Query SQLite for the current version.

        get_connection_string:
            Retrieve the path of the database file.

        flush_database:
            Remove every row of the smpstore tables.

        retrieve_all_filtered:
            Retrieve all records from the specified store, applying filters.
    """

    def __init__(self, path: str):
        """
        Initialize the `SQLiteBackend` instance, setting up the store mappings and tables.

        Args:
            path: Path of the SQLite database file; `~` is expanded.
        """
        self.db_path: str = os.path.expanduser(path)
        stores = {
            BUSINESS_CARD_STORE: SQLiteBusinessCardStore(self.db_path),
            PARTICIPANT_MIGRATION_STORE: SQLiteParticipantMigrationStore(self.db_path),
        }

        super().__init__("sqlite", stores)

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        with SQLiteConnection(self.db_path) as conn:
            cursor = conn.execute("SELECT sqlite_version()")
            return cursor.fetchone()[0]

    def get_connection_string(self, include_password: bool = False) -> str:
        """
        Get the path of the database file. SQLite has no password.

        Args:
            include_password: Ignored.

        Returns:
            The database path.
        """
        return self.db_path
