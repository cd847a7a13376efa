##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Tests for the `sqlite_backend.py` module.
"""

import os

from smpstore.backends.filter_support_mixin import FilterSupportMixin
from smpstore.backends.sqlite.sqlite_backend import SQLiteBackend
from smpstore.backends.sqlite.sqlite_stores import SQLiteBusinessCardStore, SQLiteParticipantMigrationStore
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, PARTICIPANT_MIGRATION_STORE
from smpstore.db_scripts.data_models import BusinessCardEntityModel, ParticipantMigrationModel
from tests.fixture_types import FixtureStr


class TestSQLiteBackend:
    """Tests for the `SQLiteBackend` class."""

    def test_init_creates_database_and_stores(self, sqlite_backend: SQLiteBackend, sqlite_db_path: FixtureStr):
        """
        Test that both stores exist and the database file was created.

        Args:
            sqlite_backend: A SQLite backend on a temporary file.
            sqlite_db_path: Path of the database file.
        """
        assert sqlite_backend.get_name() == "sqlite"
        assert isinstance(sqlite_backend, FilterSupportMixin)
        assert isinstance(sqlite_backend.get_store(BUSINESS_CARD_STORE), SQLiteBusinessCardStore)
        assert isinstance(sqlite_backend.get_store(PARTICIPANT_MIGRATION_STORE), SQLiteParticipantMigrationStore)
        assert os.path.isfile(sqlite_db_path)

    def test_path_is_expanded(self, monkeypatch, tmp_path):
        """
        Test that `~` in the database path is expanded.

        Args:
            monkeypatch: Pytest's monkeypatch fixture.
            tmp_path: Pytest's temporary directory fixture.
        """
        monkeypatch.setenv("HOME", str(tmp_path))
        backend = SQLiteBackend("~/store/smpstore.db")
        assert backend.get_connection_string() == os.path.join(str(tmp_path), "store", "smpstore.db")

    def test_get_version(self, sqlite_backend: SQLiteBackend):
        """
        Test that the SQLite library version is reported.

        Args:
            sqlite_backend: A SQLite backend on a temporary file.
        """
        assert sqlite_backend.get_version().count(".") >= 2

    def test_connection_string_is_the_path(self, sqlite_backend: SQLiteBackend, sqlite_db_path: FixtureStr):
        """
        Test that the connection string is the database path, with or without password.

        Args:
            sqlite_backend: A SQLite backend on a temporary file.
            sqlite_db_path: Path of the database file.
        """
        assert sqlite_backend.get_connection_string() == sqlite_db_path
        assert sqlite_backend.get_connection_string(include_password=True) == sqlite_db_path

    def test_flush_database(self, sqlite_backend: SQLiteBackend):
        """
        Test that flushing removes the rows of both tables.

        Args:
            sqlite_backend: A SQLite backend on a temporary file.
        """
        sqlite_backend.get_store(BUSINESS_CARD_STORE).replace_partition("s::p", [BusinessCardEntityModel(id="E1")])
        sqlite_backend.get_store(PARTICIPANT_MIGRATION_STORE).save(ParticipantMigrationModel(id="m1", state="x"))

        sqlite_backend.flush_database()

        assert sqlite_backend.get_store(BUSINESS_CARD_STORE).count_partitions() == 0
        assert sqlite_backend.get_store(PARTICIPANT_MIGRATION_STORE).retrieve_all() == []
