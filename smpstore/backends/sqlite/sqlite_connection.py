##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
SQLite connection context manager for smpstore.

This module defines the `SQLiteConnection` class, which provides a safe and reusable way to
establish and manage SQLite connections using a context manager, and the `transaction`
helper used for operations that have to modify several rows atomically.
"""

import logging
import sqlite3
import sys
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Iterator, Type


LOG = logging.getLogger(__name__)


class SQLiteConnection:
    """
    Context manager for establishing and safely closing a SQLite database connection.

    This class ensures SQLite connections are created with proper configuration, including:
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Dictionary-style row access via `sqlite3.Row`
    - Autocommit, so statements outside `transaction` are committed immediately

    Attributes:
        db_path (str): Path of the database file.
        conn (sqlite3.Connection): The active SQLite connection used within the context.
    """

    def __init__(self, db_path: str):
        """
        Initialize the SQLiteConnection context manager.

        Args:
            db_path: Path of the database file. Parent directories are created on connect.
        """
        self.db_path: str = db_path
        self.conn: sqlite3.Connection = None

    def __enter__(self) -> sqlite3.Connection:
        """
        Enters the runtime context related to this object and creates a sqlite connection.

        Returns:
            A sqlite connection.
        """
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        self.conn = sqlite3.connect(self.db_path, **connection_kwargs)

        # Enable WAL mode for better concurrent access
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")

        # This enables name-based access to columns
        self.conn.row_factory = sqlite3.Row

        return self.conn

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Exits the runtime context and closes the connection if it's still open.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
        if self.conn:
            self.conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Run the statements of the `with` block in one write transaction.

    The write lock is taken up front (`BEGIN IMMEDIATE`) so the block cannot
    fail halfway because another writer got in first. The transaction is
    committed when the block exits normally and rolled back otherwise.

    Args:
        conn: An autocommit connection from `SQLiteConnection`.

    Yields:
        The same connection.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        LOG.debug("Rolling back SQLite transaction.")
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
