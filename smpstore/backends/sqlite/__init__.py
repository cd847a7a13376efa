##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
SQLite implementation of the smpstore storage backend.

Modules:
    sqlite_backend: The `SQLiteBackend` class.
    sqlite_connection: Connection context manager and transaction helper.
    sqlite_store_base: Generic table-backed store classes.
    sqlite_stores: Concrete stores for business cards and participant migrations.
"""
