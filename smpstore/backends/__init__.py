##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Backend infrastructure for smpstore.

The `backends` package provides a unified interface and implementations for persisting
and retrieving business card entities and participant migrations across storage
technologies. It defines an abstract backend interface (`StorageBackend`) along with
concrete implementations using SQLite and Redis, store abstractions, serialization
utilities, and a backend factory.

Subpackages:
    redis: Redis-based backend implementation where every record is a hash.
    sqlite: SQLite-based backend implementation with transactional replacement.

Modules:
    backend_factory: Contains `SMPBackendFactory`, used to select and instantiate a backend.
    filter_support_mixin: Adds filtered retrieval to backends that can filter natively.
    storage_backend: Defines the abstract `StorageBackend` base class.
    store_base: Provides the abstract `StoreBase` and `PartitionedStoreBase` store contracts.
    utils: Helpers for serializing data models to and from flat string maps.
"""
