##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Abstract base class for storage backends in smpstore.

This module defines `StorageBackend`, an abstract base class that specifies
the interface for backend implementations responsible for persisting and
retrieving smpstore data models.

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `RedisBackend` or `SQLiteBackend`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Union

from smpstore.backends.store_base import PartitionedStoreBase, StoreBase


LOG = logging.getLogger(__name__)

BUSINESS_CARD_STORE = "business_card"
PARTICIPANT_MIGRATION_STORE = "participant_migration"

AnyStore = Union[StoreBase, PartitionedStoreBase]


class StorageBackend(ABC):
    """
    Abstract base class for a storage backend.

    Attributes:
        backend_name (str): The name of the backend (e.g., "redis", "sqlite").
        stores (Dict[str, AnyStore]): The stores of this backend, keyed by
            `BUSINESS_CARD_STORE` and `PARTICIPANT_MIGRATION_STORE`.

    Methods:
        get_name:
            Retrieve the name of the backend.

        get_version:
            Query the backend for the current version.

        get_connection_string:
            Retrieve the connection string used to connect to the backend.

        flush_database:
            Remove every smpstore record from the database.

        get_store:
            Retrieve one of the stores of this backend by type.
    """

    def __init__(self, backend_name: str, stores: Dict[str, AnyStore]):
        """
        Initialize the `StorageBackend` instance.

        Args:
            backend_name: The name of the backend (e.g., "redis").
            stores: The stores of this backend.
        """
        self.backend_name: str = backend_name
        self.stores: Dict[str, AnyStore] = stores

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. redis).
        """
        return self.backend_name

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `StorageBackend` must implement a `get_version` method.")

    @abstractmethod
    def get_connection_string(self, include_password: bool = False) -> str:
        """
        Get the connection string used by this backend.

        Args:
            include_password: Whether a password in the connection string should be shown.

        Returns:
            A string representing the connection to the backend.
        """
        raise NotImplementedError("Subclasses of `StorageBackend` must implement a `get_connection_string` method.")

    def flush_database(self):
        """
        Remove every smpstore record from the database.
        """
        LOG.info(f"Flushing every smpstore record from the {self.backend_name} backend...")
        for store in self.stores.values():
            store.clear()

    def get_store(self, store_type: str) -> AnyStore:
        """
        Get the appropriate store based on the store type.

        Args:
            store_type: The type of store.

        Returns:
            The corresponding store.

        Raises:
            ValueError: If the `store_type` is invalid.
        """
        if store_type not in self.stores:
            raise ValueError(f"Invalid store type '{store_type}'.")
        return self.stores[store_type]
