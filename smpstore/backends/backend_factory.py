##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Backend factory for selecting and instantiating storage backends in smpstore.

This module defines the `SMPBackendFactory` class, which maintains mappings of
backend names and aliases and raises a clear error if an unsupported backend is
requested.
"""

from typing import Any

from smpstore.abstracts import SMPBaseFactory
from smpstore.backends.redis.redis_backend import RedisBackend
from smpstore.backends.sqlite.sqlite_backend import SQLiteBackend
from smpstore.backends.storage_backend import StorageBackend
from smpstore.exceptions import BackendNotSupportedError


class SMPBackendFactory(SMPBaseFactory):
    """
    Factory class for managing and instantiating supported smpstore backends.

    Attributes:
        _registry (Dict[str, StorageBackend]): Maps canonical backend names to backend classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical backend names.

    Methods:
        register: Register a new backend class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a backend class by name or alias.
    """

    def _register_builtins(self):
        """
        Register built-in backend implementations.
        """
        self.register("redis", RedisBackend, aliases=["rediss"])
        self.register("sqlite", SQLiteBackend, aliases=["sqlite3"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of StorageBackend.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass StorageBackend.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, StorageBackend):
            raise TypeError(f"{component_class} must inherit from StorageBackend")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering backend plugins.

        Returns:
            The entry point namespace for smpstore backend plugins.
        """
        return "smpstore.backends"

    def _raise_component_error_class(self, msg: str):
        """
        Raise an appropriate exception for unsupported components.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            BackendNotSupportedError: Always.
        """
        raise BackendNotSupportedError(msg)


backend_factory = SMPBackendFactory()
