##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module contains the functionality necessary to interact with everything
stored in the smpstore database.

An `SMPDatabase` is built once, from an explicit backend or from a loaded
configuration, and passed to whoever needs the managers.
"""

import logging
from typing import Dict, Iterable, Optional

from smpstore.audit import AuditSink
from smpstore.backends.backend_factory import backend_factory
from smpstore.backends.storage_backend import StorageBackend
from smpstore.common.callbacks import ExceptionCallback, ExceptionCallbacks
from smpstore.config import Config
from smpstore.config.storage import get_backend_settings
from smpstore.db_scripts.entity_managers.business_card_manager import BusinessCardManager
from smpstore.db_scripts.entity_managers.participant_migration_manager import ParticipantMigrationManager
from smpstore.domain.identifiers import IdentifierFactory, SimpleIdentifierFactory
from smpstore.domain.service_group import ImplicitServiceGroupManager, ServiceGroupManager
from smpstore.utils import get_yaml_var


LOG = logging.getLogger("smpstore")


class SMPDatabase:
    """
    High-level interface for accessing the smpstore managers.

    Both managers share one backend and one `ExceptionCallbacks` registry, so a
    callback added here hears about failures of either manager.

    Attributes:
        backend (StorageBackend): The storage backend.
        exception_callbacks (ExceptionCallbacks): Callbacks told about persistence failures.
        business_cards (BusinessCardManager): The business card manager.
        participant_migrations (ParticipantMigrationManager): The participant migration manager.

    Methods:
        from_config: Build an `SMPDatabase` from a loaded configuration.
        add_exception_callback: Register a callback with both managers.
        get_db_type: Retrieve the name of the backend being used.
        get_db_version: Retrieve the version of the backend.
        get_connection_string: Retrieve the backend connection string.
        info: Summarize the backend and the stored records.
        delete_everything: Remove every smpstore record from the backend.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        backend: StorageBackend,
        service_group_manager: ServiceGroupManager = None,
        identifier_factory: IdentifierFactory = None,
        audit_sink: AuditSink = None,
        exception_callbacks: Iterable[ExceptionCallback] = None,
        in_progress_states: Iterable[str] = None,
        initial_state: str = None,
    ):
        """
        Initialize a new SMPDatabase instance.

        Args:
            backend: The storage backend.
            service_group_manager: Resolves service groups. Defaults to an
                `ImplicitServiceGroupManager`.
            identifier_factory: Parses raw participant identifiers. Defaults to a
                `SimpleIdentifierFactory`.
            audit_sink: Receiver of audit events. Defaults to a `LoggingAuditSink`.
            exception_callbacks: Callbacks told about persistence failures.
            in_progress_states: States in which a migration counts as in progress.
            initial_state: State of newly created migrations.
        """
        self.backend: StorageBackend = backend
        self.exception_callbacks: ExceptionCallbacks = ExceptionCallbacks(exception_callbacks)
        self.business_cards: BusinessCardManager = BusinessCardManager(
            backend,
            service_group_manager or ImplicitServiceGroupManager(),
            identifier_factory or SimpleIdentifierFactory(),
            audit_sink=audit_sink,
            exception_callbacks=self.exception_callbacks,
        )
        self.participant_migrations: ParticipantMigrationManager = ParticipantMigrationManager(
            backend,
            audit_sink=audit_sink,
            exception_callbacks=self.exception_callbacks,
            in_progress_states=in_progress_states,
            initial_state=initial_state,
        )

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "SMPDatabase":
        """
        Build an `SMPDatabase` from a loaded configuration.

        Args:
            config: The smpstore configuration.
            **kwargs: Extra keyword arguments for the `SMPDatabase` constructor.

        Returns:
            A new `SMPDatabase` on the configured backend.
        """
        backend_name, backend_kwargs = get_backend_settings(config)
        backend = backend_factory.create(backend_name, backend_kwargs)
        LOG.debug(f"Created the {backend.get_name()} storage backend.")

        if config.migrations is not None:
            kwargs.setdefault("in_progress_states", get_yaml_var(config.migrations, "in_progress_states", None))
            kwargs.setdefault("initial_state", get_yaml_var(config.migrations, "initial_state", None))

        return cls(backend, **kwargs)

    def add_exception_callback(self, callback: ExceptionCallback):
        """
        Register a callback that is told about every persistence failure.

        Args:
            callback: A callable taking the exception.
        """
        self.exception_callbacks.add(callback)

    def get_db_type(self) -> str:
        """
        Retrieve the type of backend.

        Returns:
            The type of backend (e.g. redis, sqlite).
        """
        return self.backend.get_name()

    def get_db_version(self) -> str:
        """
        Get the version of the backend.

        Returns:
            The version number of the backend.
        """
        return self.backend.get_version()

    def get_connection_string(self) -> str:
        """
        Get the connection string to the backend, without its password.

        Returns:
            The connection string to the backend.
        """
        return self.backend.get_connection_string(include_password=False)

    def info(self) -> Dict[str, object]:
        """
        Summarize the backend and the records stored in it.

        Returns:
            A dictionary with the backend type, version and connection string, the
                number of business cards, and the number of migrations per direction.
                A count is None if it could not be read.
        """
        outbound = self.participant_migrations.list_outbound()
        inbound = self.participant_migrations.list_inbound()
        return {
            "Database Type": self.get_db_type(),
            "Database Version": self.get_db_version(),
            "Connection String": self.get_connection_string(),
            "Business Cards": self.business_cards.count(),
            "Outbound Migrations": None if outbound is None else len(outbound),
            "Inbound Migrations": None if inbound is None else len(inbound),
        }

    def delete_everything(self, force: bool = False) -> bool:
        """
        Remove every smpstore record from the backend.

        Args:
            force: If False the user is asked for confirmation first.

        Returns:
            True if the database was flushed, False if the user cancelled.
        """
        flush_database = False
        if force:
            flush_database = True
        else:
            # Ask the user for confirmation
            valid_inputs = ["y", "n"]
            user_input = input("Are you sure you want to flush the entire database? (y/n): ").strip().lower()
            while user_input not in valid_inputs:
                user_input = input("Invalid input. Use 'y' for 'yes' or 'n' for 'no': ").strip().lower()

            if user_input == "y":
                flush_database = True

        if flush_database:
            LOG.info("Flushing the database...")
            self.backend.flush_database()
            LOG.info("Database successfully flushed.")
        else:
            LOG.info("Database flush cancelled.")
        return flush_database
