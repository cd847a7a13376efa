##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Module for managing participant migrations within the smpstore database.

This module defines the `ParticipantMigrationManager` class. Migrations are
created once, move between workflow states through `set_state`, and are never
deleted. States are opaque strings: which of them count as "in progress" and
which one a new migration starts in are configurable.
"""

import logging
from typing import Iterable, List, Optional, Set

from smpstore.audit import OBJECT_TYPE_PARTICIPANT_MIGRATION, AuditSink
from smpstore.backends.storage_backend import PARTICIPANT_MIGRATION_STORE, StorageBackend
from smpstore.common.callbacks import ExceptionCallbacks
from smpstore.common.enums import AuditResult, Change, MigrationDirection, MigrationState, state_id
from smpstore.db_scripts.data_models import ParticipantMigrationModel
from smpstore.db_scripts.entity_managers.entity_manager import EntityManager
from smpstore.domain.identifiers import ParticipantIdentifier
from smpstore.domain.participant_migration import ParticipantMigration
from smpstore.exceptions import ParticipantMigrationNotFoundError


LOG = logging.getLogger("smpstore")

NO_SUCH_ID = "no-such-id"
PERSISTENCE_ERROR = "persistence-error"
MIGRATION_STATE_FIELD = "migration-state"


class ParticipantMigrationManager(EntityManager):
    """
    Manager for participant migrations.

    Attributes:
        backend: The database backend used for storing migrations.
        in_progress_states (Set[str]): States in which a migration counts as in progress.
        initial_state (str): State of newly created migrations.

    Methods:
        create_outbound_migration: Create a migration of a participant away from this SMP.
        create_inbound_migration: Create a migration of a participant onto this SMP.
        set_state: Move a migration into another state.
        get_by_id: Retrieve a migration by id.
        list_outbound: List outbound migrations, optionally in one state.
        list_inbound: List inbound migrations, optionally in one state.
        contains_outbound_in_progress: Check for an in-progress outbound migration of a participant.
        contains_inbound_in_progress: Check for an in-progress inbound migration of a participant.
    """

    _entity_type = PARTICIPANT_MIGRATION_STORE
    _filter_accessor_map = {
        "direction": lambda model: model.direction,
        "state": lambda model: model.state,
        "participant_id": lambda model: model.participant_id,
    }

    def __init__(  # pylint: disable=too-many-arguments
        self,
        backend: StorageBackend,
        audit_sink: AuditSink = None,
        exception_callbacks: ExceptionCallbacks = None,
        in_progress_states: Iterable[str] = None,
        initial_state: str = None,
    ):
        """
        Initialize the ParticipantMigrationManager.

        Args:
            backend: The backend interface used to persist and retrieve migrations.
            audit_sink: Receiver of audit events.
            exception_callbacks: Callbacks told about persistence failures.
            in_progress_states: States in which a migration counts as in progress.
                Defaults to `MigrationState.IN_PROGRESS` only.
            initial_state: State of new migrations. Defaults to `MigrationState.IN_PROGRESS`.
        """
        super().__init__(backend, audit_sink=audit_sink, exception_callbacks=exception_callbacks)
        if in_progress_states is None:
            in_progress_states = [MigrationState.IN_PROGRESS]
        self.in_progress_states: Set[str] = {state_id(state) for state in in_progress_states}
        self.initial_state: str = state_id(initial_state or MigrationState.IN_PROGRESS)

    @staticmethod
    def _to_model(migration: ParticipantMigration) -> ParticipantMigrationModel:
        return ParticipantMigrationModel(
            id=migration.id,
            direction=state_id(migration.direction),
            state=migration.state,
            participant_id=migration.participant_identifier.uri_encoded,
            initiation_date_time=migration.initiation_date_time,
            migration_key=migration.migration_key,
        )

    @staticmethod
    def _to_migration(model: ParticipantMigrationModel) -> ParticipantMigration:
        return ParticipantMigration(
            id=model.id,
            direction=MigrationDirection(model.direction),
            state=model.state,
            participant_identifier=ParticipantIdentifier.from_uri_encoded(model.participant_id),
            initiation_date_time=model.initiation_date_time,
            migration_key=model.migration_key,
        )

    def _create_migration(
        self, direction: MigrationDirection, participant_identifier: ParticipantIdentifier, migration_key: str
    ) -> Optional[ParticipantMigration]:
        if participant_identifier is None:
            raise ValueError("A participant identifier is required to create a migration.")
        if not migration_key or not migration_key.strip():
            raise ValueError("A migration key is required to create a migration.")

        if direction is MigrationDirection.OUTBOUND:
            migration = ParticipantMigration.create_outbound(participant_identifier, migration_key, self.initial_state)
        else:
            migration = ParticipantMigration.create_inbound(participant_identifier, migration_key, self.initial_state)

        try:
            self.store.save(self._to_model(migration))
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"create the {direction.value} migration of '{participant_identifier}'")
            self.audit_sink.on_create(
                AuditResult.FAILURE,
                OBJECT_TYPE_PARTICIPANT_MIGRATION,
                migration.id,
                direction,
                participant_identifier.uri_encoded,
                migration_key,
            )
            return None

        self.audit_sink.on_create(
            AuditResult.SUCCESS,
            OBJECT_TYPE_PARTICIPANT_MIGRATION,
            migration.id,
            direction,
            participant_identifier.uri_encoded,
            migration.initiation_date_time,
            migration_key,
        )
        LOG.info(f"Created {direction.value} migration '{migration.id}' of '{participant_identifier}'.")
        return migration

    def create_outbound_migration(
        self, participant_identifier: ParticipantIdentifier, migration_key: str
    ) -> Optional[ParticipantMigration]:
        """
        Create and persist a migration of a participant away from this SMP.

        Args:
            participant_identifier: The participant to migrate.
            migration_key: The migration key handed to the receiving SMP.

        Returns:
            The created migration, or None if the storage operation failed.

        Raises:
            ValueError: If the participant is None or the key is blank.
        """
        return self._create_migration(MigrationDirection.OUTBOUND, participant_identifier, migration_key)

    def create_inbound_migration(
        self, participant_identifier: ParticipantIdentifier, migration_key: str
    ) -> Optional[ParticipantMigration]:
        """
        Create and persist a migration of a participant onto this SMP.

        Args:
            participant_identifier: The participant to migrate.
            migration_key: The migration key received from the other SMP.

        Returns:
            The created migration, or None if the storage operation failed.

        Raises:
            ValueError: If the participant is None or the key is blank.
        """
        return self._create_migration(MigrationDirection.INBOUND, participant_identifier, migration_key)

    def set_state(self, migration_id: str, new_state: str) -> Change:
        """
        Move a migration into another state.

        Setting the state a migration already has changes nothing and emits no
        audit event, so repeating a call is harmless.

        Args:
            migration_id: The id of the migration.
            new_state: The new state (a string or `MigrationState`).

        Returns:
            `Change.CHANGED` if the state was written, `Change.UNCHANGED` otherwise,
                including for a blank `migration_id`.

        Raises:
            ValueError: If `new_state` is None.
        """
        if new_state is None:
            raise ValueError("A new state is required to change a migration.")
        if not migration_id or not migration_id.strip():
            return Change.UNCHANGED

        new_state_id = state_id(new_state)
        try:
            changed = self.store.update_field(migration_id, "state", new_state_id)
        except ParticipantMigrationNotFoundError:
            LOG.warning(f"Cannot set the state of migration '{migration_id}': it does not exist.")
            self.audit_sink.on_modify(AuditResult.FAILURE, OBJECT_TYPE_PARTICIPANT_MIGRATION, migration_id, NO_SUCH_ID)
            return Change.UNCHANGED
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"set the state of migration '{migration_id}'")
            self.audit_sink.on_modify(
                AuditResult.FAILURE, OBJECT_TYPE_PARTICIPANT_MIGRATION, migration_id, PERSISTENCE_ERROR
            )
            return Change.UNCHANGED

        if not changed:
            return Change.UNCHANGED

        self.audit_sink.on_modify(
            AuditResult.SUCCESS, OBJECT_TYPE_PARTICIPANT_MIGRATION, migration_id, MIGRATION_STATE_FIELD, new_state_id
        )
        LOG.info(f"Migration '{migration_id}' is now in state '{new_state_id}'.")
        return Change.CHANGED

    def get_by_id(self, migration_id: Optional[str]) -> Optional[ParticipantMigration]:
        """
        Retrieve a migration by id.

        Args:
            migration_id: The id of the migration.

        Returns:
            The migration, or None if the id is blank, unknown, or the storage operation failed.
        """
        if not migration_id or not migration_id.strip():
            return None

        try:
            model = self.store.retrieve(migration_id)
            return self._to_migration(model) if model else None
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"retrieve migration '{migration_id}'")
            return None

    def _list(self, direction: MigrationDirection, state: Optional[str]) -> Optional[List[ParticipantMigration]]:
        filters = {"direction": direction.value}
        if state is not None:
            filters["state"] = state_id(state)

        try:
            return [self._to_migration(model) for model in self._retrieve_all_models(filters)]
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"list {direction.value} migrations")
            return None

    def list_outbound(self, state: Optional[str] = None) -> Optional[List[ParticipantMigration]]:
        """
        List outbound migrations.

        Args:
            state: Only list migrations in this state. None lists all of them.

        Returns:
            The migrations, or None if the storage operation failed.
        """
        return self._list(MigrationDirection.OUTBOUND, state)

    def list_inbound(self, state: Optional[str] = None) -> Optional[List[ParticipantMigration]]:
        """
        List inbound migrations.

        Args:
            state: Only list migrations in this state. None lists all of them.

        Returns:
            The migrations, or None if the storage operation failed.
        """
        return self._list(MigrationDirection.INBOUND, state)

    def _contains_in_progress(
        self, direction: MigrationDirection, participant_identifier: Optional[ParticipantIdentifier]
    ) -> bool:
        if participant_identifier is None:
            return False

        filters = {
            "direction": direction.value,
            "participant_id": participant_identifier.uri_encoded,
            "state": sorted(self.in_progress_states),
        }
        try:
            return bool(self._retrieve_all_models(filters))
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"look up {direction.value} migrations of '{participant_identifier}'")
            return False

    def contains_outbound_in_progress(self, participant_identifier: Optional[ParticipantIdentifier]) -> bool:
        """
        Check whether an outbound migration of a participant is in progress.

        Args:
            participant_identifier: The participant to check. None yields False.

        Returns:
            True if an outbound migration of the participant is in an in-progress state.
        """
        return self._contains_in_progress(MigrationDirection.OUTBOUND, participant_identifier)

    def contains_inbound_in_progress(self, participant_identifier: Optional[ParticipantIdentifier]) -> bool:
        """
        Check whether an inbound migration of a participant is in progress.

        Args:
            participant_identifier: The participant to check. None yields False.

        Returns:
            True if an inbound migration of the participant is in an in-progress state.
        """
        return self._contains_in_progress(MigrationDirection.INBOUND, participant_identifier)
