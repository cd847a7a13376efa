##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Records tracking the move of a participant from one SMP to another.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime

from smpstore.common.enums import MigrationDirection, state_id
from smpstore.domain.identifiers import ParticipantIdentifier


@dataclass(frozen=True)
class ParticipantMigration:
    """
    An immutable participant migration record.

    State changes produce a new record through `with_state`; the id, direction,
    participant, initiation time, and migration key never change.

    Attributes:
        id: Unique id of the migration (UUID4 string).
        direction: Whether the participant leaves (outbound) or arrives (inbound).
        state: Workflow state id.
        participant_identifier: The participant being migrated.
        initiation_date_time: When the migration was created.
        migration_key: The secret shared between the two SMPs.
    """

    id: str  # pylint: disable=invalid-name
    direction: MigrationDirection
    state: str
    participant_identifier: ParticipantIdentifier
    initiation_date_time: datetime
    migration_key: str

    @classmethod
    def _create(
        cls,
        direction: MigrationDirection,
        participant_identifier: ParticipantIdentifier,
        migration_key: str,
        state: str,
    ) -> "ParticipantMigration":
        return cls(
            id=str(uuid.uuid4()),
            direction=direction,
            state=state_id(state),
            participant_identifier=participant_identifier,
            initiation_date_time=datetime.now(),
            migration_key=migration_key,
        )

    @classmethod
    def create_outbound(
        cls, participant_identifier: ParticipantIdentifier, migration_key: str, state: str
    ) -> "ParticipantMigration":
        """
        Create a new outbound migration with a fresh id and the current time.

        Args:
            participant_identifier: The participant leaving this SMP.
            migration_key: The migration key.
            state: The initial state.

        Returns:
            The new record.
        """
        return cls._create(MigrationDirection.OUTBOUND, participant_identifier, migration_key, state)

    @classmethod
    def create_inbound(
        cls, participant_identifier: ParticipantIdentifier, migration_key: str, state: str
    ) -> "ParticipantMigration":
        """
        Create a new inbound migration with a fresh id and the current time.

        Args:
            participant_identifier: The participant arriving on this SMP.
            migration_key: The migration key.
            state: The initial state.

        Returns:
            The new record.
        """
        return cls._create(MigrationDirection.INBOUND, participant_identifier, migration_key, state)

    def with_state(self, new_state: str) -> "ParticipantMigration":
        """
        Get a copy of this record in another state.

        Args:
            new_state: The new state id.

        Returns:
            The updated copy.
        """
        return replace(self, state=state_id(new_state))
