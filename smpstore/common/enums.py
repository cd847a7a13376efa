##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""This module provides enumerations shared by the smpstore managers."""
from enum import Enum
from typing import Union


__all__ = ("AuditResult", "Change", "MigrationDirection", "MigrationState", "state_id")


class Change(Enum):
    """
    Enum describing whether a mutating operation modified persisted state.

    Attributes:
        CHANGED: At least one persisted record was modified.
        UNCHANGED: Nothing was modified.
    """

    CHANGED = "changed"
    UNCHANGED = "unchanged"

    @classmethod
    def value_of(cls, changed: bool) -> "Change":
        """
        Map a boolean onto a `Change` value.

        Args:
            changed: True if something was modified.

        Returns:
            `Change.CHANGED` if `changed` is truthy, `Change.UNCHANGED` otherwise.
        """
        return cls.CHANGED if changed else cls.UNCHANGED

    def is_changed(self) -> bool:
        """Whether this value is `Change.CHANGED`."""
        return self is Change.CHANGED

    def is_unchanged(self) -> bool:
        """Whether this value is `Change.UNCHANGED`."""
        return self is Change.UNCHANGED


class MigrationDirection(str, Enum):
    """
    The direction of a participant migration relative to this SMP.

    Attributes:
        OUTBOUND: The participant is being moved away from this SMP.
        INBOUND: The participant is being moved onto this SMP.
    """

    OUTBOUND = "outbound"
    INBOUND = "inbound"


class MigrationState(str, Enum):
    """
    Default workflow states of a participant migration.

    The managers treat states as opaque strings, so deployments may use
    additional states; these are the ones shipped with smpstore.

    Attributes:
        IN_PROGRESS: The migration has been started and is not finished yet.
        MIGRATED: The participant was moved successfully.
        CANCELLED: The migration was aborted.
    """

    IN_PROGRESS = "inprogress"
    MIGRATED = "migrated"
    CANCELLED = "cancelled"


class AuditResult(Enum):
    """
    Outcome reported to the audit sink for an audited action.

    Attributes:
        SUCCESS: The action was performed.
        FAILURE: The action could not be performed.
    """

    SUCCESS = "success"
    FAILURE = "failure"


def state_id(state: Union[str, Enum]) -> str:
    """
    Get the persisted id of a migration state.

    Args:
        state: A state id or an enum member such as `MigrationState.MIGRATED`.

    Returns:
        The string id of the state.
    """
    if isinstance(state, Enum):
        return str(state.value)
    return str(state)
