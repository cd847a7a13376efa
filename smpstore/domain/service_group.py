##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Service groups and the manager used to resolve them.

Service groups are owned by another part of the SMP; smpstore only needs to
look them up by participant, so the manager is an interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from smpstore.domain.identifiers import ParticipantIdentifier


@dataclass(frozen=True)
class ServiceGroup:
    """
    The registration of a participant on this SMP.

    Attributes:
        participant_identifier: The participant the service group belongs to.
        owner_id: Optional id of the user owning the service group.
    """

    participant_identifier: ParticipantIdentifier
    owner_id: Optional[str] = None

    @property
    def id(self) -> str:  # pylint: disable=invalid-name
        """The URI-encoded participant identifier."""
        return self.participant_identifier.uri_encoded


class ServiceGroupManager(ABC):
    """
    Resolves service groups by participant identifier.
    """

    @abstractmethod
    def get_service_group_of_id(self, participant_identifier: ParticipantIdentifier) -> Optional[ServiceGroup]:
        """
        Look up the service group of a participant.

        Args:
            participant_identifier: The participant to look up.

        Returns:
            The service group, or None if the participant is not registered.
        """
        raise NotImplementedError("Subclasses of `ServiceGroupManager` must implement `get_service_group_of_id`.")


class ImplicitServiceGroupManager(ServiceGroupManager):
    """
    Treats every participant as registered.

    Used when smpstore runs without a service group registry (e.g. from the
    command line), so stored business cards can always be resolved.
    """

    def get_service_group_of_id(self, participant_identifier: ParticipantIdentifier) -> Optional[ServiceGroup]:
        if participant_identifier is None:
            return None
        return ServiceGroup(participant_identifier)
