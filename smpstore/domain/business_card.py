##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Immutable value records describing a participant's business card.

A `BusinessCard` is the aggregate of every `BusinessCardEntity` stored for
one service group. Entities carry three nested collections (identifiers,
website URIs, and contacts) which are persisted as encoded text by
[`NestedEntityCodec`][serialization.nested_entity_codec.NestedEntityCodec].
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Tuple

from smpstore.domain.identifiers import ParticipantIdentifier
from smpstore.domain.service_group import ServiceGroup


@dataclass(frozen=True)
class BusinessCardIdentifier:
    """
    An additional identifier of a business card entity.

    Attributes:
        id: Identifier of this item, unique within its entity.
        scheme: The identifier scheme.
        value: The identifier value.
    """

    id: Optional[str] = None  # pylint: disable=invalid-name
    scheme: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class BusinessCardContact:
    """
    A contact person or role of a business card entity.

    Attributes:
        id: Identifier of this item, unique within its entity.
        type: Free text contact type (e.g. "Support").
        name: The contact name.
        phone: The phone number.
        email: The email address.
    """

    id: Optional[str] = None  # pylint: disable=invalid-name
    type: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


def _as_tuple(values: Optional[Iterable]) -> Tuple:
    return tuple(values) if values else ()


@dataclass(frozen=True)
class BusinessCardEntity:  # pylint: disable=too-many-instance-attributes
    """
    One legal entity listed on a business card.

    The collections passed in are normalised to tuples so instances stay hashable.

    Attributes:
        id: Identifier of the entity, unique within its business card.
        name: The entity name.
        country_code: Country code of the entity.
        geographical_information: Free text address information.
        identifiers: Additional identifiers of the entity.
        website_uris: Websites of the entity.
        contacts: Contacts of the entity.
        additional_information: Free text.
        registration_date: Date of registration.
    """

    id: str  # pylint: disable=invalid-name
    name: Optional[str] = None
    country_code: Optional[str] = None
    geographical_information: Optional[str] = None
    identifiers: Tuple[BusinessCardIdentifier, ...] = field(default_factory=tuple)
    website_uris: Tuple[str, ...] = field(default_factory=tuple)
    contacts: Tuple[BusinessCardContact, ...] = field(default_factory=tuple)
    additional_information: Optional[str] = None
    registration_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "identifiers", _as_tuple(self.identifiers))
        object.__setattr__(self, "website_uris", _as_tuple(self.website_uris))
        object.__setattr__(self, "contacts", _as_tuple(self.contacts))


@dataclass(frozen=True)
class BusinessCard:
    """
    The business card of a service group.

    Attributes:
        service_group: The owning service group.
        entities: The entities on the card, in insertion order.
    """

    service_group: ServiceGroup
    entities: Tuple[BusinessCardEntity, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "entities", _as_tuple(self.entities))

    @property
    def id(self) -> str:  # pylint: disable=invalid-name
        """The URI-encoded participant identifier of the owning service group."""
        return self.service_group.id

    @property
    def participant_identifier(self) -> ParticipantIdentifier:
        """The participant owning this business card."""
        return self.service_group.participant_identifier

    def get_entity_count(self) -> int:
        """
        Get the number of entities on this card.

        Returns:
            The number of entities.
        """
        return len(self.entities)
