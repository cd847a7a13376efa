##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module houses dataclasses that define the format of the data
that's stored in smpstore's database.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import Field, dataclass, field
from dataclasses import fields as dataclass_fields
from datetime import date, datetime
from typing import Dict, List, Tuple, Type, TypeVar


T = TypeVar("T", bound="BaseDataModel")


@dataclass
class BaseDataModel(ABC):
    """
    A base class for the persisted dataclasses, with support for additional data.

    Attributes:
        additional_data: A dictionary to store any extra data not explicitly defined
            as fields in the dataclass.
        fields_allowed_to_be_updated: A list of field names that are allowed to be updated.
            Must be defined in subclasses.

    Methods:
        from_dict (classmethod):
            Create an instance of the dataclass from a dictionary.

        get_instance_fields:
            Retrieve the fields associated with this dataclass instance.

        get_class_fields (classmethod):
            Retrieve the fields associated with the dataclass class itself.
    """

    additional_data: Dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls: Type[T], data: Dict) -> T:
        """
        Create an instance of the dataclass from a dictionary.

        Keys that are not fields of the dataclass are moved into `additional_data`.

        Args:
            data: A dictionary to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.
        """
        field_names = {f.name for f in cls.get_class_fields()}
        known = {key: val for key, val in data.items() if key in field_names}
        unknown = {key: val for key, val in data.items() if key not in field_names}
        if unknown:
            additional_data = dict(known.get("additional_data") or {})
            additional_data.update(unknown)
            known["additional_data"] = additional_data
        return cls(**known)

    def get_instance_fields(self) -> Tuple[Field]:
        """
        Get the fields associated with this instance.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(self)

    @classmethod
    def get_class_fields(cls) -> Tuple[Field]:
        """
        Get the fields associated with this class.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(cls)

    @property
    @abstractmethod
    def fields_allowed_to_be_updated(self) -> List[str]:
        """
        A property to be overridden in subclasses to define which fields are allowed to be updated.

        Returns:
            A list of fields that are allowed to be updated in this class.
        """


@dataclass
class BusinessCardEntityModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store one entity of a participant's business card.

    The nested collections are stored as the encoded text produced by
    [`NestedEntityCodec`][serialization.nested_entity_codec.NestedEntityCodec].

    Attributes:
        additional_data (Dict): For any extra data not explicitly defined.
        additional_information (str): Free text.
        contacts (str): Encoded contacts.
        country_code (str): Country code of the entity.
        fields_allowed_to_be_updated (List[str]): Always empty; business cards
            are replaced as a whole.
        geographical_information (str): Free text address information.
        id (str): Id of the entity, unique within the participant.
        identifiers (str): Encoded additional identifiers.
        name (str): The entity name.
        participant_id (str): URI-encoded participant identifier owning the entity.
        registration_date (date): Date of registration.
        website_uris (str): Encoded website URIs.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))  # pylint: disable=invalid-name
    participant_id: str = None
    name: str = None
    country_code: str = None
    geographical_information: str = None
    identifiers: str = None
    website_uris: str = None
    contacts: str = None
    additional_information: str = None
    registration_date: date = None

    @property
    def fields_allowed_to_be_updated(self) -> List[str]:
        """
        Define the fields that are allowed to be updated for a `BusinessCardEntityModel` object.

        Returns:
            An empty list; entities are only ever replaced.
        """
        return []


@dataclass
class ParticipantMigrationModel(BaseDataModel):
    """
    A dataclass to store a participant migration.

    Attributes:
        additional_data (Dict): For any extra data not explicitly defined.
        direction (str): `outbound` or `inbound`.
        fields_allowed_to_be_updated (List[str]): A list of field names that are
            allowed to be updated.
        id (str): The unique ID of the migration.
        initiation_date_time (datetime): When the migration was created.
        migration_key (str): The secret shared between both SMPs.
        participant_id (str): URI-encoded identifier of the migrated participant.
        state (str): The current workflow state.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))  # pylint: disable=invalid-name
    direction: str = None
    state: str = None
    participant_id: str = None
    initiation_date_time: datetime = None
    migration_key: str = None

    @property
    def fields_allowed_to_be_updated(self) -> List[str]:
        """
        Define the fields that are allowed to be updated for a `ParticipantMigrationModel` object.

        Returns:
            A list of fields that are allowed to be updated in this class.
        """
        return ["state"]
