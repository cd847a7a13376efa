##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Module for managing business cards within the smpstore database.

This module defines the `BusinessCardManager` class. A business card is never
updated piecemeal: `create_or_update` replaces the complete set of entities
stored for a participant, and `delete` removes all of them.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from smpstore.audit import OBJECT_TYPE_BUSINESS_CARD, AuditSink
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, StorageBackend
from smpstore.common.callbacks import ExceptionCallbacks
from smpstore.common.enums import AuditResult, Change
from smpstore.db_scripts.data_models import BusinessCardEntityModel
from smpstore.db_scripts.entity_managers.entity_manager import EntityManager
from smpstore.domain.business_card import BusinessCard, BusinessCardEntity
from smpstore.domain.identifiers import IdentifierFactory, ParticipantIdentifier
from smpstore.domain.service_group import ServiceGroup, ServiceGroupManager
from smpstore.serialization.nested_entity_codec import NestedEntityCodec


LOG = logging.getLogger("smpstore")


class BusinessCardManager(EntityManager):
    """
    Manager for business cards.

    Attributes:
        backend: The database backend used for storing business card entities.
        service_group_manager: Resolves the service group of a stored participant.
        identifier_factory: Parses raw participant identifiers.
        codec: Encodes the nested collections of every entity.

    Methods:
        create_or_update: Replace the business card of a service group.
        delete: Delete a business card.
        get_all: Retrieve every business card.
        get_by_service_group: Retrieve the business card of a service group.
        get_by_id: Retrieve the business card of a raw participant identifier.
        count: Count the participants that have a business card.
    """

    _entity_type = BUSINESS_CARD_STORE

    def __init__(  # pylint: disable=too-many-arguments
        self,
        backend: StorageBackend,
        service_group_manager: ServiceGroupManager,
        identifier_factory: IdentifierFactory,
        audit_sink: AuditSink = None,
        exception_callbacks: ExceptionCallbacks = None,
        codec: NestedEntityCodec = None,
    ):
        """
        Initialize the BusinessCardManager.

        Args:
            backend: The backend interface used to persist and retrieve entities.
            service_group_manager: Resolves the service group of a stored participant.
            identifier_factory: Parses raw participant identifiers.
            audit_sink: Receiver of audit events.
            exception_callbacks: Callbacks told about persistence failures.
            codec: Codec of the nested entity collections. Defaults to a new `NestedEntityCodec`.
        """
        super().__init__(backend, audit_sink=audit_sink, exception_callbacks=exception_callbacks)
        self.service_group_manager: ServiceGroupManager = service_group_manager
        self.identifier_factory: IdentifierFactory = identifier_factory
        self.codec: NestedEntityCodec = codec or NestedEntityCodec()

    def _to_model(self, participant_id: str, entity: BusinessCardEntity) -> BusinessCardEntityModel:
        return BusinessCardEntityModel(
            id=entity.id,
            participant_id=participant_id,
            name=entity.name,
            country_code=entity.country_code,
            geographical_information=entity.geographical_information,
            identifiers=self.codec.encode_identifiers(entity.identifiers),
            website_uris=self.codec.encode_website_uris(entity.website_uris),
            contacts=self.codec.encode_contacts(entity.contacts),
            additional_information=entity.additional_information,
            registration_date=entity.registration_date,
        )

    def _to_entity(self, model: BusinessCardEntityModel) -> BusinessCardEntity:
        return BusinessCardEntity(
            id=model.id,
            name=model.name,
            country_code=model.country_code,
            geographical_information=model.geographical_information,
            identifiers=self.codec.decode_identifiers(model.identifiers),
            website_uris=self.codec.decode_website_uris(model.website_uris),
            contacts=self.codec.decode_contacts(model.contacts),
            additional_information=model.additional_information,
            registration_date=model.registration_date,
        )

    def create_or_update(
        self, service_group: ServiceGroup, entities: Iterable[BusinessCardEntity]
    ) -> Optional[BusinessCard]:
        """
        Replace the entire business card of a service group.

        Every entity previously stored for the participant is removed and `entities`
        are stored in their place. On SQLite both steps happen in one transaction; on
        Redis they do not, so concurrent readers may see an empty or partial card.

        Args:
            service_group: The owning service group.
            entities: The complete new set of entities, in order. May be empty.

        Returns:
            The stored business card, or None if the storage operation failed.

        Raises:
            ValueError: If `service_group` or `entities` is None, or if an entity
                id is blank or used twice.
        """
        if service_group is None:
            raise ValueError("A service group is required to store a business card.")
        if entities is None:
            raise ValueError("The entities of a business card must not be None.")

        entities = tuple(entities)
        entity_ids = [entity.id for entity in entities]
        if any(not entity_id for entity_id in entity_ids):
            raise ValueError("Every business card entity needs a non-empty id.")
        duplicates = sorted(entity_id for entity_id, count in Counter(entity_ids).items() if count > 1)
        if duplicates:
            raise ValueError(f"Business card entity ids must be unique; duplicated: {', '.join(duplicates)}")

        participant_id = service_group.id
        models = [self._to_model(participant_id, entity) for entity in entities]

        LOG.debug(f"Replacing the business card of '{participant_id}' with {len(models)} entities...")
        try:
            replaced = self.store.replace_partition(participant_id, models)
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"store the business card of '{participant_id}'")
            self.audit_sink.on_modify(AuditResult.FAILURE, OBJECT_TYPE_BUSINESS_CARD, participant_id)
            return None

        if replaced:
            self.audit_sink.on_modify(AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, participant_id, len(models))
        else:
            self.audit_sink.on_create(AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, participant_id, len(models))
        LOG.info(f"Stored the business card of '{participant_id}' with {len(models)} entities.")

        return BusinessCard(service_group, entities)

    def delete(self, business_card: Optional[BusinessCard]) -> Change:
        """
        Delete every entity of a business card.

        Args:
            business_card: The business card to delete. None is a no-op.

        Returns:
            `Change.CHANGED` if at least one entity was removed, `Change.UNCHANGED` otherwise
            (including when the storage operation failed).
        """
        if business_card is None:
            return Change.UNCHANGED

        participant_id = business_card.id
        try:
            deleted = self.store.delete_partition(participant_id)
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"delete the business card of '{participant_id}'")
            self.audit_sink.on_delete(AuditResult.FAILURE, OBJECT_TYPE_BUSINESS_CARD, participant_id)
            return Change.UNCHANGED

        if not deleted:
            LOG.debug(f"No business card stored for '{participant_id}'; nothing to delete.")
            return Change.UNCHANGED

        self.audit_sink.on_delete(AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, participant_id, deleted)
        LOG.info(f"Deleted the business card of '{participant_id}' ({deleted} entities).")
        return Change.CHANGED

    def get_all(self) -> Optional[List[BusinessCard]]:
        """
        Retrieve every stored business card.

        Entities are grouped by participant. A participant whose service group can no
        longer be resolved is skipped.

        Returns:
            The business cards, or None if the storage operation failed.
        """
        try:
            models = self._retrieve_all_models()
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, "retrieve all business cards")
            return None

        grouped: Dict[str, List[BusinessCardEntityModel]] = {}
        for model in models:
            grouped.setdefault(model.participant_id, []).append(model)

        business_cards = []
        for participant_id, participant_models in grouped.items():
            participant = ParticipantIdentifier.from_uri_encoded(participant_id)
            service_group = self.service_group_manager.get_service_group_of_id(participant)
            if service_group is None:
                LOG.warning(f"Skipping the business card of '{participant_id}': its service group does not exist.")
                continue
            business_cards.append(BusinessCard(service_group, [self._to_entity(m) for m in participant_models]))

        return business_cards

    def get_by_service_group(self, service_group: Optional[ServiceGroup]) -> Optional[BusinessCard]:
        """
        Retrieve the business card of a service group.

        Args:
            service_group: The owning service group.

        Returns:
            The business card, or None if `service_group` is None, nothing is stored,
            or the storage operation failed.
        """
        if service_group is None:
            return None

        try:
            models = self.store.retrieve_partition(service_group.id)
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, f"retrieve the business card of '{service_group.id}'")
            return None

        if not models:
            return None
        return BusinessCard(service_group, [self._to_entity(model) for model in models])

    def get_by_id(self, raw_participant_id: Optional[str]) -> Optional[BusinessCard]:
        """
        Retrieve the business card of a participant given as text.

        Args:
            raw_participant_id: The URI-encoded participant identifier.

        Returns:
            The business card, or None if the identifier is blank or invalid, the
            service group does not exist, or no business card is stored.
        """
        if not raw_participant_id or not raw_participant_id.strip():
            return None

        participant = self.identifier_factory.parse_participant_identifier(raw_participant_id)
        if participant is None:
            LOG.debug(f"'{raw_participant_id}' is not a valid participant identifier.")
            return None

        service_group = self.service_group_manager.get_service_group_of_id(participant)
        if service_group is None:
            return None

        return self.get_by_service_group(service_group)

    def count(self) -> int:
        """
        Count the participants that have a business card.

        Returns:
            The number of distinct participants with at least one entity, or 0 if the
            storage operation failed.
        """
        try:
            return self.store.count_partitions()
        except Exception as exc:  # pylint: disable=broad-except
            self._handle_persistence_error(exc, "count business cards")
            return 0
