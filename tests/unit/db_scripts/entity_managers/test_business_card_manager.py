##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Tests for the `business_card_manager.py` module.
"""

import json
from typing import List
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from smpstore.audit import OBJECT_TYPE_BUSINESS_CARD
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, StorageBackend
from smpstore.backends.store_base import PartitionedStoreBase
from smpstore.common.enums import AuditResult, Change
from smpstore.db_scripts.data_models import BusinessCardEntityModel
from smpstore.db_scripts.entity_managers.business_card_manager import BusinessCardManager
from smpstore.domain.business_card import BusinessCard, BusinessCardEntity
from smpstore.domain.identifiers import ParticipantIdentifier, SimpleIdentifierFactory
from smpstore.domain.service_group import ServiceGroup
from tests.fixture_types import FixtureList


P1 = "iso6523-actorid-upis::9915:p1"


@pytest.fixture
def mock_store(mocker: MockerFixture) -> MagicMock:
    """A mocked partitioned store."""
    return mocker.MagicMock(spec=PartitionedStoreBase)


@pytest.fixture
def mock_backend(mocker: MockerFixture, mock_store: MagicMock) -> MagicMock:
    """
    A mocked backend handing out `mock_store`.

    Args:
        mocker: PyTest mocker fixture.
        mock_store: The mocked store.

    Returns:
        The mocked backend.
    """
    backend = mocker.MagicMock(spec=StorageBackend)
    backend.get_store.return_value = mock_store
    backend.get_name.return_value = "mock"
    return backend


@pytest.fixture
def manager(mock_backend: MagicMock, service_group_manager, audit_sink, recording_callback) -> BusinessCardManager:
    """
    A business card manager on the mocked backend.

    Args:
        mock_backend: The mocked backend.
        service_group_manager: A service group manager knowing P1 and P2.
        audit_sink: A recording audit sink.
        recording_callback: An exception callback recording what it is given.

    Returns:
        The manager under test.
    """
    return BusinessCardManager(
        mock_backend,
        service_group_manager,
        SimpleIdentifierFactory(),
        audit_sink=audit_sink,
        exception_callbacks=[recording_callback],
    )


def _stored(manager: BusinessCardManager, entities: List[BusinessCardEntity]) -> List[BusinessCardEntityModel]:
    # pylint: disable=protected-access
    return [manager._to_model(P1, entity) for entity in entities]


class TestCreateOrUpdate:
    """Tests for `BusinessCardManager.create_or_update`."""

    def test_create(
        self,
        manager: BusinessCardManager,
        mock_backend: MagicMock,
        mock_store: MagicMock,
        audit_sink,
        service_group_p1: ServiceGroup,
        entity_e1: BusinessCardEntity,
        entity_e2: BusinessCardEntity,
    ):
        """
        Test that a first business card is stored and audited as a create.

        Args:
            manager: The manager under test.
            mock_backend: The mocked backend.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            service_group_p1: The service group of P1.
            entity_e1: An entity with nested collections.
            entity_e2: An entity without nested collections.
        """
        mock_store.replace_partition.return_value = 0

        card = manager.create_or_update(service_group_p1, [entity_e1, entity_e2])

        assert card == BusinessCard(service_group_p1, [entity_e1, entity_e2])
        mock_backend.get_store.assert_called_with(BUSINESS_CARD_STORE)
        partition_key, models = mock_store.replace_partition.call_args.args
        assert partition_key == P1
        assert [model.id for model in models] == ["E1", "E2"]
        assert all(model.participant_id == P1 for model in models)
        assert len(json.loads(models[0].identifiers)) == 2
        assert models[1].identifiers == models[1].contacts == models[1].website_uris == "[]"
        assert audit_sink.events == [("create", AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, P1, (2,))]

    def test_update(
        self,
        manager: BusinessCardManager,
        mock_store: MagicMock,
        audit_sink,
        service_group_p1: ServiceGroup,
        entity_e2: BusinessCardEntity,
    ):
        """
        Test that replacing an existing business card is audited as a modification.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            service_group_p1: The service group of P1.
            entity_e2: An entity without nested collections.
        """
        mock_store.replace_partition.return_value = 2

        card = manager.create_or_update(service_group_p1, [entity_e2])

        assert card.entities == (entity_e2,)
        assert audit_sink.events == [("modify", AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, P1, (1,))]

    def test_empty_entities_are_allowed(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup
    ):
        """
        Test that a business card may be replaced with no entities.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
        """
        mock_store.replace_partition.return_value = 1

        card = manager.create_or_update(service_group_p1, [])

        assert card.get_entity_count() == 0
        mock_store.replace_partition.assert_called_once_with(P1, [])

    def test_missing_arguments(self, manager: BusinessCardManager, service_group_p1: ServiceGroup):
        """
        Test that a missing service group or entity list is rejected.

        Args:
            manager: The manager under test.
            service_group_p1: The service group of P1.
        """
        with pytest.raises(ValueError, match="service group"):
            manager.create_or_update(None, [])
        with pytest.raises(ValueError, match="must not be None"):
            manager.create_or_update(service_group_p1, None)

    @pytest.mark.parametrize(
        "entity_ids, match", [(["E1", ""], "non-empty id"), (["E1", "E2", "E1"], "duplicated: E1")]
    )
    def test_invalid_entity_ids(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup, entity_ids, match
    ):
        """
        Test that blank or repeated entity ids are rejected before anything is stored.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
            entity_ids: The ids of the entities to store.
            match: Expected part of the error message.
        """
        with pytest.raises(ValueError, match=match):
            manager.create_or_update(service_group_p1, [BusinessCardEntity(id=entity_id) for entity_id in entity_ids])
        mock_store.replace_partition.assert_not_called()

    def test_persistence_failure(
        self,
        manager: BusinessCardManager,
        mock_store: MagicMock,
        audit_sink,
        raised_exceptions: FixtureList[Exception],
        service_group_p1: ServiceGroup,
        entity_e1: BusinessCardEntity,
    ):
        """
        Test that a storage error is reported to the callbacks and yields None.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            raised_exceptions: The exceptions seen by the recording callback.
            service_group_p1: The service group of P1.
            entity_e1: An entity with nested collections.
        """
        error = RuntimeError("disk full")
        mock_store.replace_partition.side_effect = error

        assert manager.create_or_update(service_group_p1, [entity_e1]) is None
        assert raised_exceptions == [error]
        assert audit_sink.events == [("modify", AuditResult.FAILURE, OBJECT_TYPE_BUSINESS_CARD, P1, ())]


class TestDelete:
    """Tests for `BusinessCardManager.delete`."""

    def test_delete_none(self, manager: BusinessCardManager, mock_store: MagicMock):
        """
        Test that deleting None changes nothing.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
        """
        assert manager.delete(None) is Change.UNCHANGED
        mock_store.delete_partition.assert_not_called()

    def test_delete_existing(
        self, manager: BusinessCardManager, mock_store: MagicMock, audit_sink, service_group_p1: ServiceGroup
    ):
        """
        Test that deleting a stored card reports a change and is audited.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            service_group_p1: The service group of P1.
        """
        mock_store.delete_partition.return_value = 2

        assert manager.delete(BusinessCard(service_group_p1)) is Change.CHANGED
        mock_store.delete_partition.assert_called_once_with(P1)
        assert audit_sink.events == [("delete", AuditResult.SUCCESS, OBJECT_TYPE_BUSINESS_CARD, P1, (2,))]

    def test_delete_missing(
        self, manager: BusinessCardManager, mock_store: MagicMock, audit_sink, service_group_p1: ServiceGroup
    ):
        """
        Test that deleting a card that is not stored changes nothing and is not audited.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            service_group_p1: The service group of P1.
        """
        mock_store.delete_partition.return_value = 0

        assert manager.delete(BusinessCard(service_group_p1)) is Change.UNCHANGED
        assert not audit_sink.events

    def test_delete_failure(
        self,
        manager: BusinessCardManager,
        mock_store: MagicMock,
        audit_sink,
        raised_exceptions: FixtureList[Exception],
        service_group_p1: ServiceGroup,
    ):
        """
        Test that a storage error during delete is reported and yields `Change.UNCHANGED`.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            audit_sink: A recording audit sink.
            raised_exceptions: The exceptions seen by the recording callback.
            service_group_p1: The service group of P1.
        """
        mock_store.delete_partition.side_effect = ConnectionError("gone")

        assert manager.delete(BusinessCard(service_group_p1)) is Change.UNCHANGED
        assert len(raised_exceptions) == 1
        assert audit_sink.events == [("delete", AuditResult.FAILURE, OBJECT_TYPE_BUSINESS_CARD, P1, ())]


class TestQueries:
    """Tests for the read operations of `BusinessCardManager`."""

    def test_get_all_groups_by_participant(
        self,
        manager: BusinessCardManager,
        mock_store: MagicMock,
        participant_p1: ParticipantIdentifier,
        entity_e1: BusinessCardEntity,
        entity_e2: BusinessCardEntity,
    ):
        """
        Test that entities are grouped into one card per participant and unknown participants are skipped.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            participant_p1: The participant P1.
            entity_e1: An entity with nested collections.
            entity_e2: An entity without nested collections.
        """
        orphan = BusinessCardEntityModel(id="X", participant_id="iso6523-actorid-upis::unknown")
        mock_store.retrieve_all.return_value = [*_stored(manager, [entity_e1]), orphan, *_stored(manager, [entity_e2])]

        cards = manager.get_all()

        assert len(cards) == 1
        assert cards[0].participant_identifier == participant_p1
        assert cards[0].entities == (entity_e1, entity_e2)

    def test_get_all_failure(self, manager: BusinessCardManager, mock_store: MagicMock, raised_exceptions):
        """
        Test that a storage error yields None rather than an empty list.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            raised_exceptions: The exceptions seen by the recording callback.
        """
        mock_store.retrieve_all.side_effect = RuntimeError("boom")
        assert manager.get_all() is None
        assert len(raised_exceptions) == 1

    def test_get_by_service_group(
        self,
        manager: BusinessCardManager,
        mock_store: MagicMock,
        service_group_p1: ServiceGroup,
        entity_e1: BusinessCardEntity,
    ):
        """
        Test that the stored entities of a service group are decoded into a card.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
            entity_e1: An entity with nested collections.
        """
        mock_store.retrieve_partition.return_value = _stored(manager, [entity_e1])

        card = manager.get_by_service_group(service_group_p1)

        mock_store.retrieve_partition.assert_called_once_with(P1)
        assert card == BusinessCard(service_group_p1, [entity_e1])

    def test_get_by_service_group_nothing_stored(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup
    ):
        """
        Test that None is returned when nothing is stored or no service group is given.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
        """
        mock_store.retrieve_partition.return_value = []
        assert manager.get_by_service_group(service_group_p1) is None
        assert manager.get_by_service_group(None) is None

    def test_get_by_service_group_with_corrupt_payload(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup
    ):
        """
        Test that an entity whose stored collections cannot be decoded is still returned.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
        """
        mock_store.retrieve_partition.return_value = [
            BusinessCardEntityModel(id="E1", participant_id=P1, identifiers="{broken", contacts=None, website_uris="7")
        ]

        card = manager.get_by_service_group(service_group_p1)

        assert card.entities == (BusinessCardEntity(id="E1"),)

    def test_deeply_nested_payload_is_read_as_empty(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup, raised_exceptions
    ):
        """
        Test that a stored collection nested too deeply to parse reads back as empty in both queries.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
            raised_exceptions: The exceptions seen by the recording callback.
        """
        nested = "[" * 100000 + "]" * 100000
        model = BusinessCardEntityModel(id="E1", participant_id=P1, identifiers=nested, contacts=nested)
        mock_store.retrieve_partition.return_value = [model]
        mock_store.retrieve_all.return_value = [model]

        card = manager.get_by_service_group(service_group_p1)
        cards = manager.get_all()

        assert card.entities == (BusinessCardEntity(id="E1"),)
        assert [c.entities for c in cards] == [(BusinessCardEntity(id="E1"),)]
        assert raised_exceptions == []

    def test_get_by_service_group_failure(
        self, manager: BusinessCardManager, mock_store: MagicMock, service_group_p1: ServiceGroup, raised_exceptions
    ):
        """
        Test that a storage error yields None and is reported.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            service_group_p1: The service group of P1.
            raised_exceptions: The exceptions seen by the recording callback.
        """
        mock_store.retrieve_partition.side_effect = RuntimeError("boom")
        assert manager.get_by_service_group(service_group_p1) is None
        assert len(raised_exceptions) == 1

    @pytest.mark.parametrize("raw", [None, "", "   ", "not-an-identifier", "iso6523-actorid-upis::unknown"])
    def test_get_by_id_without_result(self, manager: BusinessCardManager, mock_store: MagicMock, raw: str):
        """
        Test that blank, invalid, and unregistered identifiers yield None without a lookup.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            raw: The raw participant identifier.
        """
        assert manager.get_by_id(raw) is None
        mock_store.retrieve_partition.assert_not_called()

    def test_get_by_id(self, manager: BusinessCardManager, mock_store: MagicMock, entity_e2: BusinessCardEntity):
        """
        Test that a registered participant given as text is resolved to its card.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            entity_e2: An entity without nested collections.
        """
        mock_store.retrieve_partition.return_value = _stored(manager, [entity_e2])

        card = manager.get_by_id(P1)

        assert card.id == P1
        assert card.entities == (entity_e2,)

    def test_count(self, manager: BusinessCardManager, mock_store: MagicMock, raised_exceptions):
        """
        Test that the partition count is returned, and 0 on failure.

        Args:
            manager: The manager under test.
            mock_store: The mocked store.
            raised_exceptions: The exceptions seen by the recording callback.
        """
        mock_store.count_partitions.return_value = 4
        assert manager.count() == 4

        mock_store.count_partitions.side_effect = RuntimeError("boom")
        assert manager.count() == 0
        assert len(raised_exceptions) == 1
