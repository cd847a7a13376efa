##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Tests for the `storage_backend.py` and `filter_support_mixin.py` modules.
"""

import pytest
from pytest_mock import MockerFixture

from smpstore.backends.filter_support_mixin import FilterSupportMixin
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, PARTICIPANT_MIGRATION_STORE, StorageBackend
from smpstore.backends.store_base import PartitionedStoreBase, StoreBase


class DummyBackend(StorageBackend, FilterSupportMixin):
    def get_version(self):
        return "1.0"

    def get_connection_string(self, include_password: bool = False):
        return "dummy://"


@pytest.fixture
def stores(mocker: MockerFixture):
    """Mocked stores keyed by store type."""
    return {
        BUSINESS_CARD_STORE: mocker.MagicMock(spec=PartitionedStoreBase),
        PARTICIPANT_MIGRATION_STORE: mocker.MagicMock(spec=StoreBase),
    }


@pytest.fixture
def backend(stores) -> DummyBackend:
    """A backend built on the mocked stores."""
    return DummyBackend("dummy", stores)


def test_get_name(backend: DummyBackend):
    """
    Test that the backend reports its name.

    Args:
        backend: A backend on mocked stores.
    """
    assert backend.get_name() == "dummy"


def test_get_store(backend: DummyBackend, stores):
    """
    Test that stores are looked up by type.

    Args:
        backend: A backend on mocked stores.
        stores: The mocked stores.
    """
    assert backend.get_store(BUSINESS_CARD_STORE) is stores[BUSINESS_CARD_STORE]


def test_get_store_invalid(backend: DummyBackend):
    """
    Test that an unknown store type raises a `ValueError`.

    Args:
        backend: A backend on mocked stores.
    """
    with pytest.raises(ValueError, match="Invalid store type 'nope'"):
        backend.get_store("nope")


def test_flush_database_clears_every_store(backend: DummyBackend, stores):
    """
    Test that flushing clears each store.

    Args:
        backend: A backend on mocked stores.
        stores: The mocked stores.
    """
    backend.flush_database()
    for store in stores.values():
        store.clear.assert_called_once()


def test_retrieve_all_filtered_delegates_to_the_store(backend: DummyBackend, stores):
    """
    Test that the filter mixin hands the filters to the store.

    Args:
        backend: A backend on mocked stores.
        stores: The mocked stores.
    """
    store = stores[PARTICIPANT_MIGRATION_STORE]
    store.retrieve_all_filtered = lambda filters: [filters]

    assert backend.retrieve_all_filtered(PARTICIPANT_MIGRATION_STORE, {"state": "migrated"}) == [{"state": "migrated"}]
