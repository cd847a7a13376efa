##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Provides a mixin class that adds filter-based retrieval support to backend
implementations within smpstore.

This module defines the `FilterSupportMixin`, which can be used by backend
classes whose stores can filter natively. It assumes the backend implements
`get_store(store_type)` and that each store supports a
`retrieve_all_filtered(filters)` method.
"""

from typing import Dict, List

from smpstore.db_scripts.data_models import BaseDataModel


class FilterSupportMixin:
    """
    Mixin for backends that support retrieving filtered records from their
    underlying stores.

    This class should be inherited alongside a `StorageBackend` implementation
    that supports filtering (e.g., SQLite-based backends).
    """

    def retrieve_all_filtered(self, store_type: str, filters: Dict) -> List[BaseDataModel]:
        """
        Retrieve all records from the specified store that match the given filters.

        Args:
            store_type: The type of store to query (e.g., 'participant_migration').
            filters: Dictionary of field-value pairs to filter on. A list value
                matches any of its items.

        Returns:
            A list of filtered data model objects.
        """
        store = self.get_store(store_type)
        return store.retrieve_all_filtered(filters)
