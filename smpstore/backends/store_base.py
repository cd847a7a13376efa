##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module defines the abstract base classes for all data store implementations in smpstore.

Two kinds of store exist:

- `StoreBase` holds individually addressed records (participant migrations).
- `PartitionedStoreBase` holds sets of records that are always written and
  deleted together, keyed by a partition (the business card entities of one
  participant).
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from smpstore.db_scripts.data_models import BaseDataModel


T = TypeVar("T", bound=BaseDataModel)


class StoreBase(ABC, Generic[T]):
    """
    Base class for stores of individually addressed records.

    Methods:
        save: Insert a new record.
        retrieve: Retrieve a record by ID.
        retrieve_all: Query the database for all records of this type.
        update_field: Conditionally change a single field of a record.
        clear: Remove every record of this type.
    """

    @abstractmethod
    def save(self, entity: T):
        """
        Insert a new record.

        Args:
            entity: The object to save.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `save` method.")

    @abstractmethod
    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a record from the database by ID.

        Args:
            identifier: The ID of the record to retrieve.

        Returns:
            The record if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve` method.")

    @abstractmethod
    def retrieve_all(self) -> List[T]:
        """
        Query the database for all records of this type.

        Returns:
            A list of records.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_all` method.")

    @abstractmethod
    def update_field(self, identifier: str, field_name: str, new_value: str) -> bool:
        """
        Set `field_name` of a record to `new_value` unless it already holds that value.

        The check and the write happen as one step, so of two concurrent callers
        writing the same value only one sees a change.

        Args:
            identifier: The ID of the record.
            field_name: The field to change. Must be updatable on the model.
            new_value: The stored string form of the new value.

        Returns:
            True if the record was modified, False if it already held `new_value`.

        Raises:
            EntityNotFoundError: If no record with `identifier` exists.
            ValueError: If `field_name` may not be updated.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement an `update_field` method.")

    @abstractmethod
    def clear(self):
        """
        Remove every record of this type.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `clear` method.")


class PartitionedStoreBase(ABC, Generic[T]):
    """
    Base class for stores that keep sets of records grouped by a partition key.

    Methods:
        replace_partition: Replace every record of a partition.
        retrieve_partition: Retrieve the records of one partition.
        retrieve_all: Retrieve the records of every partition.
        delete_partition: Delete every record of a partition.
        count_partitions: Count the partitions holding at least one record.
        clear: Remove every record of every partition.
    """

    @abstractmethod
    def replace_partition(self, partition_key: str, entities: List[T]) -> int:
        """
        Delete every record stored under `partition_key` and store `entities` in their place.

        Args:
            partition_key: The partition to replace.
            entities: The new records of the partition, in order.

        Returns:
            The number of records that were removed.
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `replace_partition` method.")

    @abstractmethod
    def retrieve_partition(self, partition_key: str) -> List[T]:
        """
        Retrieve the records of one partition in insertion order.

        Args:
            partition_key: The partition to read.

        Returns:
            The records (empty if the partition holds nothing).
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `retrieve_partition` method.")

    @abstractmethod
    def retrieve_all(self) -> List[T]:
        """
        Retrieve the records of every partition.

        Records of one partition keep their insertion order.

        Returns:
            A list of records.
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `retrieve_all` method.")

    @abstractmethod
    def delete_partition(self, partition_key: str) -> int:
        """
        Delete every record of a partition.

        Args:
            partition_key: The partition to delete.

        Returns:
            The number of records removed.
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `delete_partition` method.")

    @abstractmethod
    def count_partitions(self) -> int:
        """
        Count the partitions that hold at least one record.

        Returns:
            The number of non-empty partitions.
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `count_partitions` method.")

    @abstractmethod
    def clear(self):
        """
        Remove every record of every partition.
        """
        raise NotImplementedError("Subclasses of `PartitionedStoreBase` must implement a `clear` method.")
