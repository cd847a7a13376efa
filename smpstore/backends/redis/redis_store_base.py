##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Base Classes for Redis-Backed Data Stores in smpstore

This module provides the classes that implement the store contracts on top of
Redis, where every record is a hash ("document"). Redis offers no
multi-document transactions, so:

- `RedisStoreBase` changes single fields with optimistic locking (WATCH/MULTI).
- `RedisPartitionedStoreBase` replaces a partition by deleting the old hashes
  and then writing the new ones. A reader running concurrently with a replace
  can observe an empty or partial partition.

See also:
    - smpstore.backends.store_base: Base classes
    - smpstore.backends.redis.redis_stores: Concrete store implementations
    - smpstore.db_scripts.data_models: Data model definitions
"""

import logging
import uuid
from typing import Dict, Generic, List, Optional, Type

from redis import Redis
from redis.exceptions import WatchError

from smpstore.backends.store_base import PartitionedStoreBase, StoreBase, T
from smpstore.backends.utils import deserialize_entity, get_not_found_error_class, serialize_entity


LOG = logging.getLogger(__name__)


def _to_hash_mapping(entity: T) -> Dict[str, str]:
    """Serialize an entity for HSET, which cannot store None values."""
    return {name: value for name, value in serialize_entity(entity).items() if value is not None}


class RedisKeyspaceMixin:
    """
    Helpers shared by stores that own every key below `{key}:`.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.
    """

    client: Redis
    key: str

    def clear(self):
        """
        Delete every key owned by this store.
        """
        deleted = 0
        for redis_key in self.client.scan_iter(match=f"{self.key}:*"):
            deleted += self.client.delete(redis_key)
        LOG.info(f"Removed {deleted} '{self.key}' keys from Redis.")


class RedisStoreBase(RedisKeyspaceMixin, StoreBase[T], Generic[T]):
    """
    Base class for Redis stores of individually addressed records.

    Each record is stored as a hash at `{key}:{id}`.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.
        model_class (Type[T]): The model class used for deserialization.

    Methods:
        save: Insert a new record.
        retrieve: Retrieve a record by ID.
        retrieve_all: Query the database for all records of this type.
        update_field: Conditionally change one field of a record.
        clear: Delete every record of this type.
    """

    def __init__(self, client: Redis, key: str, model_class: Type[T]):
        """
        Initialize the Redis store with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
            key: The prefix key used for Redis entries.
            model_class: The model class used for deserialization.
        """
        self.client: Redis = client
        self.key: str = key
        self.model_class: Type[T] = model_class

    def _get_full_key(self, entity_id: str) -> str:
        """
        Get the full Redis key for an entity.

        Args:
            entity_id: The entity ID.

        Returns:
            The full Redis key.
        """
        return entity_id if entity_id.startswith(f"{self.key}:") else f"{self.key}:{entity_id}"

    def save(self, entity: T):
        """
        Insert a new record into Redis.

        Args:
            entity: The entity to save.
        """
        LOG.debug(f"Creating a {self.key} entry in Redis...")
        self.client.hset(self._get_full_key(entity.id), mapping=_to_hash_mapping(entity))
        LOG.debug(f"Successfully created a {self.key} with id '{entity.id}' in Redis.")

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a record from Redis by ID.

        Args:
            identifier: The ID (or full key) of the record to retrieve.

        Returns:
            The record if found, None otherwise.
        """
        LOG.debug(f"Retrieving identifier {identifier} in RedisStoreBase.")
        data_from_redis = self.client.hgetall(self._get_full_key(identifier))
        if not data_from_redis:
            return None
        return deserialize_entity(data_from_redis, self.model_class)

    def retrieve_all(self) -> List[T]:
        """
        Query Redis for all records of this type.

        Returns:
            A list of records.
        """
        LOG.debug(f"Fetching all {self.key} records from Redis...")
        all_entities = []

        for redis_key in self.client.scan_iter(match=f"{self.key}:*"):
            entity = self.retrieve(redis_key)
            if entity:
                all_entities.append(entity)
            else:
                LOG.warning(f"{self.key.capitalize()} at '{redis_key}' disappeared while it was being read.")

        LOG.debug(f"Retrieved {len(all_entities)} {self.key} records from Redis.")
        return all_entities

    def update_field(self, identifier: str, field_name: str, new_value: str) -> bool:
        """
        Set `field_name` of a record to `new_value` using optimistic locking.

        The record is WATCHed while its current value is read; if another client
        modifies it before the write executes, the check is repeated.

        Args:
            identifier: The ID of the record.
            field_name: The field to change.
            new_value: The stored string form of the new value.

        Returns:
            True if the record was modified, False if it already held `new_value`.

        Raises:
            EntityNotFoundError: If no record with `identifier` exists.
            ValueError: If `field_name` may not be updated.
        """
        if field_name not in self.model_class().fields_allowed_to_be_updated:
            raise ValueError(f"Field '{field_name}' of {self.key} is not allowed to be updated.")

        entity_key = self._get_full_key(identifier)
        with self.client.pipeline() as pipe:
            while True:
                try:
                    pipe.watch(entity_key)
                    if not pipe.exists(entity_key):
                        pipe.unwatch()
                        error_class = get_not_found_error_class(self.model_class)
                        raise error_class(
                            f"{self.key.capitalize()} with id '{identifier}' does not exist in the database."
                        )
                    if pipe.hget(entity_key, field_name) == new_value:
                        pipe.unwatch()
                        LOG.debug(f"{self.key.capitalize()} '{identifier}' already has {field_name} '{new_value}'.")
                        return False
                    pipe.multi()
                    pipe.hset(entity_key, field_name, new_value)
                    pipe.execute()
                    LOG.debug(f"Set {field_name} of {self.key} '{identifier}' to '{new_value}'.")
                    return True
                except WatchError:
                    LOG.debug(f"{self.key.capitalize()} '{identifier}' changed while updating {field_name}; retrying.")


class RedisPartitionedStoreBase(RedisKeyspaceMixin, PartitionedStoreBase[T], Generic[T]):
    """
    Base class for Redis stores whose records are grouped by a partition key.

    Key layout, for a store with prefix `key`:

    - `{key}:partitions`: SET of the partition keys holding at least one record.
    - `{key}:partition:{partition_key}`: LIST of the hash keys of a partition, in insertion order.
    - `{key}:entity:{uuid}`: HASH of one record.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.
        model_class (Type[T]): The model class used for deserialization.
        partition_field (str): The model field holding the partition key.
        index_key (str): The key of the partition SET.
    """

    def __init__(
        self, client: Redis, key: str, model_class: Type[T], partition_field: str, index_name: str = "partitions"
    ):  # pylint: disable=too-many-arguments
        """
        Initialize the Redis store with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
            key: The prefix key used for Redis entries.
            model_class: The model class used for deserialization.
            partition_field: The model field holding the partition key.
            index_name: Name of the partition SET below `key`.
        """
        self.client: Redis = client
        self.key: str = key
        self.model_class: Type[T] = model_class
        self.partition_field: str = partition_field
        self.index_key: str = f"{key}:{index_name}"

    def _partition_key(self, partition_key: str) -> str:
        return f"{self.key}:partition:{partition_key}"

    def _new_entity_key(self) -> str:
        return f"{self.key}:entity:{uuid.uuid4()}"

    def replace_partition(self, partition_key: str, entities: List[T]) -> int:
        """
        Replace every record of a partition.

        The old records are deleted with one command and the new ones are then
        written in a single non-transactional pipeline.

        Args:
            partition_key: The partition to replace.
            entities: The new records. Their partition field is set to `partition_key`.

        Returns:
            The number of records that were removed.
        """
        list_key = self._partition_key(partition_key)
        deleted = self.delete_partition(partition_key)

        if entities:
            pipe = self.client.pipeline(transaction=False)
            for entity in entities:
                mapping = _to_hash_mapping(entity)
                mapping[self.partition_field] = partition_key
                entity_key = self._new_entity_key()
                pipe.hset(entity_key, mapping=mapping)
                pipe.rpush(list_key, entity_key)
            pipe.sadd(self.index_key, partition_key)
            pipe.execute()

        LOG.debug(f"Replaced {deleted} {self.key} records of '{partition_key}' with {len(entities)} records.")
        return deleted

    def retrieve_partition(self, partition_key: str) -> List[T]:
        """
        Retrieve the records of one partition in insertion order.

        Args:
            partition_key: The partition to read.

        Returns:
            The records (empty if the partition holds nothing).
        """
        entity_keys = self.client.lrange(self._partition_key(partition_key), 0, -1)
        if not entity_keys:
            return []

        pipe = self.client.pipeline(transaction=False)
        for entity_key in entity_keys:
            pipe.hgetall(entity_key)

        entities = []
        for entity_key, data in zip(entity_keys, pipe.execute()):
            if data:
                entities.append(deserialize_entity(data, self.model_class))
            else:
                LOG.warning(f"{self.key.capitalize()} record '{entity_key}' of '{partition_key}' is missing.")
        return entities

    def retrieve_all(self) -> List[T]:
        """
        Retrieve the records of every partition.

        Returns:
            A list of records, grouped by partition.
        """
        all_entities = []
        for partition_key in sorted(self.client.smembers(self.index_key)):
            all_entities.extend(self.retrieve_partition(partition_key))
        LOG.debug(f"Retrieved {len(all_entities)} {self.key} records from Redis.")
        return all_entities

    def delete_partition(self, partition_key: str) -> int:
        """
        Delete every record of a partition.

        Args:
            partition_key: The partition to delete.

        Returns:
            The number of records removed.
        """
        list_key = self._partition_key(partition_key)
        entity_keys = self.client.lrange(list_key, 0, -1)
        if entity_keys:
            self.client.delete(list_key, *entity_keys)
        self.client.srem(self.index_key, partition_key)
        return len(entity_keys)

    def count_partitions(self) -> int:
        """
        Count the partitions that hold at least one record.

        Returns:
            The size of the partition SET.
        """
        return self.client.scard(self.index_key)
