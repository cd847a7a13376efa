##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Redis Store Implementations for smpstore Data Models

See also:
    - smpstore.backends.redis.redis_store_base: Base classes
    - smpstore.db_scripts.data_models: Data model definitions
"""

from redis import Redis

from smpstore.backends.redis.redis_store_base import RedisPartitionedStoreBase, RedisStoreBase
from smpstore.db_scripts.data_models import BusinessCardEntityModel, ParticipantMigrationModel


class RedisBusinessCardStore(RedisPartitionedStoreBase[BusinessCardEntityModel]):
    """
    A Redis-based store for managing
    [`BusinessCardEntityModel`][db_scripts.data_models.BusinessCardEntityModel]
    records, partitioned by participant.

    The participant SET lives at `business_card:participants`.
    """

    def __init__(self, client: Redis):
        """
        Initialize the `RedisBusinessCardStore` with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
        """
        super().__init__(
            client,
            "business_card",
            BusinessCardEntityModel,
            partition_field="participant_id",
            index_name="participants",
        )


class RedisParticipantMigrationStore(RedisStoreBase[ParticipantMigrationModel]):
    """
    A Redis-based store for managing
    [`ParticipantMigrationModel`][db_scripts.data_models.ParticipantMigrationModel] records.
    """

    def __init__(self, client: Redis):
        """
        Initialize the `RedisParticipantMigrationStore` with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
        """
        super().__init__(client, "participant_migration", ParticipantMigrationModel)
