##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Redis backend implementation for smpstore.

This module provides a concrete implementation of the `StorageBackend` interface using Redis
as the underlying database. One client is created per backend and shared by its stores.
"""

import logging
from typing import Optional

from redis import Redis

from smpstore.backends.redis.redis_stores import RedisBusinessCardStore, RedisParticipantMigrationStore
from smpstore.backends.storage_backend import BUSINESS_CARD_STORE, PARTICIPANT_MIGRATION_STORE, StorageBackend
from smpstore.utils import mask_url_password


LOG = logging.getLogger("smpstore")


class RedisBackend(StorageBackend):
    """
    A Redis-based implementation of the `StorageBackend` interface.

    Attributes:
        backend_name (str): The name of the backend ("redis").
        client (Redis): The Redis client used for database operations.
        url (str): The URL the client was created from, if any.

    Methods:
        get_version:
            Query Redis for the current version.

        get_connection_string:
            Retrieve the URL used to connect to Redis.

        flush_database:
            Remove every smpstore key from Redis.
    """

    def __init__(self, url: Optional[str] = None, cert_reqs: Optional[str] = None, client: Optional[Redis] = None):
        """
        Initialize the `RedisBackend` instance, setting up the Redis client connection and store mappings.

        Args:
            url: The Redis URL to connect to. Ignored when `client` is given.
            cert_reqs: Certificate requirements for `rediss://` URLs.
            client: An existing client to use instead of creating one.

        Raises:
            ValueError: If neither `url` nor `client` is given.
        """
        if client is None:
            if not url:
                raise ValueError("The Redis backend needs either a url or a client.")
            redis_config = {"url": url, "decode_responses": True}
            if url.startswith("rediss://"):
                redis_config["ssl_cert_reqs"] = cert_reqs or "required"
            LOG.debug(f"Creating a Redis client for {mask_url_password(url)}.")
            client = Redis.from_url(**redis_config)

        self.client: Redis = client
        self.url: Optional[str] = url

        stores = {
            BUSINESS_CARD_STORE: RedisBusinessCardStore(self.client),
            PARTICIPANT_MIGRATION_STORE: RedisParticipantMigrationStore(self.client),
        }

        super().__init__("redis", stores)

    def get_version(self) -> str:
        """
        Query the Redis backend for the current version.

        Returns:
            A string representing the current version of Redis.
        """
        client_info = self.client.info()
        return client_info.get("redis_version", "N/A")

    def get_connection_string(self, include_password: bool = False) -> str:
        """
        Get the URL used to connect to Redis.

        Args:
            include_password: Whether the password should be shown.

        Returns:
            The Redis URL, or a description of the client if it was passed in directly.
        """
        if not self.url:
            return repr(self.client)
        return self.url if include_password else mask_url_password(self.url)
