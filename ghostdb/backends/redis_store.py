##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Redis-backed store for ghostdb entities.

Each entity is kept in a Redis hash at `<key>:<id>`. Every field of the hash holds
one value of the entity's storage form, encoded with the
[`value_codec`][serialization.value_codec].
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type

from redis import Redis

from ghostdb.backends.store_base import StoreBase, T
from ghostdb.exceptions import EntityNotFoundError
from ghostdb.serialization import deserialize_values, serialize_values


LOG = logging.getLogger(__name__)


class RedisStore(StoreBase[T], Generic[T]):
    """
    A store that saves entities as Redis hashes.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.
        model_class (Type[T]): The entity class this store holds.

    Methods:
        save: Save or update an entity in the database.
        retrieve_data: Retrieve the stored values of an entity by ID.
        retrieve_all: Query the database for all entities of this type.
        delete: Delete an entity from the database by ID.
    """

    def __init__(self, model_class: Type[T], client: Redis, key: str = None):
        """
        Initialize the Redis store with a Redis client.

        Args:
            model_class: The entity class this store holds.
            client: A Redis client instance used to interact with the Redis database.
            key: The prefix key used for Redis entries. Defaults to the entity type name.
        """
        super().__init__(model_class)
        self.client: Redis = client
        self.key: str = key or self.entity_type

    def _get_full_key(self, entity_id: Any) -> str:
        """
        Get the full Redis key for an entity.

        Args:
            entity_id: The entity ID, or an already prefixed key.

        Returns:
            The full Redis key.
        """
        if isinstance(entity_id, bytes):
            entity_id = entity_id.decode("utf-8")
        entity_id = str(entity_id)
        return entity_id if entity_id.startswith(f"{self.key}:") else f"{self.key}:{entity_id}"

    def save(self, entity: T):
        """
        Save or update an entity in the Redis database. The hash is replaced as a
        whole so that fields the entity no longer has don't linger.

        Args:
            entity: The entity to save.
        """
        entity_key = self._get_full_key(self._get_entity_id(entity))
        LOG.debug(f"Saving {self.entity_type} to Redis at '{entity_key}'...")

        serialized_data = serialize_values(entity.to_data())
        pipeline = self.client.pipeline()
        pipeline.delete(entity_key)
        pipeline.hset(entity_key, mapping=serialized_data)
        pipeline.execute()

        LOG.debug(f"Successfully saved {self.entity_type} at '{entity_key}' in Redis.")

    def retrieve_data(self, identifier: Any) -> Optional[Dict[str, Any]]:
        """
        Retrieve the stored values of an entity from the Redis database.

        Args:
            identifier: The ID (or full key) of the entity to retrieve.

        Returns:
            The stored values if found, None otherwise.
        """
        entity_key = self._get_full_key(identifier)
        data_from_redis = self.client.hgetall(entity_key)
        if not data_from_redis:
            return None
        return deserialize_values(data_from_redis)

    def retrieve_all(self) -> List[T]:
        """
        Query the Redis database for all entities of this type.

        Returns:
            A list of entities.
        """
        LOG.info(f"Fetching all {self.entity_type} entities from Redis...")
        all_entities = []

        for key in self.client.scan_iter(match=f"{self.key}:*"):
            data = self.retrieve_data(key)
            if data is None:
                LOG.warning(f"Entry '{key}' could not be retrieved or no longer exists.")
                continue
            all_entities.append(self.model_class.from_data(data))

        LOG.info(f"Successfully retrieved {len(all_entities)} {self.entity_type} entities from Redis.")
        return all_entities

    def delete(self, identifier: Any):
        """
        Delete an entity from the Redis database by ID.

        Args:
            identifier: The ID of the entity to delete.

        Raises:
            (exceptions.EntityNotFoundError): If the entity does not exist.
        """
        entity_key = self._get_full_key(identifier)
        LOG.debug(f"Attempting to delete {self.entity_type} at '{entity_key}' from Redis...")

        if not self.client.exists(entity_key):
            raise EntityNotFoundError(f"{self.entity_type.capitalize()} with id '{identifier}' does not exist.")

        self.client.delete(entity_key)
        LOG.info(f"Successfully deleted {self.entity_type} '{identifier}' from Redis.")
