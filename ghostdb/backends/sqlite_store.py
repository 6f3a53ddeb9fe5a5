##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
SQLite-backed store for ghostdb entities.

Each entity type gets its own table with two columns: the entity id and the
storage form of the entity, encoded with the [`value_codec`][serialization.value_codec]
and kept as JSON text.
"""

import json
import logging
import re
from typing import Any, Dict, Generic, List, Optional, Type

from ghostdb.backends.sqlite_connection import SQLiteConnection
from ghostdb.backends.store_base import StoreBase, T
from ghostdb.exceptions import EntityNotFoundError
from ghostdb.serialization import deserialize_values, serialize_values


LOG = logging.getLogger(__name__)

TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SQLiteStore(StoreBase[T], Generic[T]):
    """
    A store that saves entities in a SQLite table.

    Attributes:
        db_path (str): The path to the SQLite database file.
        table_name (str): The table holding this entity type.
        model_class (Type[T]): The entity class this store holds.

    Methods:
        create_table_if_not_exists: Create the table for this entity type.
        save: Save or update an entity in the database.
        retrieve_data: Retrieve the stored values of an entity by ID.
        retrieve_all: Query the database for all entities of this type.
        delete: Delete an entity from the database by ID.
    """

    def __init__(self, model_class: Type[T], db_path: str, table_name: str = None):
        """
        Initialize the SQLite store and make sure its table exists.

        Args:
            model_class: The entity class this store holds.
            db_path: The path to the SQLite database file.
            table_name: The table holding this entity type. Defaults to the entity type name.

        Raises:
            ValueError: If the table name is not a valid SQL identifier.
        """
        super().__init__(model_class)
        self.db_path: str = db_path
        self.table_name: str = table_name or self.entity_type
        if not TABLE_NAME_PATTERN.match(self.table_name):
            raise ValueError(f"'{self.table_name}' is not a valid table name.")
        self.create_table_if_not_exists()

    def create_table_if_not_exists(self):
        """
        Create the table for this entity type if it does not exist yet.
        """
        with SQLiteConnection(self.db_path) as conn:
            conn.execute(f"CREATE TABLE IF NOT EXISTS {self.table_name} (id TEXT PRIMARY KEY, data TEXT NOT NULL)")

    def save(self, entity: T):
        """
        Save or update an entity in the SQLite database.

        Args:
            entity: The entity to save.
        """
        entity_id = self._get_entity_id(entity)
        LOG.debug(f"Saving {self.entity_type} with id '{entity_id}' to SQLite...")

        data = json.dumps(serialize_values(entity.to_data()))
        with SQLiteConnection(self.db_path) as conn:
            conn.execute(
                f"INSERT INTO {self.table_name} (id, data) VALUES (?, ?) "
                "ON CONFLICT(id) DO UPDATE SET data = excluded.data",
                (str(entity_id), data),
            )

        LOG.debug(f"Successfully saved {self.entity_type} with id '{entity_id}' to SQLite.")

    def retrieve_data(self, identifier: Any) -> Optional[Dict[str, Any]]:
        """
        Retrieve the stored values of an entity from the SQLite database.

        Args:
            identifier: The ID of the entity to retrieve.

        Returns:
            The stored values if found, None otherwise.
        """
        with SQLiteConnection(self.db_path) as conn:
            row = conn.execute(f"SELECT data FROM {self.table_name} WHERE id = ?", (str(identifier),)).fetchone()

        if row is None:
            return None
        return deserialize_values(json.loads(row["data"]))

    def retrieve_all(self) -> List[T]:
        """
        Query the SQLite database for all entities of this type, in insertion order.

        Returns:
            A list of entities.
        """
        LOG.info(f"Fetching all {self.entity_type} entities from SQLite...")
        with SQLiteConnection(self.db_path) as conn:
            rows = conn.execute(f"SELECT data FROM {self.table_name} ORDER BY rowid").fetchall()

        all_entities = [self.model_class.from_data(deserialize_values(json.loads(row["data"]))) for row in rows]
        LOG.info(f"Successfully retrieved {len(all_entities)} {self.entity_type} entities from SQLite.")
        return all_entities

    def delete(self, identifier: Any):
        """
        Delete an entity from the SQLite database by ID.

        Args:
            identifier: The ID of the entity to delete.

        Raises:
            (exceptions.EntityNotFoundError): If the entity does not exist.
        """
        with SQLiteConnection(self.db_path) as conn:
            deleted = conn.execute(f"DELETE FROM {self.table_name} WHERE id = ?", (str(identifier),)).rowcount

        if deleted == 0:
            raise EntityNotFoundError(f"{self.entity_type.capitalize()} with id '{identifier}' does not exist.")

        LOG.info(f"Successfully deleted {self.entity_type} '{identifier}' from SQLite.")
