##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
This module defines the abstract base class for all stores in ghostdb.

A store persists the storage form of one entity type (the output of
[`Entity.to_data`][entities.entity.Entity.to_data]) and rebuilds entities from it
with [`Entity.from_data`][entities.entity.Entity.from_data]. Stores are the
collaborators ghost entities expand from.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from ghostdb.entities.entity import Entity
from ghostdb.entities.lazy_loading import GhostMixin


T = TypeVar("T", bound=Entity)

LOG = logging.getLogger(__name__)


class StoreBase(ABC, Generic[T]):
    """
    Base class for all stores supported in ghostdb.

    Attributes:
        model_class (Type[T]): The entity class this store holds.

    Methods:
        save: Save or update an entity in the store.
        retrieve_data: Retrieve the stored values of an entity by ID.
        retrieve: Retrieve an entity from the store by ID.
        retrieve_ghost: Get a ghost of an entity that expands from this store.
        retrieve_all: Query the store for all entities of this type.
        delete: Delete an entity from the store by ID.
    """

    def __init__(self, model_class: Type[T]):
        """
        Initialize the store.

        Args:
            model_class: The entity class this store holds.
        """
        self.model_class: Type[T] = model_class

    @property
    def entity_type(self) -> str:
        """
        Get the type name of the entities held by this store.

        Returns:
            The entity type name.
        """
        return self.model_class.get_entity_type()

    def _get_entity_id(self, entity: T) -> Any:
        """
        Get the id of an entity that is about to be saved.

        Args:
            entity: The entity to save.

        Returns:
            The id of the entity.

        Raises:
            ValueError: If the entity has no id.
        """
        entity_id = entity.get_id()
        if entity_id is None:
            raise ValueError(f"Cannot save a {self.entity_type} without a value for '{entity.id_field}'.")
        return entity_id

    @abstractmethod
    def save(self, entity: T):
        """
        Save or update an entity in the store.

        Args:
            entity: The entity to save.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `save` method.")

    @abstractmethod
    def retrieve_data(self, identifier: Any) -> Optional[Dict[str, Any]]:
        """
        Retrieve the stored values of an entity.

        Args:
            identifier: The ID of the entity.

        Returns:
            The stored values if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_data` method.")

    @abstractmethod
    def retrieve_all(self) -> List[T]:
        """
        Query the store for all entities of this type.

        Returns:
            A list of entities.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_all` method.")

    @abstractmethod
    def delete(self, identifier: Any):
        """
        Delete an entity from the store.

        Args:
            identifier: The ID of the entity to delete.

        Raises:
            (exceptions.EntityNotFoundError): If the entity does not exist.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `delete` method.")

    def retrieve(self, identifier: Any) -> Optional[T]:
        """
        Retrieve an entity from the store.

        Args:
            identifier: The ID of the entity to retrieve.

        Returns:
            The entity if found, None otherwise.
        """
        data = self.retrieve_data(identifier)
        if data is None:
            return None
        return self.model_class.from_data(data)

    def retrieve_ghost(self, identifier: Any) -> T:
        """
        Get a ghost of an entity. Nothing is read until the ghost is expanded.

        Args:
            identifier: The ID of the entity.

        Returns:
            A ghost bound to this store.

        Raises:
            TypeError: If the entity class does not support ghosts.
        """
        if not issubclass(self.model_class, GhostMixin):
            raise TypeError(f"{self.model_class.__name__} entities cannot be loaded as ghosts.")
        return self.model_class.ghost(identifier, self)
