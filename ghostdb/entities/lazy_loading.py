##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Module for entities that can be loaded as ghosts.

This module provides `GhostMixin`, a concrete implementation of the
[`LazyLoading`][entities.capabilities.LazyLoading] capability. A ghost only holds
its identifier; the rest of its fields are fetched from the store it was loaded
from the first time they are needed.
"""

import logging
from typing import Any, Type, TypeVar

from ghostdb.entities.capabilities import LazyLoading
from ghostdb.exceptions import EntityNotFoundError


LOG = logging.getLogger(__name__)
G = TypeVar("G", bound="GhostMixin")


class GhostMixin(LazyLoading):
    """
    Mixin for entities that can exist as ghosts.

    Assumptions:
        - The class using this must also inherit from [`Entity`][entities.entity.Entity]
          and be listed before it in the bases, e.g. `class User(GhostMixin, Entity)`.

    Methods:
        ghost:
            (classmethod) Create a ghost holding only an identifier.

        is_ghost:
            Check whether this entity still needs to be expanded.

        expand:
            Load the remaining fields from the store this ghost is bound to.
    """

    @classmethod
    def ghost(cls: Type[G], identifier: Any, store: "StoreBase") -> G:  # noqa: F821
        """
        Create a ghost of this entity type. Nothing is read from the store until
        the ghost is expanded.

        Args:
            identifier: The identifier of the stored entity.
            store: The [`StoreBase`][backends.store_base.StoreBase] to expand from.

        Returns:
            A ghost instance of this entity type.
        """
        entity = cls._allocate()
        setattr(entity, cls.id_field, identifier)
        entity._ghost = True  # pylint: disable=protected-access
        entity._store = store  # pylint: disable=protected-access
        return entity

    def is_ghost(self) -> bool:
        """
        Check whether only the identifier of this entity has been loaded.

        Returns:
            True if this entity is a ghost, False otherwise.
        """
        return getattr(self, "_ghost", False)

    def __setattr__(self, name: str, value: Any):
        # Fields written while still a ghost win over the stored values on expansion
        if self.__dict__.get("_ghost", False) and not name.startswith("_"):
            self.__dict__.setdefault("_ghost_edits", set()).add(name)
        super().__setattr__(name, value)

    def expand(self):
        """
        Load the stored values of this ghost, then run its `__post_init__` hook once.
        Fields that were assigned while the entity was a ghost keep their assigned
        values. Does nothing if the entity is already expanded.

        Raises:
            (exceptions.EntityNotFoundError): If the store holds no values for this entity.
        """
        if not self.is_ghost():
            return

        entity_type = self.get_entity_type()
        entity_id = self.get_id()
        LOG.debug(f"Expanding {entity_type} with id '{entity_id}'...")

        data = self._store.retrieve_data(entity_id)
        if data is None:
            raise EntityNotFoundError(f"{entity_type.capitalize()} with id '{entity_id}' not found in the store.")

        edits = self.__dict__.pop("_ghost_edits", set())
        if edits:
            LOG.debug(f"Keeping values assigned to {entity_type} '{entity_id}' before expansion: {sorted(edits)}")
        self._ghost = False
        self._assign_stored_values({key: value for key, value in data.items() if key not in edits})
        self._initialize()
        LOG.debug(f"Successfully expanded {entity_type} with id '{entity_id}'.")
