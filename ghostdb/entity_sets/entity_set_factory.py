##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Entity set factory for resolving which collection class to use for an entity type.

This module defines the `EntitySetFactory` class. Custom entity set classes are
registered under the type name of the entity they hold (see
[`Entity.get_entity_type`][entities.entity.Entity.get_entity_type]); every other
entity type gets the default [`EntitySet`][entity_sets.entity_set.EntitySet].
"""

import logging
from typing import Type

from ghostdb.abstracts import GhostBaseFactory
from ghostdb.entities.entity import Entity
from ghostdb.entity_sets.entity_set import EntitySet
from ghostdb.exceptions import EntitySetNotSupportedError


LOG = logging.getLogger(__name__)
DEFAULT_ENTITY_SET = "default"


class EntitySetFactory(GhostBaseFactory):
    """
    Factory resolving the entity set class used for each entity type. Set classes
    are registered under entity type names.

    Methods:
        get_class: Get the entity set class to use for an entity class.
    """

    component_base = EntitySet
    entry_point_group = "ghostdb.entity_sets"
    not_found_error = EntitySetNotSupportedError

    def _register_builtins(self):
        self.register(DEFAULT_ENTITY_SET, EntitySet)

    def get_class(self, entity_class: Type[Entity]) -> Type[EntitySet]:
        """
        Get the entity set class to use for an entity class.

        Args:
            entity_class: The entity class the set will hold.

        Returns:
            The entity set class registered for the entity's type name, or the
            default `EntitySet`.
        """
        entity_type = entity_class.get_entity_type()
        set_class = self.lookup(entity_type)
        if set_class is None:
            LOG.debug(f"No entity set registered for '{entity_type}'. Using the default.")
            return self.get(DEFAULT_ENTITY_SET)
        return set_class


entity_set_factory = EntitySetFactory()
