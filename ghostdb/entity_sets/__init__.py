##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
The `entity_sets` package provides typed, optionally deferred collections of entities
and the factory that decides which collection class to use for an entity type.

Modules:
    entity_set.py: Defines [`EntitySet`][entity_sets.entity_set.EntitySet] and the
        [`EntitySetFlags`][entity_sets.entity_set.EntitySetFlags] that control it.
    entity_set_factory.py: Defines the
        [`EntitySetFactory`][entity_sets.entity_set_factory.EntitySetFactory] and its
        module-level `entity_set_factory` instance.
"""

from ghostdb.entity_sets.entity_set import EntitySet, EntitySetFlags
from ghostdb.entity_sets.entity_set_factory import EntitySetFactory, entity_set_factory


__all__ = ["EntitySet", "EntitySetFactory", "EntitySetFlags", "entity_set_factory"]
