##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
The `entities` package defines the entity base class and the capabilities that
entity types and their values can opt into.

Modules:
    capabilities.py: Capability interfaces checked by the binder: `Data`, `Dynamic`,
        `LazyLoading`, and `DeferredCollection`.
    entity.py: Defines [`Entity`][entities.entity.Entity], which binds an entity's
        fields to stored values and to its external (JSON) representation.
    lazy_loading.py: Defines [`GhostMixin`][entities.lazy_loading.GhostMixin] for
        entities that are loaded as ghosts and expanded from a store.
"""

from ghostdb.entities.capabilities import Data, DeferredCollection, Dynamic, LazyLoading
from ghostdb.entities.entity import DATETIME_FORMAT, INTERNAL_PREFIX, Entity, format_datetime, internal_field
from ghostdb.entities.lazy_loading import GhostMixin


__all__ = [
    "DATETIME_FORMAT",
    "INTERNAL_PREFIX",
    "Data",
    "DeferredCollection",
    "Dynamic",
    "Entity",
    "GhostMixin",
    "LazyLoading",
    "format_datetime",
    "internal_field",
]
