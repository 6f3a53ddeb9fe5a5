##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Capability interfaces that the entity binder checks for at runtime.

An entity type opts into a behavior by inheriting the matching class:

- `Data`: a structured value that knows its own storage form.
- `Dynamic`: marks an entity type as allowed to hold fields it does not declare.
- `LazyLoading`: an entity that may exist as a ghost and be expanded later.
- `DeferredCollection`: a collection whose contents are resolved on demand.
"""

from abc import ABC, abstractmethod
from typing import Any


# pylint: disable=too-few-public-methods


class Data(ABC):
    """
    A structured value that can convert itself into a storage-ready form.
    """

    @abstractmethod
    def to_data(self) -> Any:
        """
        Convert this value into the form that is written to a store.

        Returns:
            A scalar, list, or dictionary representation of this value.
        """
        raise NotImplementedError("Subclasses of `Data` must implement a `to_data` method.")


class Dynamic:
    """
    Marker for entity types that accept fields they do not declare.

    When an entity type inherits from this class, `Entity.from_data` keeps unknown
    keys of the stored values as ad-hoc attributes instead of dropping them, unless
    the key starts with the internal-name prefix.
    """


class LazyLoading(ABC):
    """
    An entity that can be loaded partially (a ghost) and expanded on demand.
    """

    @abstractmethod
    def is_ghost(self) -> bool:
        """
        Check whether only part of this entity's fields have been loaded.

        Returns:
            True if the entity still needs to be expanded, False otherwise.
        """
        raise NotImplementedError("Subclasses of `LazyLoading` must implement an `is_ghost` method.")

    @abstractmethod
    def expand(self):
        """
        Load the remaining fields of this entity. Calling this on an entity that
        is already expanded must do nothing.
        """
        raise NotImplementedError("Subclasses of `LazyLoading` must implement an `expand` method.")


class DeferredCollection(ABC):
    """
    A collection whose contents are fetched when first needed.
    """

    @abstractmethod
    def expand(self):
        """
        Resolve the contents of this collection. Resolving twice must be safe
        and have no effect the second time.
        """
        raise NotImplementedError("Subclasses of `DeferredCollection` must implement an `expand` method.")

    @abstractmethod
    def is_resolved(self) -> bool:
        """
        Check whether the contents of this collection have been resolved.

        Returns:
            True if `expand` has already resolved the collection, False otherwise.
        """
        raise NotImplementedError("Subclasses of `DeferredCollection` must implement an `is_resolved` method.")
