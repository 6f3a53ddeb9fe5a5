##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Module for typed collections of entities.

An `EntitySet` holds entities of a single entity class. It can be created from
entities that are already loaded, or from a loader that is only called when the
contents are first needed, which makes it a
[`DeferredCollection`][entities.capabilities.DeferredCollection].
"""

import logging
from enum import IntFlag
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Type, Union

from ghostdb.entities.capabilities import Data, DeferredCollection, LazyLoading
from ghostdb.entities.entity import Entity


LOG = logging.getLogger(__name__)


class EntitySetFlags(IntFlag):
    """
    Flags controlling the behavior of an [`EntitySet`][entity_sets.entity_set.EntitySet].

    Attributes:
        NONE (int): Default behavior. Numeric value: 0.
        ALLOW_DUPLICATES (int): Keep entities whose id is already in the set. Numeric value: 1.
        LAZY (int): Defer adding the given entities until the set is expanded. Numeric value: 2.
    """

    NONE = 0
    ALLOW_DUPLICATES = 1
    LAZY = 2


class EntitySet(DeferredCollection, Data):
    """
    A collection of entities of one entity class.

    Attributes:
        entity_class (Type[Entity]): The class every entity in this set must be an instance of.
        flags (EntitySetFlags): The flags controlling this set.

    Methods:
        for_class:
            (classmethod) Create an entity set for an entity class.

        expand:
            Resolve the contents of this set and expand any ghost entities in it.

        is_resolved:
            Check whether the contents of this set have been resolved.

        count_total:
            Get the total number of entities, which may exceed the length of a limited set.

        append:
            Add an entity to this set.

        remove:
            Remove an entity from this set.

        get_ids:
            Get the ids of the entities in this set.

        to_data:
            Get the storage form of every entity in this set.

        json_serialize:
            Get the external form of every entity in this set.
    """

    def __init__(
        self,
        entity_class: Type[Entity],
        entities: Union[Iterable[Union[Entity, Mapping]], Callable[[], Iterable]] = (),
        total: Optional[Union[int, Callable[[], int]]] = None,
        flags: int = EntitySetFlags.NONE,
    ):
        """
        Initialize an `EntitySet`.

        Args:
            entity_class: The class of the entities in this set.
            entities: The entities (or mappings of stored values) of this set, or a
                zero-argument loader returning them.
            total: The total number of entities if this set is limited, or a callable
                returning it.
            flags: Flags controlling the behavior of this set.

        Raises:
            TypeError: If `entity_class` is not an `Entity` subclass.
        """
        if not (isinstance(entity_class, type) and issubclass(entity_class, Entity)):
            raise TypeError(f"{entity_class} is not an Entity class.")

        self.entity_class: Type[Entity] = entity_class
        self.flags: EntitySetFlags = EntitySetFlags(flags)
        self._entities: List[Entity] = []
        self._total = total
        self._loader: Optional[Callable[[], Iterable]] = None
        self._resolved: bool = True

        if callable(entities):
            self._loader = entities
            self._resolved = False
        elif self.flags & EntitySetFlags.LAZY:
            self._loader = lambda: entities
            self._resolved = False
        else:
            self._add_all(entities)

    @classmethod
    def for_class(
        cls,
        entity_class: Type[Entity],
        entities: Union[Iterable[Union[Entity, Mapping]], Callable[[], Iterable]] = (),
        total: Optional[Union[int, Callable[[], int]]] = None,
        flags: int = EntitySetFlags.NONE,
        **kwargs,
    ) -> "EntitySet":
        """
        Create an entity set for an entity class.

        Args:
            entity_class: The class of the entities in the set.
            entities: The entities of the set, or a loader returning them.
            total: The total number of entities, or a callable returning it.
            flags: Flags controlling the behavior of the set.
            **kwargs: Additional keyword arguments for subclasses of `EntitySet`.

        Returns:
            A new entity set.
        """
        return cls(entity_class, entities, total, flags, **kwargs)

    def __repr__(self) -> str:
        state = f"{len(self._entities)} entities" if self._resolved else "unresolved"
        return f"{self.__class__.__name__}({self.entity_class.__name__}, {state})"

    def _coerce(self, item: Union[Entity, Mapping]) -> Entity:
        """
        Turn an item into an entity of this set's entity class.

        Args:
            item: An entity, or a mapping of stored values.

        Returns:
            The entity.

        Raises:
            TypeError: If the item is not an instance of the entity class.
        """
        if isinstance(item, Mapping):
            return self.entity_class.from_data(item)
        if not isinstance(item, self.entity_class):
            raise TypeError(f"{type(item).__name__} is not a {self.entity_class.__name__} entity.")
        return item

    def _is_duplicate(self, entity: Entity) -> bool:
        """
        Check whether an entity is already in this set.

        Args:
            entity: The entity to check.

        Returns:
            True if the entity itself, or one with the same id, is already held.
        """
        entity_id = entity.get_id()
        for existing in self._entities:
            if existing is entity or (entity_id is not None and existing.get_id() == entity_id):
                return True
        return False

    def _add(self, item: Union[Entity, Mapping]):
        entity = self._coerce(item)
        if not self.flags & EntitySetFlags.ALLOW_DUPLICATES and self._is_duplicate(entity):
            LOG.debug(f"Skipping duplicate {entity.get_entity_type()} with id '{entity.get_id()}'.")
            return
        self._entities.append(entity)

    def _add_all(self, items: Iterable[Union[Entity, Mapping]]):
        for item in items:
            self._add(item)

    def is_resolved(self) -> bool:
        """
        Check whether the contents of this set have been resolved.

        Returns:
            True if the set holds its entities, False if a loader still has to run.
        """
        return self._resolved

    def expand(self):
        """
        Resolve the contents of this set, running its loader at most once, and
        expand every ghost entity it holds. Expanding again has no effect.
        """
        if not self._resolved:
            LOG.debug(f"Resolving entity set of {self.entity_class.get_entity_type()}...")
            self._add_all(self._loader())
            self._loader = None
            self._resolved = True

        for entity in self._entities:
            if isinstance(entity, LazyLoading):
                entity.expand()

    def count_total(self) -> int:
        """
        Get the total number of entities. For a limited set this is the `total`
        it was created with, which a callable only computes once.

        Returns:
            The total number of entities.
        """
        if self._total is None:
            return len(self)
        if callable(self._total):
            self._total = self._total()
        return self._total

    def __iter__(self) -> Iterator[Entity]:
        self.expand()
        return iter(list(self._entities))

    def __len__(self) -> int:
        self.expand()
        return len(self._entities)

    def __getitem__(self, index: int) -> Entity:
        self.expand()
        return self._entities[index]

    def __contains__(self, item: Any) -> bool:
        self.expand()
        if isinstance(item, Entity):
            return self._is_duplicate(item)
        return any(entity.get_id() == item for entity in self._entities)

    def append(self, item: Union[Entity, Mapping]):
        """
        Add an entity to this set. An unresolved set is resolved first.

        Args:
            item: An entity of this set's entity class, or a mapping of stored values.

        Raises:
            TypeError: If the item is not an instance of the entity class.
        """
        self.expand()
        self._add(item)

    def remove(self, entity: Entity):
        """
        Remove an entity from this set. The entity is matched by identity, so an
        equal copy held elsewhere is not removed in its place.

        Args:
            entity: The entity to remove.

        Raises:
            ValueError: If the entity is not in this set.
        """
        self.expand()
        for index, member in enumerate(self._entities):
            if member is entity:
                del self._entities[index]
                return
        raise ValueError(f"{entity!r} is not in this {self.__class__.__name__}.")

    def get_ids(self) -> List[Any]:
        """
        Get the ids of the entities in this set.

        Returns:
            A list of ids, in the order of the set.
        """
        return [entity.get_id() for entity in self]

    def to_data(self) -> List[Dict[str, Any]]:
        """
        Get the storage form of every entity in this set.

        Returns:
            A list of storage-form mappings.
        """
        return [entity.to_data() for entity in self]

    def json_serialize(self) -> List[Dict[str, Any]]:
        """
        Get the external form of every entity in this set.

        Returns:
            A list of external-form mappings.
        """
        return [entity.json_serialize() for entity in self]

    def __json__(self) -> List[Dict[str, Any]]:
        return self.json_serialize()
