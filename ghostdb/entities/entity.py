##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
This module defines the `Entity` base class, which binds an entity's fields to the
plain value mappings used by stores and by external (JSON) consumers.

An entity type is a dataclass that subclasses `Entity`. Its dataclass fields are its
modeled fields, in declaration order. A field is internal when its name starts with
the reserved prefix `_` or when it is declared with
[`internal_field`][entities.entity.internal_field]; internal fields are never read or
written by the bulk operations `set_values` and `get_values`, and never appear in
`to_data` or `json_serialize` output.

Example:
    ```python
    @dataclass
    class User(Entity):
        id: int = None
        name: str = None
        password_hash: str = internal_field(default=None)
        created: datetime = field(default_factory=datetime.now)

    user = User.from_data({"id": 1, "name": "arnold", "password_hash": "..."})
    user.get_values()  # {"id": 1, "name": "arnold", "created": ...}
    ```
"""

import json
import logging
import os
import warnings
from dataclasses import MISSING, Field, dataclass, field
from dataclasses import fields as dataclass_fields
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from filelock import FileLock

from ghostdb.entities.capabilities import Data, DeferredCollection, Dynamic, LazyLoading
from ghostdb.serialization import deserialize_values, dumps, serialize_values


LOG = logging.getLogger(__name__)
E = TypeVar("E", bound="Entity")

INTERNAL_PREFIX = "_"
INTERNAL_METADATA_KEY = "internal"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def internal_field(**kwargs) -> Field:
    """
    Declare a dataclass field that belongs to the internal tier.

    Internal fields can be restored by `Entity.from_data` but are skipped by
    `set_values`, `get_values`, `to_data`, and `json_serialize`.

    Args:
        **kwargs: Keyword arguments passed along to `dataclasses.field`.

    Returns:
        A dataclass field marked as internal.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[INTERNAL_METADATA_KEY] = True
    kwargs.setdefault("repr", False)
    return field(metadata=metadata, **kwargs)


def format_datetime(value: datetime) -> str:
    """
    Format a datetime as ISO 8601 with its UTC offset (e.g. `2024-05-01T13:45:00+0200`).
    Naive datetimes are treated as UTC.

    Args:
        value: The datetime to format.

    Returns:
        The formatted datetime.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime(DATETIME_FORMAT)


def _iter_items(values: Union[Mapping[str, Any], Any]) -> Iterable[Tuple[str, Any]]:
    """
    Iterate the key/value pairs of a mapping, an entity, or a plain object.

    Args:
        values: A mapping, an `Entity`, or an object whose public attributes are used.

    Returns:
        An iterable of `(key, value)` tuples.
    """
    if isinstance(values, Entity):
        return values.get_values().items()
    if isinstance(values, Mapping):
        return values.items()
    return ((key, val) for key, val in vars(values).items() if not key.startswith(INTERNAL_PREFIX))


@dataclass
class Entity(Data):
    """
    Base class for entities that move between stored values, live objects, and
    their external representation.

    Subclasses must be decorated with `@dataclass`. They may define `__post_init__`
    to derive state from their fields; `from_data` calls it once, after every
    stored value has been assigned.

    Attributes:
        id_field (ClassVar[str]): The name of the field holding the entity's identifier.

    Methods:
        get_entity_type:
            (classmethod) Get the type name used by stores and entity set factories.

        get_class_fields:
            (classmethod) Get the dataclass fields declared by this entity type.

        is_internal:
            (classmethod) Check whether a field name belongs to the internal tier.

        get_id:
            Get the identifier of this entity.

        set_values:
            Bulk-assign values onto this entity, leaving internal fields untouched.

        get_values:
            Get the values of all non-internal fields, expanding a ghost first.

        from_data:
            (classmethod) Reconstruct an entity from stored values.

        to_data:
            Get the values of this entity in a form ready to be stored.

        json_serialize:
            Get the values of this entity in a form ready to be encoded as JSON.

        json_serialize_filter:
            Hook for entity types to redact or rename values of the external form.

        to_json:
            Encode the external form of this entity as a JSON string.

        dump_to_json_file:
            Write the storage form of this entity to a JSON file.

        load_from_json_file:
            (classmethod) Reconstruct an entity from a JSON file.

        entity_set:
            (classmethod, deprecated) Create an entity set for this entity type.
    """

    id_field: ClassVar[str] = "id"

    @classmethod
    def get_entity_type(cls) -> str:
        """
        Get the type name of this entity. Can be overridden by subclasses.

        Returns:
            The lowercased class name.
        """
        return cls.__name__.lower()

    @classmethod
    def get_class_fields(cls) -> Tuple[Field, ...]:
        """
        Get the fields declared by this entity type, in declaration order.

        Returns:
            A tuple of `dataclasses.Field` objects.
        """
        return dataclass_fields(cls)

    @classmethod
    def _declared_fields(cls) -> Dict[str, Field]:
        """
        Map each declared field name to its `dataclasses.Field`.

        Returns:
            A dictionary of declared fields, in declaration order.
        """
        return {declared.name: declared for declared in cls.get_class_fields()}

    @classmethod
    def is_internal(cls, name: str) -> bool:
        """
        Check whether a field name belongs to the internal tier.

        Args:
            name: The name of the field.

        Returns:
            True if the name starts with the internal prefix or the declared field
            is marked as internal, False otherwise.
        """
        if name.startswith(INTERNAL_PREFIX):
            return True
        declared = cls._declared_fields().get(name)
        return declared is not None and declared.metadata.get(INTERNAL_METADATA_KEY, False)

    def get_id(self) -> Any:
        """
        Get the identifier of this entity.

        Returns:
            The value of the `id_field` field, or None if it isn't set.
        """
        return getattr(self, self.id_field, None)

    def set_values(self: E, values: Union[Mapping[str, Any], Any]) -> E:
        """
        Assign each value to the field of the same name. Internal fields are left
        untouched; any other key is assigned, including keys this type does not
        declare. No validation is performed here.

        Args:
            values: A mapping, an entity, or an object whose public attributes are used.

        Returns:
            This entity, to allow chaining.
        """
        for key, value in _iter_items(values):
            if self.is_internal(key):
                LOG.debug(f"Not setting internal field '{key}' on {self.get_entity_type()}.")
                continue
            setattr(self, key, value)

        return self

    def get_values(self) -> Dict[str, Any]:
        """
        Get the values of every non-internal field of this entity. A ghost entity
        is expanded before its values are read.

        Returns:
            A new dictionary with declared fields in declaration order, followed by
            any dynamic fields in the order they were assigned.
        """
        if isinstance(self, LazyLoading) and self.is_ghost():
            LOG.debug(f"Expanding ghost {self.get_entity_type()} '{self.get_id()}' before reading its values.")
            self.expand()

        instance_values = vars(self)
        values = {}

        for name in self._declared_fields():
            if name in instance_values and not self.is_internal(name):
                values[name] = instance_values[name]

        for name, value in instance_values.items():
            if name not in values and not self.is_internal(name):
                values[name] = value

        return values

    @classmethod
    def _allocate(cls: Type[E]) -> E:
        """
        Create an instance without running `__init__` and give each declared field
        its declared default. Fields without a default are set to None.

        Returns:
            A new, unpopulated instance of this entity type.
        """
        entity = cls.__new__(cls)
        for declared in cls.get_class_fields():
            if declared.default is not MISSING:
                value = declared.default
            elif declared.default_factory is not MISSING:
                value = declared.default_factory()
            else:
                value = None
            setattr(entity, declared.name, value)
        return entity

    def _assign_stored_values(self, values: Union[Mapping[str, Any], Any]):
        """
        Assign stored values to this entity. Declared fields are always assigned,
        internal ones included. An undeclared key is only kept when this type is
        `Dynamic` and the key does not start with the internal prefix; otherwise
        it is skipped without error.

        Args:
            values: A mapping, an entity, or an object whose public attributes are used.
        """
        declared = self._declared_fields()
        dynamic = isinstance(self, Dynamic)

        for key, value in _iter_items(values):
            if key not in declared and (key.startswith(INTERNAL_PREFIX) or not dynamic):
                LOG.debug(f"Skipping unknown key '{key}' for {self.get_entity_type()}.")
                continue
            setattr(self, key, value)

    def _initialize(self):
        """
        Run the type's `__post_init__` hook, if it defines one, with no arguments.
        """
        post_init = getattr(self, "__post_init__", None)
        if post_init is not None:
            post_init()

    @classmethod
    def from_data(cls: Type[E], values: Union[Mapping[str, Any], Any]) -> E:
        """
        Reconstruct an entity from stored values.

        The instance is allocated without running `__init__`, every assignable
        value is applied, and only then is `__post_init__` (if defined) called,
        exactly once.

        Args:
            values: The stored values, typically the output of `to_data`.

        Returns:
            A fully materialized instance of this entity type.
        """
        entity = cls._allocate()
        entity._assign_stored_values(values)  # pylint: disable=protected-access
        entity._initialize()  # pylint: disable=protected-access
        return entity

    def to_data(self) -> Dict[str, Any]:
        """
        Get the values of this entity in the form they are stored in. Every value
        that is itself a structured value (`Data`, nested entities included) is
        replaced by its own storage form. Dynamic fields are converted the same way
        as declared ones.

        Returns:
            A dictionary of field names to storage-form values.
        """
        values = self.get_values()

        for key, value in values.items():
            if isinstance(value, Data):
                values[key] = value.to_data()

        return values

    def json_serialize(self) -> Dict[str, Any]:
        """
        Prepare this entity for JSON encoding.

        Datetimes are formatted as ISO 8601 with offset and deferred collections
        are resolved. The result is passed through `json_serialize_filter`.

        Returns:
            The external form of this entity.
        """
        values = self.get_values()

        for key, value in values.items():
            if isinstance(value, datetime):
                values[key] = format_datetime(value)
            elif isinstance(value, DeferredCollection):
                value.expand()

        return self.json_serialize_filter(values)

    def json_serialize_filter(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Filter the external form of this entity. Override this to redact or
        rename values.

        Args:
            values: The converted values of this entity.

        Returns:
            The values to expose.
        """
        return values

    def __json__(self) -> Dict[str, Any]:
        return self.json_serialize()

    def to_json(self, **kwargs) -> str:
        """
        Encode the external form of this entity as a JSON string.

        Args:
            **kwargs: Extra keyword arguments passed along to `json.dumps`.

        Returns:
            The entity as a JSON string.
        """
        return dumps(self, **kwargs)

    def dump_to_json_file(self, filepath: str):
        """
        Dump the storage form of this entity to a JSON file.

        Args:
            filepath: The path to the JSON file where the data will be written.

        Raises:
            ValueError: If the `filepath` is not provided.
        """
        if not filepath:
            raise ValueError("A valid file path must be provided.")

        dirname = os.path.dirname(filepath)
        if dirname:
            os.makedirs(dirname, exist_ok=True)

        lock_file = f"{filepath}.lock"
        with FileLock(lock_file):  # pylint: disable=abstract-class-instantiated
            temp_filepath = f"{filepath}.tmp"  # Use a temporary file for atomic writes
            with open(temp_filepath, "w") as json_file:
                json.dump(serialize_values(self.to_data()), json_file, indent=4)
            os.replace(temp_filepath, filepath)

        LOG.debug(f"Data successfully dumped to {filepath}.")

    @classmethod
    def load_from_json_file(cls: Type[E], filepath: str) -> E:
        """
        Reconstruct an entity from a JSON file written by `dump_to_json_file`.

        Args:
            filepath: The path to the JSON file where the data is located.

        Returns:
            An instance of this entity type.

        Raises:
            ValueError: If the `filepath` is not provided or does not exist.
        """
        if not filepath or not os.path.exists(filepath):
            raise ValueError("A valid file path must be provided.")

        lock_file = f"{filepath}.lock"
        with FileLock(lock_file):  # pylint: disable=abstract-class-instantiated
            with open(filepath, "r") as json_file:
                data = json.load(json_file)

        return cls.from_data(deserialize_values(data))

    @classmethod
    def entity_set(
        cls, entities: Union[Iterable["Entity"], Any] = (), total: Optional[Any] = None, flags: int = 0, **kwargs
    ):
        """
        Create an entity set for this entity type.

        Deprecated: use `entity_set_factory.get_class(EntityType).for_class(...)` instead.

        Args:
            entities: The entities of the set, or a loader returning them.
            total: The total number of entities if the set is limited, or a callable returning it.
            flags: [`EntitySetFlags`][entity_sets.entity_set.EntitySetFlags] controlling the set.
            **kwargs: Additional keyword arguments passed to the entity set.

        Returns:
            An [`EntitySet`][entity_sets.entity_set.EntitySet] for this entity type.
        """
        warnings.warn(
            "`Entity.entity_set` is deprecated. Use `entity_set_factory.get_class(...).for_class(...)` instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        from ghostdb.entity_sets.entity_set_factory import (  # pylint: disable=import-outside-toplevel
            entity_set_factory,
        )

        entity_set_class = entity_set_factory.get_class(cls)
        return entity_set_class.for_class(cls, entities, total, flags, **kwargs)
