##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Store factory for selecting and instantiating stores in ghostdb.

This module defines the `StoreFactory` class, which manages the available store
implementations, and `get_store`, which builds a store for an entity class from
the `backend` section of the loaded configuration.
"""

import logging
import os
from types import SimpleNamespace
from typing import Dict, Type

from redis import Redis

from ghostdb.abstracts import GhostBaseFactory
from ghostdb.backends.memory_store import MemoryStore
from ghostdb.backends.redis_store import RedisStore
from ghostdb.backends.sqlite_store import SQLiteStore
from ghostdb.backends.store_base import StoreBase
from ghostdb.config import configfile
from ghostdb.config.config_filepaths import DEFAULT_SQLITE_PATH
from ghostdb.entities.entity import Entity
from ghostdb.exceptions import StoreNotSupportedError
from ghostdb.utils import get_yaml_var


LOG = logging.getLogger(__name__)


class StoreFactory(GhostBaseFactory):
    """
    Factory for the stores ghostdb can persist entities in. Stores are looked up
    by backend name, the value of `backend.name` in the configuration.
    """

    component_base = StoreBase
    entry_point_group = "ghostdb.stores"
    not_found_error = StoreNotSupportedError

    def _register_builtins(self):
        self.register("memory", MemoryStore)
        self.register("redis", RedisStore, aliases=["rediss"])
        self.register("sqlite", SQLiteStore)


store_factory = StoreFactory()


def _build_store_kwargs(backend_name: str, model_class: Type[Entity], backend_config: SimpleNamespace) -> Dict:
    """
    Build the keyword arguments a built-in store needs from the backend configuration.

    Args:
        backend_name: The canonical name of the store.
        model_class: The entity class the store will hold.
        backend_config: The `backend` section of the configuration.

    Returns:
        The keyword arguments for the store's constructor.
    """
    store_kwargs = {"model_class": model_class}

    if backend_name == "sqlite":
        db_path = get_yaml_var(backend_config, "path", DEFAULT_SQLITE_PATH)
        store_kwargs["db_path"] = os.path.expanduser(db_path)
    elif backend_name == "redis":
        store_kwargs["client"] = Redis(
            host=get_yaml_var(backend_config, "server", "localhost"),
            port=int(get_yaml_var(backend_config, "port", 6379)),
            db=int(get_yaml_var(backend_config, "db_num", 0)),
            password=get_yaml_var(backend_config, "password", None),
            decode_responses=True,
        )
        prefix = get_yaml_var(backend_config, "key_prefix", None)
        if prefix:
            store_kwargs["key"] = f"{prefix}:{model_class.get_entity_type()}"

    return store_kwargs


def get_store(model_class: Type[Entity], backend_name: str = None) -> StoreBase:
    """
    Create a store for an entity class using the loaded configuration.

    Args:
        model_class: The entity class the store will hold.
        backend_name: The name of the store to use. Defaults to `backend.name` from
            the configuration.

    Returns:
        A store for `model_class`.

    Raises:
        (exceptions.StoreNotSupportedError): If the store name is not registered.
    """
    backend_config = configfile.CONFIG.backend if configfile.CONFIG is not None else None
    if backend_name is None:
        backend_name = get_yaml_var(backend_config, "name", "memory")

    canonical_name = store_factory.canonical_name(backend_name)
    LOG.debug(f"Creating a '{canonical_name}' store for {model_class.get_entity_type()}.")
    return store_factory.create(canonical_name, **_build_store_kwargs(canonical_name, model_class, backend_config))
