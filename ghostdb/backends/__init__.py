##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
The `backends` package contains the stores that persist entities.

Modules:
    store_base.py: Defines [`StoreBase`][backends.store_base.StoreBase], the interface
        every store implements.
    memory_store.py: An in-memory store.
    redis_store.py: A store keeping each entity in a Redis hash.
    sqlite_connection.py: A context manager for SQLite connections.
    sqlite_store.py: A store keeping each entity type in a SQLite table.
    store_factory.py: Defines the [`StoreFactory`][backends.store_factory.StoreFactory]
        and `get_store`, which builds a store from the loaded configuration.
"""
