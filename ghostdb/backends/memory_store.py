##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
In-memory store, keeping the storage form of each entity in a dictionary.

Useful for tests and for short-lived processes that don't need persistence.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, Generic, List, Optional, Type

from ghostdb.backends.store_base import StoreBase, T
from ghostdb.exceptions import EntityNotFoundError


LOG = logging.getLogger(__name__)


class MemoryStore(StoreBase[T], Generic[T]):
    """
    A store that keeps stored values in memory. Values are copied on the way in
    and out so that stored data can't be changed through a live entity.
    """

    def __init__(self, model_class: Type[T]):
        super().__init__(model_class)
        self._records: Dict[Any, Dict[str, Any]] = {}

    def save(self, entity: T):
        entity_id = self._get_entity_id(entity)
        action = "Updating" if entity_id in self._records else "Creating"
        LOG.debug(f"{action} {self.entity_type} with id '{entity_id}' in memory...")
        self._records[entity_id] = deepcopy(entity.to_data())

    def retrieve_data(self, identifier: Any) -> Optional[Dict[str, Any]]:
        data = self._records.get(identifier)
        return deepcopy(data) if data is not None else None

    def retrieve_all(self) -> List[T]:
        return [self.model_class.from_data(deepcopy(data)) for data in self._records.values()]

    def delete(self, identifier: Any):
        if identifier not in self._records:
            raise EntityNotFoundError(f"{self.entity_type.capitalize()} with id '{identifier}' does not exist.")
        del self._records[identifier]
        LOG.info(f"Successfully deleted {self.entity_type} '{identifier}' from memory.")
