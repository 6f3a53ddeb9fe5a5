##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
JSON encoding for the external form of entities.

Objects that define a `__json__` method (entities and entity sets) are reduced
through it; everything else falls back to kombu's encoder, which already knows
how to handle values such as `UUID` and `Decimal`.
"""

import json
from typing import Any

from kombu.utils.json import JSONEncoder as kombu_JSONEncoder


class EntityJSONEncoder(kombu_JSONEncoder):
    """
    Encode entities, entity sets, and their values into a JSON string.
    """

    def default(self, o: Any) -> Any:
        reducer = getattr(o, "__json__", None)
        if reducer is not None:
            return reducer()
        return super().default(o)


def dumps(obj: Any, **kwargs) -> str:
    """
    Encode `obj` as JSON using the [`EntityJSONEncoder`][serialization.json_encoder.EntityJSONEncoder].

    Args:
        obj: The object to encode. Entities are encoded through their external form.
        **kwargs: Extra keyword arguments passed along to `json.dumps`.

    Returns:
        The JSON string.
    """
    return json.dumps(obj, cls=EntityJSONEncoder, **kwargs)
