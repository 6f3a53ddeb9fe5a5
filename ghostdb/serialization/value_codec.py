##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Codec for storing entity values in stores that only hold strings.

Each value of a storage-form mapping is encoded on its own as JSON text, so a
Redis hash or a text column can hold it. Types that JSON cannot represent are
wrapped in marker objects and restored on the way back:

- `set` and `frozenset` become `{"__set__": [...]}`
- `datetime` becomes `{"__datetime__": "<ISO 8601>"}`
- `date` becomes `{"__date__": "<ISO 8601>"}`
- `Enum` members are stored as their value
"""

import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping


LOG = logging.getLogger(__name__)


def _encode_marker(value: Any) -> Any:
    """
    `default` hook for `json.dumps` that wraps non-JSON types in marker objects.

    Args:
        value: The value that `json` could not encode.

    Returns:
        A JSON-compatible replacement for `value`.

    Raises:
        TypeError: If the value has no known encoding.
    """
    if isinstance(value, (set, frozenset)):
        return {"__set__": list(value)}
    if isinstance(value, datetime):
        return {"__datetime__": value.isoformat()}
    if isinstance(value, date):
        return {"__date__": value.isoformat()}
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} cannot be stored as a value.")


def _decode_marker(dct: Dict) -> Any:
    """
    `object_hook` for `json.loads` that restores marker objects.

    Args:
        dct: A decoded JSON object.

    Returns:
        The restored value, or `dct` itself when it is not a marker.
    """
    if len(dct) == 1:
        if "__set__" in dct:
            return set(dct["__set__"])
        if "__datetime__" in dct:
            return datetime.fromisoformat(dct["__datetime__"])
        if "__date__" in dct:
            return date.fromisoformat(dct["__date__"])
    return dct


def encode_value(value: Any) -> str:
    """
    Encode a single storage-form value as text.

    Args:
        value: The value to encode.

    Returns:
        The JSON text for `value`.
    """
    return json.dumps(value, default=_encode_marker)


def decode_value(text: str) -> Any:
    """
    Decode text produced by [`encode_value`][serialization.value_codec.encode_value].

    Args:
        text: The encoded value. Bytes are decoded as UTF-8 first.

    Returns:
        The restored value.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    return json.loads(text, object_hook=_decode_marker)


def serialize_values(values: Mapping[str, Any]) -> Dict[str, str]:
    """
    Given the storage form of an entity, convert each value into text that a
    store can hold.

    Args:
        values: A mapping of field names to storage-form values.

    Returns:
        A dictionary of field names to encoded values, in the same order.
    """
    LOG.debug("Serializing values...")
    serialized = {key: encode_value(value) for key, value in values.items()}
    LOG.debug("Successfully serialized values.")
    return serialized


def deserialize_values(data: Mapping[Any, Any]) -> Dict[str, Any]:
    """
    Given values retrieved from a store, convert them back into Python values.

    Args:
        data: A mapping of field names to encoded values. Bytes keys and values
            (as returned by a Redis client without `decode_responses`) are accepted.

    Returns:
        A dictionary of field names to decoded values.
    """
    LOG.debug("Deserializing values...")
    deserialized = {}
    for key, text in data.items():
        if isinstance(key, bytes):
            key = key.decode("utf-8")
        deserialized[key] = decode_value(text)
    LOG.debug("Successfully deserialized values.")
    return deserialized
