##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
The `serialization` package converts entity values to and from text.

Modules:
    json_encoder.py: A JSON encoder that understands entities and entity sets, used
        to encode the external form of an entity.
    value_codec.py: Encodes storage-form values into flat string mappings for stores
        that can only hold text, and decodes them again.
"""

from ghostdb.serialization.json_encoder import EntityJSONEncoder, dumps
from ghostdb.serialization.value_codec import decode_value, deserialize_values, encode_value, serialize_values


__all__ = [
    "EntityJSONEncoder",
    "decode_value",
    "deserialize_values",
    "dumps",
    "encode_value",
    "serialize_values",
]
