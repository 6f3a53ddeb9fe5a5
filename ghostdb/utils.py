##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Module for project-wide utility functions.
"""
import logging
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict

import yaml


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def merge_dicts(base: Dict, overrides: Dict) -> Dict:
    """
    Recursively merge `overrides` into a copy of `base`.

    Nested dictionaries are merged key by key; any other value in `overrides`
    replaces the value found in `base`.

    Args:
        base: The dictionary providing default values.
        overrides: The dictionary whose values take precedence.

    Returns:
        A new dictionary holding the merged values.
    """
    merged = deepcopy(base)
    for key, val in (overrides or {}).items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_dicts(merged[key], val)
        else:
            merged[key] = val
    return merged


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def get_yaml_var(entry: Any, var: str, default: Any) -> Any:
    """
    Retrieve the value associated with a specified key from a YAML dictionary
    or namespace, falling back to `default` when it is missing.

    Args:
        entry: A dictionary or namespace representing the contents of a YAML file.
        var: The key or attribute name to retrieve from the entry.
        default: The value returned when `var` is not found.

    Returns:
        The value associated with `var`, or `default`.
    """
    try:
        return entry[var]
    except (TypeError, KeyError):
        try:
            return getattr(entry, var)
        except AttributeError:
            return default
