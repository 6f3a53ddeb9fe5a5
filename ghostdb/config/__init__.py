##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the settings defined in an `app.yaml` file and exposes
them through a single `Config` object.

Modules:
    config_filepaths.py: Constants for the file paths used while locating configuration.
    configfile.py: Handles locating, loading, and defaulting the application configuration.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from ghostdb.utils import nested_dict_to_namespaces


# Pylint complains that there's too few methods here but this class might
# be useful if we ever need to do extra stuff with the configuration so we'll
# ignore it for now
class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all ghostdb config settings in one place.

    Attributes:
        backend (Optional[SimpleNamespace]): A namespace containing store backend settings.
        logging (Optional[SimpleNamespace]): A namespace containing logging settings.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    sections: List[str] = ["backend", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The "backend" and "logging" keys are each converted into a `SimpleNamespace`.
        """
        self.backend: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied `backend` and `logging` attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({section: copy(self.__dict__[section]) for section in self.sections})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of each configuration section.
        """
        formatted_str = "config:"
        for name in self.sections:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for section in self.sections:
            try:
                setattr(self, section, nested_dict_to_namespaces(app_dict[section]))
            except KeyError:
                # The sections are optional
                pass
