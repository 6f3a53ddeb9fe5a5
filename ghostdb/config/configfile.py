##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
This module provides functionality for locating and loading the ghostdb
configuration file (`app.yaml`) and for filling in default settings.

It houses the `CONFIG` object that's used throughout ghostdb's codebase.
"""
import logging
import os
from typing import Dict, Optional

from ghostdb.config import Config
from ghostdb.config.config_filepaths import APP_FILENAME, CONFIG_PATH_FILE, DEFAULT_SQLITE_PATH, GHOSTDB_HOME
from ghostdb.utils import load_yaml, merge_dicts


LOG: logging.Logger = logging.getLogger(__name__)

CONFIG: Optional[Config] = None


def get_default_config() -> Dict:
    """
    Creates the default configuration used when no `app.yaml` can be found.

    Returns:
        A configuration dictionary with essential default values.
    """
    return {
        "backend": {
            "name": "memory",
            "path": DEFAULT_SQLITE_PATH,
            "server": "localhost",
            "port": 6379,
            "db_num": 0,
            "password": None,
            "key_prefix": "ghostdb",
        },
        "logging": {"level": "INFO", "colors": True},
    }


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a ghostdb YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath)


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the ghostdb application configuration file (`app.yaml`).

    Without a `path`, the search order is:
      1. `app.yaml` in the current working directory.
      2. The file named in `CONFIG_PATH_FILE`, if it exists.
      3. `app.yaml` in the `GHOSTDB_HOME` directory.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        if os.path.isfile(CONFIG_PATH_FILE):
            with open(CONFIG_PATH_FILE, "r") as f:
                config_path = f.read().strip()
            if os.path.isfile(config_path):
                return config_path

        path_app = os.path.join(GHOSTDB_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads a ghostdb configuration file, layering its values over the defaults.

    Args:
        path: The directory path to search for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A dictionary containing all the configuration data.
    """
    filepath = find_config_file(path)
    if filepath is None:
        LOG.debug("No ghostdb config file found. Using the default configuration.")
        return get_default_config()

    config = load_config(filepath) or {}
    if not isinstance(config, dict):
        raise ValueError(f"The configuration file '{filepath}' must contain a mapping at its top level.")

    defaults = get_default_config()
    for section in defaults:
        if section in config and config[section] is None:
            del config[section]
        elif section in config and not isinstance(config[section], dict):
            raise ValueError(f"The '{section}' section of '{filepath}' must be a mapping, got {config[section]!r}.")
    return merge_dicts(defaults, config)


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Initializes and returns the ghostdb configuration.

    Args:
        path: Path to look for configuration file.

    Returns:
        The initialized configuration object.
    """
    global CONFIG  # pylint: disable=global-statement

    try:
        CONFIG = Config(get_config(path))
    except ValueError as e:
        LOG.warning(f"Error loading configuration: {e}. Falling back to default configuration.")
        CONFIG = Config(get_default_config())

    return CONFIG


initialize_config()
