##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
ghostdb's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
GHOSTDB_HOME: str = os.path.join(USER_HOME, ".ghostdb")
CONFIG_PATH_FILE: str = os.path.join(GHOSTDB_HOME, "config_path.txt")
DEFAULT_SQLITE_PATH: str = os.path.join(GHOSTDB_HOME, "ghostdb.db")
