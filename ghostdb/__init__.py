##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
ghostdb: entities that move between stored values, live objects and JSON.

This module contains the source code for ghostdb.
"""

__version__ = "0.3.0"
VERSION = __version__
