##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
The `abstracts` package contains abstract base classes shared across ghostdb.

Modules:
    factory.py: Defines [`GhostBaseFactory`][abstracts.factory.GhostBaseFactory], the base
        class for registries of pluggable components such as stores and entity sets.
"""

from ghostdb.abstracts.factory import GhostBaseFactory


__all__ = ["GhostBaseFactory"]
