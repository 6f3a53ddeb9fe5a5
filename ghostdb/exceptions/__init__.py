##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Module of all ghostdb-specific exception types.
"""

# Pylint complains that these exceptions are no different from Exception
# but we don't care, we just need new names for exceptions here
# pylint: disable=W0235

__all__ = (
    "GhostDBError",
    "EntityNotFoundError",
    "StoreNotSupportedError",
    "EntitySetNotSupportedError",
)


class GhostDBError(Exception):
    """
    Base class for every exception raised by ghostdb collaborators.
    """


class EntityNotFoundError(GhostDBError):
    """
    Exception to signal that a stored record for an entity does not exist.
    """

    def __init__(self, message):
        super().__init__(message)


class StoreNotSupportedError(GhostDBError):
    """
    Exception to signal that the provided store backend is not supported.
    """

    def __init__(self, message):
        super().__init__(message)


class EntitySetNotSupportedError(GhostDBError):
    """
    Exception to signal that the requested entity set class is not registered.
    """

    def __init__(self, message):
        super().__init__(message)
