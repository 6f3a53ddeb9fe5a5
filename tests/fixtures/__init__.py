##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Fixture modules, kept out of `conftest.py` so that fixtures live next to the
area of ghostdb they support. Every module in this directory is registered as
a pytest plugin by `tests/conftest.py`.
"""
