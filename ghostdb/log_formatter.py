##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""This module handles setting up the logging system in ghostdb."""

import logging
import sys

import coloredlogs


FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s",
}


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Setup and configure Python logging.

    Args:
        logger: A logging.Logger object.
        log_level: Logger level.
        colors: If True use colored logs.
    """
    fmt = FORMATS["DEBUG"] if str(log_level).upper() == "DEBUG" else FORMATS["DEFAULT"]
    formatter = logging.Formatter(fmt)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors is True:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)


def setup_logging_from_config(logger: logging.Logger = None):
    """
    Setup logging with the `logging` section of the loaded configuration.

    Args:
        logger: The logger to configure. Defaults to the "ghostdb" logger.
    """
    from ghostdb.config import configfile  # pylint: disable=import-outside-toplevel
    from ghostdb.utils import get_yaml_var  # pylint: disable=import-outside-toplevel

    logging_config = configfile.CONFIG.logging if configfile.CONFIG is not None else None
    setup_logging(
        logger or logging.getLogger("ghostdb"),
        log_level=str(get_yaml_var(logging_config, "level", "INFO")).upper(),
        colors=bool(get_yaml_var(logging_config, "colors", True)),
    )
