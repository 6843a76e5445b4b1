# -*- coding: utf-8 -*-
"""Helper code for logging"""

import logging
import sys

from termcolor import colored


#: Message level: ERROR
LVL_ERROR = "ERROR"

#: Message level: INFO
LVL_INFO = "INFO"

#: Message level: IMPORTANT
LVL_IMPORTANT = "IMPORTANT"

#: Message level: SUCCESS
LVL_SUCCESS = "SUCCESS"

#: Colors and attributes of the level prefixes
PREFIX_STYLES = {
    LVL_ERROR: ("red", ["bold"]),
    LVL_INFO: ("yellow", ["bold"]),
    LVL_SUCCESS: ("green", ["bold"]),
}


def log(msg, args=None, level=None, file=None):
    """Print log message for given levels of importance to ``file`` (default: stderr)

    For LVL_ERROR, LVL_INFO, LVL_SUCCESS, the message will be prefixed with a colored keyword
    identifying the level.  For IMPORTANT, the message itself will be colored.
    """
    args = args or {}
    file = file or sys.stderr
    if level == LVL_IMPORTANT:
        print(colored(msg.format(**args), "yellow"), file=file)
    else:
        if level in PREFIX_STYLES:
            color, attrs = PREFIX_STYLES[level]
            prefix = colored("{}: ".format(level), color, attrs=attrs)
        else:
            prefix = ""
        print(prefix, msg.format(**args), sep="", file=file)


def setup_logging(verbose=False):
    """Setup root logger, writing to stderr"""
    logging.basicConfig(
        format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s", datefmt="%m-%d %H:%M"
    )
    logger = logging.getLogger("")
    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)
