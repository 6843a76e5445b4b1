# -*- coding: utf-8 -*-
"""Checks of the external tools at startup"""

import logging
import re
import shlex
import subprocess

from .exceptions import EnvironmentException

#: Pattern for the version line of ``samtools --version``
PATTERN_SAMTOOLS_VERSION = re.compile(r"^samtools\s+([0-9]+(?:\.[0-9]+)*)")

#: The logger to use.
logger = logging.getLogger(__name__)


def parse_version(version):
    """Parse ``"1.10.2"`` into ``(1, 10, 2)``"""
    return tuple(int(x) for x in version.split("."))


def get_samtools_version(samtools="samtools"):
    """Return version string as reported by ``samtools --version``"""
    args = shlex.split(samtools) + ["--version"]
    try:
        proc = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as e:
        raise EnvironmentException("Could not run {}: {}".format(shlex.join(args), e)) from e
    m = PATTERN_SAMTOOLS_VERSION.match(proc.stdout)
    if proc.returncode != 0 or not m:
        raise EnvironmentException(
            "Could not determine samtools version from {}, samtools < 1.0?".format(
                shlex.join(args)
            )
        )
    return m.group(1)


def check_samtools_version(samtools="samtools", min_version="1.3"):
    """Raise :py:class:`EnvironmentException` if samtools is older than ``min_version``"""
    version = get_samtools_version(samtools)
    if parse_version(version) < parse_version(min_version):
        raise EnvironmentException(
            "samtools version {} found but at least {} is required".format(version, min_version)
        )
    logger.info("Using samtools version %s", version)
    return version
