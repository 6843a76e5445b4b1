# -*- coding: utf-8 -*-
"""Sanity check of the pileup against the reference

``samtools mpileup`` writes ``N`` as the reference base if the contig names of the alignments do
not match those of the reference FASTA file.
"""

import itertools
import logging

from .exceptions import SanityCheckException


#: Default number of pileup lines to look at
DEFAULT_NUM_LINES = 100000
#: Default placeholder reference base
DEFAULT_PLACEHOLDER = "N"

#: 0-based index of the reference base column in the pileup
COL_REF_BASE = 2

#: The logger to use.
logger = logging.getLogger(__name__)


def check_pileup(path, num_lines=DEFAULT_NUM_LINES, placeholder=DEFAULT_PLACEHOLDER):
    """Raise :py:class:`SanityCheckException` if all of the first ``num_lines`` lines of the
    pileup at ``path`` have the placeholder reference base
    """
    with open(path, "rt") as inputf:
        for line in itertools.islice(inputf, num_lines):
            fields = line.rstrip("\n").split("\t")
            if len(fields) <= COL_REF_BASE or fields[COL_REF_BASE] != placeholder:
                logger.debug("Pileup sanity check passed for %s", path)
                return
    raise SanityCheckException(
        (
            "All reference bases in the first {num_lines} lines of {path} are '{placeholder}', "
            "do the contig names of the reference and the alignments match?"
        ).format(num_lines=num_lines, path=path, placeholder=placeholder)
    )
