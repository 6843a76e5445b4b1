# -*- coding: utf-8 -*-
"""Removal of the chromosome arm annotation after segmentation

The annotation itself is added by ``varscan-cnv-arm_split`` (see
:py:mod:`varscan_cnv_wrappers.tools.arm_split`) such that each arm is segmented separately.
"""

import re


#: Chromosome field with arm suffix at the start of a line
PATTERN_ARM = re.compile(r"^([^\t]+)\.[pq](?=\t)")


def merge_line(line):
    """Strip ``.p``/``.q`` suffix from the chromosome field of ``line``"""
    return PATTERN_ARM.sub(r"\1", line, count=1)


def merge_lines(lines):
    """Yield lines with the arm suffix removed, keeping the order"""
    for line in lines:
        yield merge_line(line)
