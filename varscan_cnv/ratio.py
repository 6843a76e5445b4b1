# -*- coding: utf-8 -*-
"""Computation of the control/tumor data ratio from ``samtools flagstat`` reports

VarScan ``copynumber`` uses the ratio to normalize for unequal sequencing depth of the two
samples.
"""

import decimal
import re

from .artifacts import is_valid
from .exceptions import StageFailure


#: Number of decimal places of the ratio
RATIO_PLACES = decimal.Decimal("0.01")

#: Pattern for the leading count of a flagstat line
PATTERN_COUNT = re.compile(r"^\s*([0-9]+)")


def parse_mapped_count(path):
    """Return the leading count of the first line containing ``mapped`` in the flagstat report"""
    with open(path, "rt") as inputf:
        for line in inputf:
            if "mapped" not in line:
                continue
            m = PATTERN_COUNT.match(line)
            if not m:
                raise StageFailure("Could not parse mapped read count from {}".format(path))
            return int(m.group(1))
    raise StageFailure("No mapped read count found in {}".format(path))


def compute_data_ratio(control_flagstat, tumor_flagstat):
    """Return control/tumor ratio of mapped reads, truncated to two decimal places

    Truncation (rather than rounding) matches what ``bc`` does with ``scale=2``.
    """
    for path in (control_flagstat, tumor_flagstat):
        if not is_valid(path):
            raise StageFailure("Flagstat report {} is missing or corrupt".format(path))
    control = parse_mapped_count(control_flagstat)
    tumor = parse_mapped_count(tumor_flagstat)
    if tumor == 0:
        raise StageFailure("No mapped reads in tumor sample ({})".format(tumor_flagstat))
    ratio = decimal.Decimal(control) / decimal.Decimal(tumor)
    return ratio.quantize(RATIO_PLACES, rounding=decimal.ROUND_DOWN)
