# -*- coding: utf-8 -*-
"""Filtering of VarScan ``copynumber`` output by read depth"""

import csv
import logging

from .exceptions import StageFailure


#: Default minimal tumor depth
DEFAULT_MIN_TUMOR_DEPTH = 10
#: Default minimal control depth
DEFAULT_MIN_CONTROL_DEPTH = 20

#: 0-based index of the control (normal) depth column
COL_CONTROL_DEPTH = 4
#: 0-based index of the tumor depth column
COL_TUMOR_DEPTH = 5

#: The logger to use.
logger = logging.getLogger(__name__)


def passes_coverage(
    record, min_tumor_depth=DEFAULT_MIN_TUMOR_DEPTH, min_control_depth=DEFAULT_MIN_CONTROL_DEPTH
):
    """Return whether the copy number ``record`` (list of fields) has sufficient depth"""
    try:
        tumor_depth = float(record[COL_TUMOR_DEPTH])
        control_depth = float(record[COL_CONTROL_DEPTH])
    except (IndexError, ValueError) as e:
        raise StageFailure("Unexpected copy number record {}".format(record)) from e
    return tumor_depth >= min_tumor_depth and control_depth >= min_control_depth


def filter_coverage(
    input_path,
    output_path,
    min_tumor_depth=DEFAULT_MIN_TUMOR_DEPTH,
    min_control_depth=DEFAULT_MIN_CONTROL_DEPTH,
):
    """Write records of ``input_path`` with sufficient depth to ``output_path``

    The header line is always kept.
    """
    kept, total = 0, 0
    with open(input_path, "rt", newline="") as inputf, open(output_path, "wt", newline="") as outf:
        reader = csv.reader(inputf, delimiter="\t")
        writer = csv.writer(outf, delimiter="\t", lineterminator="\n")
        for record in reader:
            if not record:
                continue
            if record[0] == "chrom":
                writer.writerow(record)
                continue
            total += 1
            if passes_coverage(record, min_tumor_depth, min_control_depth):
                writer.writerow(record)
                kept += 1
    logger.info("Kept %d of %d copy number records with sufficient coverage", kept, total)
