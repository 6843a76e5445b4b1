#!/usr/bin/env python3
"""Print median log2 ratio of VarScan copyCaller output

The value is used for deciding on recentering the calls.

Usage::

    $ varscan-cnv-median_log_ratio IN.called
    -0.23
"""

import argparse
import csv
import decimal
import statistics
import sys


#: 0-based index of the (adjusted) log ratio column
COL_LOG_RATIO = 6

#: Number of decimal places to print
PLACES = decimal.Decimal("0.0001")


def median_log_ratio(segment_file):
    """Return median log ratio of the records in ``segment_file`` as ``Decimal``

    The value is not rounded, so it can be compared against the recentering threshold.
    """
    values = []
    for record in csv.reader(segment_file, delimiter="\t"):
        if not record or record[0] == "chrom" or record[0].startswith("#"):
            continue
        try:
            values.append(decimal.Decimal(record[COL_LOG_RATIO]))
        except (IndexError, decimal.InvalidOperation) as e:
            raise ValueError("Invalid segment record {}".format(record)) from e
    if not values:
        raise ValueError("No segments to compute median log ratio from")
    return decimal.Decimal(statistics.median(values))


def format_median(value):
    """Return ``value`` with a fixed number of decimal places for printing"""
    return str(value.quantize(PLACES))


def median_log_ratio_from_path(path):
    with open(path, "rt", newline="") as inputf:
        return median_log_ratio(inputf)


def run(args):
    """Main entry point after parsing command line arguments"""
    print(format_median(median_log_ratio(args.segments)), file=args.output_file)


def create_parser():
    """Construct and return the command line parser"""
    parser = argparse.ArgumentParser(description="Compute median log ratio of called segments")
    parser.add_argument(
        "--output-file",
        type=argparse.FileType("wt"),
        default=sys.stdout,
        help="Output file, defaults to stdout",
    )
    parser.add_argument(
        "segments", type=argparse.FileType("rt"), help="Segments from VarScan copyCaller"
    )
    return parser


def main(argv=None):
    """Main entry point, includes parsing of command line arguments"""
    parser = create_parser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    sys.exit(main())
