#!/usr/bin/env python3
"""Annotate copy number segments with the chromosome arm

The chromosome name of each segment gets the suffix ``.p`` if the segment starts before the
centromere and ``.q`` otherwise.  Segments on chromosomes without centromere entry are written
unchanged.

Usage::

    $ varscan-cnv-arm_split --centromeres centromeres.bed IN.called >OUT.arms
"""

import argparse
import csv
import sys


def load_centromeres(centromere_file):
    """Return dict from chromosome name to (start, end) of the centromere

    Multiple entries of the same chromosome (e.g., from UCSC ``cytoBand`` files) are merged.
    """
    result = {}
    for record in csv.reader(centromere_file, delimiter="\t"):
        if not record or record[0].startswith("#") or record[0] == "chrom":
            continue
        chrom, start, end = record[0], int(record[1]), int(record[2])
        if chrom in result:
            prev_start, prev_end = result[chrom]
            start, end = min(start, prev_start), max(end, prev_end)
        result[chrom] = (start, end)
    return result


def arm_of(chrom, start, centromeres):
    """Return ``"p"`` or ``"q"`` or ``None`` if the chromosome has no centromere entry"""
    if chrom not in centromeres:
        return None
    cen_start, _ = centromeres[chrom]
    if start < cen_start:
        return "p"
    else:
        return "q"


def yield_annotated(segment_file, centromeres):
    """Yield segment records with arm annotation"""
    for record in csv.reader(segment_file, delimiter="\t"):
        if not record:
            continue
        if record[0] == "chrom" or record[0].startswith("#"):
            yield record
            continue
        arm = arm_of(record[0], int(record[1]), centromeres)
        if arm:
            record[0] = "{}.{}".format(record[0], arm)
        yield record


def run(args):
    """Main entry point after parsing command line arguments"""
    centromeres = load_centromeres(args.centromeres)
    writer = csv.writer(args.output_file, delimiter="\t", lineterminator="\n")
    for record in yield_annotated(args.segments, centromeres):
        writer.writerow(record)


def create_parser():
    """Construct and return the command line parser"""
    parser = argparse.ArgumentParser(description="Annotate segments with chromosome arm")
    parser.add_argument(
        "--centromeres",
        type=argparse.FileType("rt"),
        required=True,
        help="Tab-separated centromere positions (chrom, start, end)",
    )
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
