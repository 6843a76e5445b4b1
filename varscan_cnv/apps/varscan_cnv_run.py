# -*- coding: utf-8 -*-
"""Run the somatic copy number calling pipeline for a tumor/control pair

The merged segmentation is written to stdout, all diagnostic messages go to stderr.  An
interrupted run can be continued with ``--resume-dir``, pointing to the working directory of the
previous run; stages with valid output are skipped then.
"""

import argparse
import sys

from .. import __version__
from ..environment import check_samtools_version
from ..exceptions import PipelineException, UsageException
from ..models.config import load_config
from ..pipeline import PipelineOrchestrator, RunContext
from .impl.fsmanip import assume_file_readable, check_work_dir_args, resolve_work_dir
from .impl.logging import LVL_ERROR, LVL_IMPORTANT, LVL_SUCCESS, log, setup_logging

#: Command line options for the required input files and their description
INPUT_FILES = (
    ("control_bam", "control BAM file"),
    ("tumor_bam", "tumor BAM file"),
    ("reference", "reference FASTA file"),
    ("centromeres", "centromere table"),
    ("whitelist", "whitelist BED file"),
)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that terminates with exit code 1 on usage errors"""

    def error(self, message):
        self.print_usage(sys.stderr)
        log("{message}", {"message": message}, level=LVL_ERROR)
        sys.exit(1)


def run(args, out=None):
    """Program entry point after argument parsing"""
    out = out or sys.stdout
    config = load_config(args.config)
    if args.print_config:
        print(config.model_dump_yaml(), end="", file=out)
        return 0

    log("VarScan CNV Pipeline")
    log("====================")
    for key, kind in INPUT_FILES:
        if not getattr(args, key):
            raise UsageException("Missing required option --{}".format(key.replace("_", "-")))
        assume_file_readable(getattr(args, key), kind)
    check_work_dir_args(args.scratch_dir, args.resume_dir)
    check_samtools_version(config.tools.samtools, config.min_samtools_version)

    work_dir = resolve_work_dir(args.scratch_dir, args.resume_dir)
    context = RunContext(
        work_dir=work_dir,
        control_bam=args.control_bam,
        tumor_bam=args.tumor_bam,
        reference=args.reference,
        centromeres=args.centromeres,
        whitelist=args.whitelist,
        debug=args.debug,
    )
    if args.debug:
        log("Running in debug mode, no stage will be executed", level=LVL_IMPORTANT)
    lines = PipelineOrchestrator(context, config).run()
    if lines is not None:
        print("".join(lines), end="", file=out)
    log("All stages completed in {work_dir}", {"work_dir": work_dir}, level=LVL_SUCCESS)
    return 0


def create_parser():
    """Construct and return the command line parser"""
    parser = ArgumentParser(description="Somatic copy number calling with VarScan 2")

    parser.add_argument("--version", action="version", version="%%(prog)s %s" % __version__)

    group = parser.add_argument_group("Input Files")
    group.add_argument("--control-bam", help="Path to control (normal) BAM file")
    group.add_argument("--tumor-bam", help="Path to tumor BAM file")
    group.add_argument("--reference", help="Path to reference FASTA file, must be indexed")
    group.add_argument(
        "--centromeres", help="Path to tab-separated centromere table (chrom, start, end)"
    )
    group.add_argument("--whitelist", help="Path to BED file with regions to use")

    group = parser.add_argument_group("Working Directory")
    exclusive = group.add_mutually_exclusive_group()
    exclusive.add_argument(
        "--scratch-dir", help="Create fresh working directory below this directory"
    )
    exclusive.add_argument(
        "--resume-dir", help="Resume in working directory of a previous (interrupted) run"
    )

    group = parser.add_argument_group("Pipeline Behaviour")
    group.add_argument("--config", help="Path to YAML configuration file")
    group.add_argument(
        "--print-config",
        action="store_true",
        default=False,
        help="Print effective configuration as YAML and exit",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Only check and print the stages, do not execute anything",
    )
    group.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable verbose logging"
    )
    return parser


def main(argv=None):
    """Main program entry point, starts parsing command line arguments"""
    args = create_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return run(args)
    except PipelineException as e:
        log("{msg}", {"msg": e}, level=LVL_ERROR)
        return 1


if __name__ == "__main__":
    sys.exit(main())
