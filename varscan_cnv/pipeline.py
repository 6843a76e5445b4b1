# -*- coding: utf-8 -*-
"""The somatic copy number calling pipeline

The stages are run strictly in sequence, each stage's output artifact is the input of the next
one::

    flagstat (control) -> flagstat (tumor) -> mpileup -> [sanity check] -> copynumber
    -> coverage filter -> copyCaller -> recenter (down/up/no-op) -> arm split -> segmentation
    -> [arm merge]

All artifacts live in the working directory under fixed names.  This directory is the only
state of the pipeline, a run can be resumed by pointing the pipeline to it again.
"""

import functools
import logging
import os
import shlex

import attr

from . import coverage, sanity
from .arms import merge_lines
from .artifacts import is_valid
from .exceptions import StageFailure
from .models.config import PipelineConfig
from .ratio import compute_data_ratio
from .recenter import RecenterKind, classify
from .stage import (
    CommandAction,
    FunctionAction,
    RScriptAction,
    Stage,
    StageRunner,
    SymlinkAction,
)
from varscan_cnv_wrappers.segmentation import render_script
from varscan_cnv_wrappers.tools.median_log_ratio import median_log_ratio_from_path

#: Prefix for the VarScan copynumber output
COPYNUMBER_PREFIX = "varscan"

#: The logger to use.
logger = logging.getLogger(__name__)


@attr.s(frozen=True, auto_attribs=True)
class RunContext:
    """Immutable description of one pipeline run, derives all artifact paths"""

    #: Working directory with all artifacts
    work_dir: str
    #: Path to control (normal) BAM file
    control_bam: str
    #: Path to tumor BAM file
    tumor_bam: str
    #: Path to indexed reference FASTA file
    reference: str
    #: Path to centromere table
    centromeres: str
    #: Path to BED file with regions to consider
    whitelist: str
    #: Only print, do not execute
    debug: bool = False

    def _path(self, name):
        return os.path.join(self.work_dir, name)

    @property
    def control_flagstat(self):
        return self._path("control.flagstat")

    @property
    def tumor_flagstat(self):
        return self._path("tumor.flagstat")

    @property
    def pileup(self):
        return self._path("control_tumor.mpileup")

    @property
    def copynumber_prefix(self):
        return self._path(COPYNUMBER_PREFIX)

    @property
    def copynumber(self):
        return self.copynumber_prefix + ".copynumber"

    @property
    def filtered(self):
        return self.copynumber + ".filtered"

    @property
    def called(self):
        return self.copynumber + ".called"

    @property
    def recentered(self):
        return self.called + ".recentered"

    @property
    def arms(self):
        return self.recentered + ".arms"

    @property
    def segment_script(self):
        return self._path("segment.R")

    @property
    def segments(self):
        return self._path("segments.arms.tsv")


def format_ratio(ratio):
    """Format data ratio for the VarScan command line, ``None`` if it is not available"""
    if ratio is None:
        return "NA"
    return str(ratio)


class PipelineOrchestrator:
    """Run the stages of the pipeline for a :py:class:`RunContext`"""

    def __init__(self, context, config=None, runner=None):
        #: The run context with the paths
        self.context = context
        #: The pipeline configuration
        self.config = config or PipelineConfig()
        #: The stage runner to use
        self.runner = runner or StageRunner(debug=context.debug)

    @property
    def debug(self):
        return self.context.debug

    def _tool(self, name):
        return shlex.split(getattr(self.config.tools, name))

    def run(self):
        """Run all stages and return the lines of the final segmentation, arms merged

        ``None`` is returned in debug mode if the segmentation does not exist yet.
        """
        ctx = self.context
        self.run_flagstat("flagstat_control", ctx.control_bam, ctx.control_flagstat)
        self.run_flagstat("flagstat_tumor", ctx.tumor_bam, ctx.tumor_flagstat)
        self.run_mpileup()
        self.check_pileup()
        self.run_copynumber()
        self.run_coverage_filter()
        self.run_copy_caller()
        self.run_recenter()
        self.run_arm_split()
        self.run_segmentation()
        return self.merge_arms()

    def run_flagstat(self, name, bam, flagstat):
        action = CommandAction(self._tool("samtools") + ["flagstat", bam], stdout=flagstat)
        self.runner.run(Stage(name, [bam], flagstat, action))

    def run_mpileup(self):
        ctx = self.context
        args = self._tool("samtools") + [
            "mpileup",
            "-q",
            str(self.config.mpileup.min_mapq),
            "-f",
            ctx.reference,
            "-l",
            ctx.whitelist,
            *self.config.mpileup.extra_args,
            ctx.control_bam,
            ctx.tumor_bam,
        ]
        inputs = [ctx.reference, ctx.whitelist, ctx.control_bam, ctx.tumor_bam]
        self.runner.run(Stage("mpileup", inputs, ctx.pileup, CommandAction(args, ctx.pileup)))

    def check_pileup(self):
        if not is_valid(self.context.pileup):
            logger.warning("Pileup %s does not exist, skipping sanity check", self.context.pileup)
            return
        sanity.check_pileup(
            self.context.pileup,
            num_lines=self.config.sanity_check.num_lines,
            placeholder=self.config.sanity_check.placeholder,
        )

    def data_ratio(self):
        """Return control/tumor data ratio, ``None`` in debug mode if it cannot be computed"""
        ctx = self.context
        try:
            ratio = compute_data_ratio(ctx.control_flagstat, ctx.tumor_flagstat)
        except StageFailure as e:
            if not self.debug:
                raise
            logger.warning("Could not compute data ratio: %s", e)
            return None
        logger.info("Control/tumor data ratio is %s", ratio)
        return ratio

    def run_copynumber(self):
        ctx = self.context
        # the flagstat reports are only needed if the copy numbers are (re)computed
        ratio = None if is_valid(ctx.copynumber) else self.data_ratio()
        args = self._tool("varscan") + [
            "copynumber",
            ctx.pileup,
            ctx.copynumber_prefix,
            "--mpileup",
            "1",
            "--data-ratio",
            format_ratio(ratio),
        ]
        self.runner.run(Stage("copynumber", [ctx.pileup], ctx.copynumber, CommandAction(args)))

    def run_coverage_filter(self):
        ctx = self.context
        thresholds = self.config.coverage
        action = FunctionAction(
            "keep records of {} with tumor depth >= {} and control depth >= {} > {}".format(
                ctx.copynumber,
                thresholds.min_tumor_depth,
                thresholds.min_control_depth,
                ctx.filtered,
            ),
            functools.partial(
                coverage.filter_coverage,
                ctx.copynumber,
                ctx.filtered,
                min_tumor_depth=thresholds.min_tumor_depth,
                min_control_depth=thresholds.min_control_depth,
            ),
        )
        self.runner.run(Stage("coverage_filter", [ctx.copynumber], ctx.filtered, action))

    def _copy_caller(self, output, extra_args=()):
        args = self._tool("varscan") + [
            "copyCaller",
            self.context.filtered,
            "--output-file",
            output,
            "--output-homdel-file",
            output + ".homdel",
            *extra_args,
        ]
        return CommandAction(args)

    def run_copy_caller(self):
        ctx = self.context
        action = self._copy_caller(ctx.called)
        self.runner.run(Stage("copy_caller", [ctx.filtered], ctx.called, action))

    def run_recenter(self):
        ctx = self.context
        action = FunctionAction(
            "recenter {} by median log ratio > {}".format(ctx.called, ctx.recentered),
            self._recenter,
        )
        self.runner.run(Stage("recenter", [ctx.filtered, ctx.called], ctx.recentered, action))

    def _recenter(self):
        """Compute the median log ratio and run the matching branch"""
        ctx = self.context
        try:
            delta = median_log_ratio_from_path(ctx.called)
        except ValueError as e:
            raise StageFailure(
                "Could not compute median log ratio of {}".format(ctx.called)
            ) from e
        decision = classify(delta, self.config.recenter.threshold)
        match decision.kind:
            case RecenterKind.DOWN:
                extra_args = ["--recenter-down", str(decision.amount)]
                action = self._copy_caller(ctx.recentered, extra_args)
            case RecenterKind.UP:
                extra_args = ["--recenter-up", str(decision.amount)]
                action = self._copy_caller(ctx.recentered, extra_args)
            case RecenterKind.NOOP:
                action = SymlinkAction(ctx.called, ctx.recentered)
        logger.info(
            "Median log ratio is %s, recentering %s: %s", delta, decision.kind, action.describe()
        )
        action.execute()

    def run_arm_split(self):
        ctx = self.context
        args = self._tool("arm_split") + ["--centromeres", ctx.centromeres, ctx.recentered]
        action = CommandAction(args, stdout=ctx.arms)
        self.runner.run(Stage("arm_split", [ctx.recentered, ctx.centromeres], ctx.arms, action))

    def run_segmentation(self):
        ctx = self.context
        script = render_script(
            ctx.arms,
            ctx.segments,
            undo_sd=self.config.segmentation.undo_sd,
            sample_id=os.path.basename(ctx.tumor_bam),
        )
        action = RScriptAction(script, ctx.segment_script, self._tool("R"))
        self.runner.run(Stage("segmentation", [ctx.arms], ctx.segments, action))

    def merge_arms(self):
        """Return lines of the segmentation with arm annotation removed"""
        ctx = self.context
        if not is_valid(ctx.segments):
            if self.debug:
                logger.warning("Segmentation %s does not exist, nothing to output", ctx.segments)
                return None
            raise StageFailure("Segmentation {} is missing or corrupt".format(ctx.segments))
        with open(ctx.segments, "rt") as inputf:
            return list(merge_lines(inputf))
