# -*- coding: utf-8 -*-
"""Shared fixtures for the unit tests"""

import re
import subprocess
import textwrap

import pytest

from varscan_cnv.pipeline import RunContext


def _dedent(text):
    return textwrap.dedent(text).lstrip()


#: ``samtools flagstat`` report for the control sample
CONTROL_FLAGSTAT = _dedent(
    """
    2000 + 0 in total (QC-passed reads + QC-failed reads)
    0 + 0 secondary
    0 + 0 supplementary
    0 + 0 duplicates
    200 + 0 mapped (10.00% : N/A)
    2000 + 0 paired in sequencing
    """
)

#: ``samtools flagstat`` report for the tumor sample
TUMOR_FLAGSTAT = _dedent(
    """
    1000 + 0 in total (QC-passed reads + QC-failed reads)
    0 + 0 secondary
    0 + 0 supplementary
    0 + 0 duplicates
    100 + 0 mapped (10.00% : N/A)
    1000 + 0 paired in sequencing
    """
)

#: Joint pileup of control and tumor
PILEUP = _dedent(
    """
    1\t10001\tA\t3\t...\tIII\t2\t..\tII
    1\t10002\tC\t3\t...\tIII\t2\t..\tII
    """
)

#: Output of ``varscan copynumber``, two of the records have insufficient coverage
COPYNUMBER = _dedent(
    """
    chrom\tchr_start\tchr_stop\tnum_positions\tnormal_depth\ttumor_depth\tlog2_ratio\tgc_content
    1\t1000\t1999\t100\t25.0\t9.0\t-0.5\t40.0
    1\t2000\t2999\t100\t19.0\t10.0\t0.1\t41.0
    1\t3000\t3999\t100\t20.0\t10.0\t-0.3\t42.0
    2\t1000\t1999\t100\t30.0\t40.0\t0.1\t43.0
    """
)

#: Records of ``COPYNUMBER`` passing the default coverage filter
FILTERED = _dedent(
    """
    chrom\tchr_start\tchr_stop\tnum_positions\tnormal_depth\ttumor_depth\tlog2_ratio\tgc_content
    1\t3000\t3999\t100\t20.0\t10.0\t-0.3\t42.0
    2\t1000\t1999\t100\t30.0\t40.0\t0.1\t43.0
    """
)


def called_tsv(*log_ratios):
    """Return output of ``varscan copyCaller`` with the given adjusted log ratios"""
    lines = [
        "chrom\tchr_start\tchr_stop\tnum_positions\tnormal_depth\ttumor_depth\t"
        "adjusted_log_ratio\tgc_content\tregion_call\traw_ratio\n"
    ]
    for i, log_ratio in enumerate(log_ratios):
        start = 1000 + i * 100000000
        lines.append(
            "1\t{}\t{}\t100\t30.0\t20.0\t{}\t40.0\tneutral\t{}\n".format(
                start, start + 999, log_ratio, log_ratio
            )
        )
    return "".join(lines)


#: Centromere table
CENTROMERES = _dedent(
    """
    chrom\tstart\tend
    1\t121500000\t125000000
    2\t90500000\t96800000
    """
)

#: Recentered calls annotated with the chromosome arm
ARMS = _dedent(
    """
    chrom\tchr_start\tchr_stop\tnum_positions\tnormal_depth\ttumor_depth\tadjusted_log_ratio
    1.p\t1000\t1999\t100\t30.0\t20.0\t-0.05
    1.q\t200001000\t200001999\t100\t30.0\t20.0\t0.0
    """
)

#: Segmentation written by the R script
SEGMENTS = _dedent(
    """
    chrom\tloc.start\tloc.end\tnum.mark\tseg.mean
    1.p\t1000\t1999\t1\t-0.05
    1.q\t200001000\t200001999\t1\t0.0
    X\t5000\t5999\t1\t0.2
    """
)

#: ``SEGMENTS`` with the arm annotation removed
MERGED = _dedent(
    """
    chrom\tloc.start\tloc.end\tnum.mark\tseg.mean
    1\t1000\t1999\t1\t-0.05
    1\t200001000\t200001999\t1\t0.0
    X\t5000\t5999\t1\t0.2
    """
)


@pytest.fixture
def input_files(fs):
    """Create input files and empty working directory in the fake file system"""
    fs.create_file("/data/control.bam", contents="BAM")
    fs.create_file("/data/tumor.bam", contents="BAM")
    fs.create_file("/data/ref.fa", contents=">1\nACGT\n")
    fs.create_file("/data/centromeres.tsv", contents=CENTROMERES)
    fs.create_file("/data/whitelist.bed", contents="1\t0\t10000\n2\t0\t10000\n")
    fs.create_dir("/work")
    return fs


@pytest.fixture
def run_context(input_files):
    """Return run context for the input files, working in ``/work``"""
    return RunContext(
        work_dir="/work",
        control_bam="/data/control.bam",
        tumor_bam="/data/tumor.bam",
        reference="/data/ref.fa",
        centromeres="/data/centromeres.tsv",
        whitelist="/data/whitelist.bed",
    )


class FakeTools:
    """Stand-in for ``subprocess.run`` emulating samtools, VarScan, the arm splitter, and R

    The outputs can be replaced by tests, setting an output to ``""`` emulates a failing tool.
    """

    called_tsv = staticmethod(called_tsv)

    def __init__(self):
        self.calls = []
        self.scripts = []
        self.control_flagstat = CONTROL_FLAGSTAT
        self.tumor_flagstat = TUMOR_FLAGSTAT
        self.pileup = PILEUP
        self.copynumber = COPYNUMBER
        self.called = called_tsv("-0.3", "-0.25", "0.1")
        self.recentered = called_tsv("-0.05", "0.0", "0.35")
        self.arms = ARMS
        self.segments = SEGMENTS

    @staticmethod
    def _write(path, contents):
        with open(path, "wt") as outputf:
            outputf.write(contents)

    def __call__(self, args, stdin=None, stdout=None, check=False):
        args = list(args)
        self.calls.append(args)
        if "flagstat" in args:
            if args[-1] == "/data/control.bam":
                stdout.write(self.control_flagstat.encode())
            else:
                stdout.write(self.tumor_flagstat.encode())
        elif "mpileup" in args:
            stdout.write(self.pileup.encode())
        elif "copynumber" in args:
            self._write(args[args.index("copynumber") + 2] + ".copynumber", self.copynumber)
        elif "copyCaller" in args:
            output = args[args.index("--output-file") + 1]
            recenter = "--recenter-down" in args or "--recenter-up" in args
            self._write(output, self.recentered if recenter else self.called)
            self._write(args[args.index("--output-homdel-file") + 1], "")
        elif args[0] == "varscan-cnv-arm_split":
            stdout.write(self.arms.encode())
        elif args[0] == "R":
            script = stdin.read().decode()
            self.scripts.append(script)
            self._write(re.search(r'file="([^"]+)"', script).group(1), self.segments)
        return subprocess.CompletedProcess(args, 0)

    def commands(self, name):
        """Return calls with ``name`` in the arguments"""
        return [call for call in self.calls if name in call]


@pytest.fixture
def fake_tools(mocker):
    """Patch out running of external programs"""
    tools = FakeTools()
    mocker.patch("varscan_cnv.stage.subprocess.run", side_effect=tools)
    return tools


@pytest.fixture
def filtered_tsv():
    """Return expected result of filtering the fake ``varscan copynumber`` output"""
    return FILTERED


@pytest.fixture
def merged_segments():
    """Return expected final output for the fake segmentation"""
    return MERGED
