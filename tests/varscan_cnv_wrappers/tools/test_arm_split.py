# -*- coding: utf-8 -*-
"""Tests for ``varscan_cnv_wrappers.tools.arm_split``"""

import io
import textwrap

import pytest

from varscan_cnv_wrappers.tools import arm_split


@pytest.fixture
def centromeres_tsv():
    return textwrap.dedent(
        """
        # UCSC-style, multiple entries per chromosome
        chrom\tstart\tend
        1\t121500000\t123400000
        1\t123400000\t125100000
        2\t90500000\t96800000
        """
    ).lstrip()


@pytest.fixture
def called_tsv():
    return textwrap.dedent(
        """
        chrom\tchr_start\tchr_stop\tnum_positions\tadjusted_log_ratio
        1\t1000\t1999\t100\t-0.1
        1\t121499999\t121500500\t100\t0.0
        1\t121500000\t121500999\t100\t0.0
        1\t200000000\t200000999\t100\t0.2
        MT\t100\t199\t100\t0.5
        """
    ).lstrip()


def test_load_centromeres(centromeres_tsv):
    centromeres = arm_split.load_centromeres(io.StringIO(centromeres_tsv))
    assert centromeres == {"1": (121500000, 125100000), "2": (90500000, 96800000)}


def test_arm_of():
    centromeres = {"1": (121500000, 125100000)}
    assert arm_split.arm_of("1", 1000, centromeres) == "p"
    assert arm_split.arm_of("1", 121499999, centromeres) == "p"
    assert arm_split.arm_of("1", 121500000, centromeres) == "q"
    assert arm_split.arm_of("1", 200000000, centromeres) == "q"
    assert arm_split.arm_of("MT", 1000, centromeres) is None


def test_main(tmp_path, centromeres_tsv, called_tsv, capsys):
    (tmp_path / "centromeres.tsv").write_text(centromeres_tsv)
    (tmp_path / "in.called").write_text(called_tsv)

    arm_split.main(
        ["--centromeres", str(tmp_path / "centromeres.tsv"), str(tmp_path / "in.called")]
    )

    out, err = capsys.readouterr()
    assert (
        out
        == textwrap.dedent(
            """
        chrom\tchr_start\tchr_stop\tnum_positions\tadjusted_log_ratio
        1.p\t1000\t1999\t100\t-0.1
        1.p\t121499999\t121500500\t100\t0.0
        1.q\t121500000\t121500999\t100\t0.0
        1.q\t200000000\t200000999\t100\t0.2
        MT\t100\t199\t100\t0.5
        """
        ).lstrip()
    )
    assert err == ""


def test_main_output_file(tmp_path, centromeres_tsv):
    (tmp_path / "centromeres.tsv").write_text(centromeres_tsv)
    (tmp_path / "in.called").write_text("chrom\tchr_start\n2\t100000000\n")

    arm_split.main(
        [
            "--centromeres",
            str(tmp_path / "centromeres.tsv"),
            "--output-file",
            str(tmp_path / "out.arms"),
            str(tmp_path / "in.called"),
        ]
    )

    assert (tmp_path / "out.arms").read_text() == "chrom\tchr_start\n2.q\t100000000\n"
