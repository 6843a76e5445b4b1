# -*- coding: utf-8 -*-
"""Tests for ``varscan_cnv.sanity``"""

import pytest

from varscan_cnv.exceptions import SanityCheckException
from varscan_cnv.sanity import DEFAULT_NUM_LINES, check_pileup


def pileup_line(pos, ref_base):
    return "chr1\t{}\t{}\t3\t...\tIII\t2\t..\tII\n".format(pos, ref_base)


def test_check_pileup_all_placeholder(fs):
    fs.create_file(
        "/work/control_tumor.mpileup", contents="".join(pileup_line(i, "N") for i in range(10))
    )
    with pytest.raises(SanityCheckException, match="contig names"):
        check_pileup("/work/control_tumor.mpileup")


def test_check_pileup_one_base(fs):
    lines = [pileup_line(i, "N") for i in range(10)] + [pileup_line(10, "A")]
    fs.create_file("/work/control_tumor.mpileup", contents="".join(lines))
    check_pileup("/work/control_tumor.mpileup")  # no exception


def test_check_pileup_only_first_lines(fs):
    lines = [pileup_line(i, "N") for i in range(10)] + [pileup_line(10, "A")]
    fs.create_file("/work/control_tumor.mpileup", contents="".join(lines))
    with pytest.raises(SanityCheckException):
        check_pileup("/work/control_tumor.mpileup", num_lines=10)


def test_check_pileup_placeholder(fs):
    fs.create_file(
        "/work/control_tumor.mpileup", contents="".join(pileup_line(i, "N") for i in range(10))
    )
    check_pileup("/work/control_tumor.mpileup", placeholder="-")  # no exception


def test_check_pileup_short_line(fs):
    fs.create_file("/work/control_tumor.mpileup", contents="chr1\t1\n" + pileup_line(2, "N"))
    check_pileup("/work/control_tumor.mpileup")  # no exception


def placeholder_pileup(num_placeholder, ref_base="A"):
    """Pileup with ``num_placeholder`` lines having ``N`` as reference base, followed by one
    line having ``ref_base``
    """
    lines = [pileup_line(i, "N") for i in range(num_placeholder)]
    return "".join(lines) + pileup_line(num_placeholder, ref_base)


def test_check_pileup_default_window_exceeded(fs):
    # line 100,001 is the first one with a reference base
    fs.create_file("/work/control_tumor.mpileup", contents=placeholder_pileup(DEFAULT_NUM_LINES))
    with pytest.raises(SanityCheckException, match="first 100000 lines"):
        check_pileup("/work/control_tumor.mpileup")


def test_check_pileup_default_window_last_line(fs):
    # line 100,000 is the first one with a reference base
    fs.create_file(
        "/work/control_tumor.mpileup", contents=placeholder_pileup(DEFAULT_NUM_LINES - 1)
    )
    check_pileup("/work/control_tumor.mpileup")  # no exception
