# -*- coding: utf-8 -*-
"""Validity checks for files produced by the pipeline stages

The wrapped tools do not reliably signal failure through their exit status.  On failure, they
write either nothing or a single diagnostic line.  A stage output is thus considered usable iff it
has at least two lines.
"""

import itertools
import os

import attr


#: File name extension of alignment files, these are never checked line-wise
BAM_EXTENSION = ".bam"


def is_valid(path):
    """Return whether the file at ``path`` exists and has more than one line

    Only the first two lines are read, so this is cheap for large files.
    """
    if not os.path.isfile(path):
        return False
    with open(path, "rt", errors="replace") as inputf:
        return len(list(itertools.islice(inputf, 2))) == 2


def is_bam(path):
    """Return whether ``path`` points to a BAM file (by extension)"""
    return path.endswith(BAM_EXTENSION)


@attr.s(frozen=True, auto_attribs=True)
class Artifact:
    """A file on disk produced or consumed by a stage

    Validity is not stored but computed on each access as the file may have been written by a
    previous, interrupted run.
    """

    path: str

    @property
    def name(self):
        return os.path.basename(self.path)

    @property
    def valid(self):
        return is_valid(self.path)

    def __str__(self):
        return self.path
