# -*- coding: utf-8 -*-
"""Helper code for file system manipulation

The routines in this module select the working directory of a run and check the input files,
printing log messages on the way.
"""

import os
import tempfile

from ...exceptions import UsageException
from .logging import LVL_INFO, log

#: Prefix of freshly created working directories
WORK_DIR_PREFIX = "varscan."


def assume_path_existing(path, kind="directory"):
    """Raise :py:class:`UsageException` if ``path`` does not exist"""
    if not os.path.exists(path):
        raise UsageException("{kind} {path} does not exist".format(kind=kind, path=path))


def assume_file_readable(path, kind="input file"):
    """Raise :py:class:`UsageException` if ``path`` is not a readable file"""
    if not os.path.isfile(path):
        raise UsageException("{kind} {path} does not exist".format(kind=kind, path=path))
    if not os.access(path, os.R_OK):
        raise UsageException("{kind} {path} is not readable".format(kind=kind, path=path))


def create_work_dir(scratch_dir, msg_lvl=LVL_INFO):
    """Create fresh working directory with random suffix below ``scratch_dir``

    Switch off messaging by setting msg_lvl to ``None``
    """
    path = tempfile.mkdtemp(prefix=WORK_DIR_PREFIX, dir=scratch_dir)
    if msg_lvl:
        log("created working directory {path}", {"path": path}, level=msg_lvl)
    return path


def check_work_dir_args(scratch_dir=None, resume_dir=None):
    """Raise :py:class:`UsageException` unless exactly one of ``scratch_dir`` and
    ``resume_dir`` is given and exists
    """
    if bool(scratch_dir) == bool(resume_dir):
        raise UsageException("Exactly one of scratch and resume directory must be given")
    if resume_dir:
        assume_path_existing(resume_dir, "resume directory")
    else:
        assume_path_existing(scratch_dir, "scratch directory")


def resolve_work_dir(scratch_dir=None, resume_dir=None, msg_lvl=LVL_INFO):
    """Return working directory for the run

    Exactly one of ``scratch_dir`` (create a fresh directory below it) and ``resume_dir`` (use
    directory of a previous run) must be given.  The artifacts in ``resume_dir`` are not checked
    here, this is done for each stage.
    """
    check_work_dir_args(scratch_dir, resume_dir)
    if resume_dir:
        if msg_lvl:
            log("resuming in working directory {path}", {"path": resume_dir}, level=msg_lvl)
        return resume_dir
    else:
        return create_work_dir(scratch_dir, msg_lvl)
