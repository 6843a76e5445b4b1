# -*- coding: utf-8 -*-
"""Execution of single pipeline stages

A :py:class:`Stage` couples the input artifacts, the output artifact, and the action producing
the output.  The :py:class:`StageRunner` skips stages whose output is already valid, so re-running
the pipeline on the working directory of an interrupted run only executes the missing stages.
"""

from contextlib import nullcontext
import datetime
import logging
import os
import shlex
import subprocess
import sys
import typing

import attr

from .artifacts import Artifact, is_bam
from .exceptions import StageFailure


#: The logger to use.
logger = logging.getLogger(__name__)

#: Suffix of the file receiving the output of a running program
TMP_SUFFIX = ".tmp"


def _to_artifacts(paths):
    return tuple(p if isinstance(p, Artifact) else Artifact(p) for p in paths)


def _to_artifact(path):
    return path if isinstance(path, Artifact) else Artifact(path)


class Action:
    """Base class for the actions producing a stage's output"""

    def describe(self) -> str:
        """Return human-readable description, e.g., the command line"""
        raise NotImplementedError("Override me!")  # pragma: no cover

    def execute(self) -> None:
        """Perform the action"""
        raise NotImplementedError("Override me!")  # pragma: no cover


@attr.s(frozen=True, auto_attribs=True)
class CommandAction(Action):
    """Run an external program, optionally redirecting stdin and stdout from/to files

    Without redirection, stdout of the program goes to stderr; stdout of the pipeline only
    carries the final result.  Redirected output is written to a temporary file that is moved
    to ``stdout`` once the program has terminated, so an interrupted program leaves no
    truncated output behind.

    The exit status is only logged.  Whether the program succeeded is decided by checking the
    stage output afterwards.
    """

    #: Command line as list of arguments
    args: typing.Tuple[str, ...] = attr.ib(converter=tuple)
    #: Optional path to write stdout to
    stdout: typing.Optional[str] = None
    #: Optional path to read stdin from
    stdin: typing.Optional[str] = None

    def describe(self):
        result = shlex.join(self.args)
        if self.stdin:
            result += " < " + shlex.quote(self.stdin)
        if self.stdout:
            result += " > " + shlex.quote(self.stdout)
        return result

    @property
    def tmp_stdout(self):
        return self.stdout + TMP_SUFFIX if self.stdout else None

    def execute(self):
        try:
            with (
                open(self.stdin, "rb") if self.stdin else nullcontext() as inputf,
                open(self.tmp_stdout, "wb") if self.stdout else nullcontext(sys.stderr) as outputf,
            ):
                proc = subprocess.run(self.args, stdin=inputf, stdout=outputf, check=False)
            if self.stdout:
                os.replace(self.tmp_stdout, self.stdout)
        except OSError as e:
            raise StageFailure("Could not run {}: {}".format(self.describe(), e)) from e
        if proc.returncode != 0:
            logger.warning("Command exited with status %d: %s", proc.returncode, self.describe())


@attr.s(frozen=True, auto_attribs=True)
class RScriptAction(Action):
    """Write an R script next to the output and run it with ``R --vanilla``

    The script is kept in the working directory for inspection.
    """

    #: The R script contents
    script: str
    #: Path to write the script to
    script_path: str
    #: Command for invoking R
    r_command: typing.Tuple[str, ...] = attr.ib(converter=tuple, default=("R",))

    @property
    def command(self):
        return CommandAction(self.r_command + ("--vanilla", "--slave"), stdin=self.script_path)

    def describe(self):
        return self.command.describe()

    def execute(self):
        with open(self.script_path, "wt") as f:
            print(self.script, file=f)
        self.command.execute()


@attr.s(frozen=True, auto_attribs=True)
class FunctionAction(Action):
    """Run a local Python computation"""

    #: Description to print
    description: str
    #: The function to call, without arguments
    func: typing.Callable[[], None]

    def describe(self):
        return self.description

    def execute(self):
        self.func()


@attr.s(frozen=True, auto_attribs=True)
class SymlinkAction(Action):
    """Pass an artifact through to another path by creating a relative symbolic link"""

    source: str
    dest: str

    def describe(self):
        return "ln -sr {} {}".format(shlex.quote(self.source), shlex.quote(self.dest))

    def execute(self):
        if os.path.lexists(self.dest):
            os.unlink(self.dest)
        os.symlink(
            os.path.relpath(self.source, os.path.dirname(os.path.abspath(self.dest))), self.dest
        )


@attr.s(frozen=True, auto_attribs=True)
class Stage:
    """A named unit of work producing one output artifact"""

    #: Name for display
    name: str
    #: Artifacts the action reads
    inputs: typing.Tuple[Artifact, ...] = attr.ib(converter=_to_artifacts)
    #: The artifact the action produces
    output: Artifact = attr.ib(converter=_to_artifact)
    #: The action producing ``output``
    action: Action


class StageRunner:
    """Run stages, skipping those whose output is valid already

    In debug mode, only the checks are performed and the actions are printed but never executed.
    """

    def __init__(self, debug=False):
        #: Whether to run in debug (dry-run) mode
        self.debug = debug
        #: Names of the stages that were executed
        self.executed = []

    def run(self, stage):
        """Run ``stage``, raise :py:class:`StageFailure` on invalid inputs or output"""
        if stage.output.valid:
            logger.info("Skipping stage %s, output %s exists", stage.name, stage.output)
            return
        self._check_inputs(stage)
        logger.info("Running stage %s: %s", stage.name, stage.action.describe())
        if self.debug:
            return
        stage.action.execute()
        self.executed.append(stage.name)
        logger.info("Finished stage %s at %s", stage.name, datetime.datetime.now().isoformat())
        if not stage.output.valid:
            raise StageFailure(
                "Stage {} failed to produce valid output {}".format(stage.name, stage.output)
            )

    def _check_inputs(self, stage):
        for artifact in stage.inputs:
            if is_bam(artifact.path) or artifact.valid:
                continue
            if self.debug:
                logger.warning("Input %s of stage %s is missing or corrupt", artifact, stage.name)
            else:
                raise StageFailure(
                    "Input {} of stage {} is missing or corrupt".format(artifact, stage.name)
                )
