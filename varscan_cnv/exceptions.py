"""Exceptions used in the VarScan CNV pipeline

All of them are fatal: they are only caught by the command line entry point which reports the
message and terminates with exit code 1.
"""


class PipelineException(Exception):
    """Base class for all fatal pipeline conditions"""


class UsageException(PipelineException):
    """Raised on missing options, missing input files, or invalid configuration"""


class EnvironmentException(PipelineException):
    """Raised if an external tool is missing or has an unsupported version"""


class SanityCheckException(PipelineException):
    """Raised if the pileup indicates a naming mismatch between reference and alignments"""


class StageFailure(PipelineException):
    """Raised if a stage input is invalid or a stage failed to produce valid output"""
