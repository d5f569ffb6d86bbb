"""Exceptions for collaborator failures that abort a pipeline run.

Per-record data-quality problems never raise; they end up in RunStatistics.
"""


class PipelineError(Exception):
    """Base exception for unrecoverable pipeline failures."""

    pass


class SourceReadError(PipelineError):
    """Raised when the input file cannot be read."""

    pass


class LoadError(PipelineError):
    """Raised when the destination store cannot be written or queried."""

    pass


class ConfigError(PipelineError, ValueError):
    """Raised when settings or lookup tables are inconsistent."""

    pass
