"""Crontab package — line codec, find-and-replace and append protocols."""

from minicron.crontab.appender import AppendCommitter
from minicron.crontab.errors import (
    AccessError,
    AppendError,
    CommitError,
    ExecutionError,
    MutationError,
    NotFoundError,
    VerificationError,
    WriteError,
)
from minicron.crontab.line import build_line, escape_command, unescape_command
from minicron.crontab.mutator import CrontabMutator

__all__ = [
    "AccessError",
    "AppendCommitter",
    "AppendError",
    "CommitError",
    "CrontabMutator",
    "ExecutionError",
    "MutationError",
    "NotFoundError",
    "VerificationError",
    "WriteError",
    "build_line",
    "escape_command",
    "unescape_command",
]
