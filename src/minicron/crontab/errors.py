"""Error taxonomy for crontab mutations.

Every error carries ``recoverable``: True when the live crontab is known to
be untouched by the failed operation, False when the remote file may have
changed and needs manual inspection.
"""

from __future__ import annotations


class MutationError(Exception):
    """Base class for every failure of a crontab operation."""

    recoverable: bool = False

    def __init__(self, message: str, *, recoverable: bool | None = None) -> None:
        super().__init__(message)
        if recoverable is not None:
            self.recoverable = recoverable


class ExecutionError(MutationError):
    """The remote-execution channel failed to run a command."""


class AccessError(MutationError):
    """The remote user cannot read or write the crontab."""

    recoverable = True


class NotFoundError(MutationError):
    """The text to replace does not occur in the current crontab."""

    recoverable = True


class WriteError(MutationError):
    """Writing the staged crontab signalled failure."""

    recoverable = True


class VerificationError(MutationError):
    """Re-reading the written content did not show the expected text.

    Recoverable after a failed staged replace (the live file was never
    renamed over), not after a failed append.
    """

    recoverable = True


class CommitError(MutationError):
    """Renaming the staged crontab over the live one signalled failure."""


class AppendError(MutationError):
    """Appending a line to the live crontab signalled failure."""
