"""Remote-execution protocols — the contract every transport must satisfy."""

from __future__ import annotations

from typing import Protocol


class Channel(Protocol):
    """An open remote shell session."""

    def execute(self, command: str) -> str:
        """Run ``command`` in a remote shell and return its stdout.

        Raises:
            minicron.crontab.errors.ExecutionError: If the command could not
                be run (connection dropped, timeout, ...).
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class Transport(Protocol):
    """Factory for channels to one remote host."""

    def open(self) -> Channel:
        """Open a new channel.

        Raises:
            minicron.crontab.errors.ExecutionError: If the host is unreachable
                or authentication fails.
        """
        ...
