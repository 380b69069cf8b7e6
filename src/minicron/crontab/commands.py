"""Remote shell command construction for the crontab protocol.

Success of a write-style command is signalled by the remote shell echoing
``y`` or ``n`` (the sentinel) rather than by the exit status, which not
every channel reports. :func:`run_checked` turns that convention into a
:class:`CommandResult` so callers never compare sentinel strings themselves.
"""

from __future__ import annotations

import logging
import posixpath
import shlex
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minicron.transport.base import Channel

logger = logging.getLogger(__name__)

SENTINEL_OK = "y"
SENTINEL_FAIL = "n"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a sentinel-gated remote command."""

    ok: bool
    output: str


def with_sentinel(command: str) -> str:
    """Append the ``y``/``n`` success echo to ``command``."""
    return f"{command} && echo '{SENTINEL_OK}' || echo '{SENTINEL_FAIL}'"


def run(channel: Channel, command: str) -> str:
    """Execute ``command`` and return its stdout with trailing whitespace trimmed."""
    logger.debug("Remote: %s", command)
    return channel.execute(command).rstrip()


def run_checked(channel: Channel, command: str) -> CommandResult:
    """Execute ``command`` behind the sentinel and report whether it succeeded."""
    output = run(channel, with_sentinel(command)).strip()
    return CommandResult(ok=output == SENTINEL_OK, output=output)


# -- Command shapes -----------------------------------------------------


def read_file(path: str) -> str:
    return f"cat {shlex.quote(path)}"


def write_file(path: str, content: str, *, append: bool = False) -> str:
    """Write ``content`` plus a trailing newline to ``path``.

    ``printf '%s\\n'`` is used instead of ``echo`` because some ``/bin/sh``
    implementations interpret backslash escapes in ``echo`` arguments.
    """
    redirect = ">>" if append else ">"
    return f"printf '%s\\n' {shlex.quote(content)} {redirect} {shlex.quote(path)}"


def search_file(path: str, text: str) -> str:
    return f"grep -F -- {shlex.quote(text)} {shlex.quote(path)}"


def move_file(source: str, target: str) -> str:
    return f"mv {shlex.quote(source)} {shlex.quote(target)}"


def last_line(path: str) -> str:
    return f"tail -n 1 {shlex.quote(path)}"


def check_writable(path: str) -> str:
    """Test that ``path`` is readable and writable and its directory writable.

    The directory must be writable for the staged file to be created and
    renamed over the live one.
    """
    directory = posixpath.dirname(path) or "."
    return (
        f"test -r {shlex.quote(path)} && test -w {shlex.quote(path)}"
        f" && test -w {shlex.quote(directory)}"
    )
