"""Build and escape the crontab line that represents one job schedule."""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r"[\\']")
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def escape_command(command: str) -> str:
    """Prefix every backslash and single quote in ``command`` with a backslash."""
    return _ESCAPE_RE.sub(lambda m: "\\" + m.group(0), command)


def unescape_command(escaped: str) -> str:
    """Reverse :func:`escape_command`."""
    return _UNESCAPE_RE.sub(lambda m: m.group(1), escaped)


def build_line(command: str, schedule: str) -> str:
    """Return the crontab line for ``command`` running on ``schedule``.

    Format: ``"<schedule> root minicron run '<escaped-command>'"``

    The schedule is not validated here; the remote cron daemon is the
    validator of record.
    """
    return f"{schedule} root minicron run '{escape_command(command)}'"
