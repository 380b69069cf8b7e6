"""Append a brand-new line to the live crontab and check it landed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from minicron.crontab import commands
from minicron.crontab.errors import AppendError, VerificationError
from minicron.crontab.mutator import DEFAULT_CRONTAB_PATH

if TYPE_CHECKING:
    from minicron.transport.base import Channel

logger = logging.getLogger(__name__)


class AppendCommitter:
    """Append-then-tail protocol.

    No staging is needed: an append cannot damage existing lines, so the only
    question is whether the line arrived intact at the end of the file.
    """

    def __init__(self, crontab_path: str = DEFAULT_CRONTAB_PATH) -> None:
        self.crontab_path = crontab_path

    def append(self, channel: Channel, line: str) -> None:
        """Append ``line`` to the crontab.

        Raises:
            AppendError: The append command signalled failure.
            VerificationError: The last line of the crontab is not ``line``.
        """
        result = commands.run_checked(
            channel, commands.write_file(self.crontab_path, line, append=True)
        )
        if not result.ok:
            logger.warning("Append to %s failed", self.crontab_path)
            msg = f"Unable to write '{line}' to the crontab"
            raise AppendError(msg)

        tail = commands.run(channel, commands.last_line(self.crontab_path)).strip()
        if tail != line:
            msg = f"Expected to find '{line}' at eof but found '{tail}'"
            raise VerificationError(msg, recoverable=False)

        logger.info("Appended crontab line '%s'", line)
