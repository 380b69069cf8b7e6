"""Find-and-replace against the remote crontab with stage, verify and commit.

The remote filesystem offers no transaction, so one is assembled from shell
primitives:

1. read the live crontab,
2. substitute the target text in memory,
3. write the result to a staging file next to the live one,
4. grep the staging file to confirm the change landed intact,
5. rename the staging file over the live crontab.

The live file is only ever replaced by a rename of a file that has already
been re-read and checked, so an interrupted connection leaves either the
old crontab or the new one, never a half-written file.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from minicron.crontab import commands
from minicron.crontab.errors import (
    AccessError,
    CommitError,
    NotFoundError,
    VerificationError,
    WriteError,
)

if TYPE_CHECKING:
    from minicron.transport.base import Channel

logger = logging.getLogger(__name__)

DEFAULT_CRONTAB_PATH = "/etc/crontab"


def substitute_first(content: str, find: str, replace: str) -> str:
    """Replace the first occurrence of ``find`` in ``content``.

    Raises:
        NotFoundError: If ``find`` does not occur in ``content``.
    """
    index = content.find(find)
    if index < 0:
        msg = f"Unable to replace '{find}' with '{replace}': not found in the crontab"
        raise NotFoundError(msg)
    return content[:index] + replace + content[index + len(find) :]


class CrontabMutator:
    """Transactional find-and-replace on a remote crontab file."""

    def __init__(self, crontab_path: str = DEFAULT_CRONTAB_PATH) -> None:
        self.crontab_path = crontab_path
        self.staging_path = f"{crontab_path}.tmp"

    def read_crontab(self, channel: Channel) -> str:
        """Return the live crontab with trailing whitespace trimmed."""
        return commands.run(channel, commands.read_file(self.crontab_path))

    def check_access(self, channel: Channel) -> None:
        """Confirm the remote user may read and rewrite the crontab.

        Raises:
            AccessError: If any of the permission tests fail.
        """
        result = commands.run_checked(
            channel, commands.check_writable(self.crontab_path)
        )
        if not result.ok:
            msg = f"Insufficient permissions to rewrite {self.crontab_path}"
            raise AccessError(msg)

    def replace(self, channel: Channel, find: str, replace: str) -> None:
        """Replace the first occurrence of ``find`` with ``replace`` remotely.

        An empty ``replace`` deletes ``find``.

        Raises:
            ValueError: If ``find`` is empty.
            NotFoundError: ``find`` is absent; nothing was written.
            WriteError: The staging file could not be written.
            VerificationError: The staging file does not hold the expected text.
            CommitError: The staging file could not be renamed over the crontab.
        """
        if not find:
            msg = "Text to find must not be empty"
            raise ValueError(msg)

        content = self.read_crontab(channel)
        updated = substitute_first(content, find, replace)

        self._stage(channel, updated, find, replace)
        self._verify(channel, find, replace)
        self._commit(channel)

        if replace:
            logger.info("Replaced crontab line '%s' with '%s'", find, replace)
        else:
            logger.info("Removed crontab line '%s'", find)

    # ------------------------------------------------------------------
    # Protocol steps
    # ------------------------------------------------------------------

    def _stage(self, channel: Channel, content: str, find: str, replace: str) -> None:
        result = commands.run_checked(
            channel, commands.write_file(self.staging_path, content)
        )
        if not result.ok:
            logger.warning("Staging write to %s failed", self.staging_path)
            msg = f"Unable to replace '{find}' with '{replace}' in the crontab"
            raise WriteError(msg)

    def _verify(self, channel: Channel, find: str, replace: str) -> None:
        if replace == "":
            found = commands.run(
                channel, commands.search_file(self.staging_path, find)
            ).strip()
            if found:
                logger.warning("Deleted line still present in %s", self.staging_path)
                msg = (
                    "Expected to find nothing when grepping crontab "
                    f"but found '{found}'"
                )
                raise VerificationError(msg)
            return

        found = commands.run(
            channel, commands.search_file(self.staging_path, replace)
        ).strip()
        if found != replace:
            logger.warning("Replacement line missing from %s", self.staging_path)
            msg = f"Expected to find '{replace}' when grepping crontab but found '{found}'"
            raise VerificationError(msg)

    def _commit(self, channel: Channel) -> None:
        result = commands.run_checked(
            channel, commands.move_file(self.staging_path, self.crontab_path)
        )
        if not result.ok:
            logger.warning(
                "Rename of %s over %s failed", self.staging_path, self.crontab_path
            )
            msg = "Unable to move tmp crontab with updated crontab"
            raise CommitError(msg)
