"""Add, update and delete the crontab line of one job schedule."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from minicron.crontab.appender import AppendCommitter
from minicron.crontab.line import build_line
from minicron.crontab.mutator import CrontabMutator

if TYPE_CHECKING:
    from minicron.models import JobRecord
    from minicron.transport.base import Channel, Transport

logger = logging.getLogger(__name__)


class ScheduleManager:
    """Maps schedule changes onto the append and find-and-replace protocols.

    Every operation takes an optional channel. Callers running several
    operations should open one with :meth:`session` and pass it down; without
    one, a channel is opened from the transport for that call and closed
    afterwards.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        mutator: CrontabMutator | None = None,
        appender: AppendCommitter | None = None,
    ) -> None:
        self.transport = transport
        self.mutator = mutator or CrontabMutator()
        self.appender = appender or AppendCommitter(self.mutator.crontab_path)

    @contextmanager
    def session(self, channel: Channel | None = None) -> Iterator[Channel]:
        """Yield ``channel`` unchanged, or a fresh one that is closed on exit."""
        if channel is not None:
            yield channel
            return
        if self.transport is None:
            msg = "No channel given and no transport configured to open one"
            raise ValueError(msg)

        logger.debug("Opening a channel for a single operation")
        opened = self.transport.open()
        try:
            yield opened
        finally:
            opened.close()

    def add_schedule(
        self, job: JobRecord, schedule: str, channel: Channel | None = None
    ) -> None:
        """Append the line for ``job`` on ``schedule`` to the crontab."""
        line = build_line(job.command, schedule)
        logger.info("Adding schedule '%s' for '%s'", schedule, job.command)
        with self.session(channel) as conn:
            self.appender.append(conn, line)

    def update_schedule(
        self,
        job: JobRecord,
        old_schedule: str,
        new_schedule: str,
        channel: Channel | None = None,
    ) -> None:
        """Swap the line for ``old_schedule`` with the line for ``new_schedule``."""
        find = build_line(job.command, old_schedule)
        replace = build_line(job.command, new_schedule)
        logger.info(
            "Moving '%s' from '%s' to '%s'",
            job.command,
            old_schedule,
            new_schedule,
        )
        with self.session(channel) as conn:
            self.mutator.replace(conn, find, replace)

    def delete_schedule(
        self, job: JobRecord, schedule: str, channel: Channel | None = None
    ) -> None:
        """Remove the line for ``job`` on ``schedule`` from the crontab."""
        find = build_line(job.command, schedule)
        logger.info("Deleting schedule '%s' for '%s'", schedule, job.command)
        with self.session(channel) as conn:
            self.mutator.replace(conn, find, "")
