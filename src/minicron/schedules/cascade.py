"""Remove every schedule of a job, or every job of a host, one line at a time.

Cascades stop at the first failure and re-raise it unchanged. Lines removed
before the failure stay removed and the rest stay in place; there is no
rollback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from minicron.crontab.errors import MutationError

if TYPE_CHECKING:
    from minicron.models import HostRecord, JobRecord
    from minicron.schedules.manager import ScheduleManager
    from minicron.transport.base import Channel

logger = logging.getLogger(__name__)


class CascadeDeleter:
    """Sequential multi-line deletion sharing one channel for the whole run."""

    def __init__(self, manager: ScheduleManager) -> None:
        self.manager = manager

    def delete_job(self, job: JobRecord, channel: Channel | None = None) -> None:
        """Delete the crontab line of every schedule of ``job``, in order."""
        with self.manager.session(channel) as conn:
            for index, schedule in enumerate(job.schedules):
                try:
                    self.manager.delete_schedule(job, schedule.formatted, conn)
                except MutationError:
                    logger.warning(
                        "Stopped deleting '%s' at schedule %d of %d ('%s')",
                        job.command,
                        index + 1,
                        len(job.schedules),
                        schedule.formatted,
                    )
                    raise

    def delete_host(self, host: HostRecord, channel: Channel | None = None) -> None:
        """Delete every job of ``host``, in order."""
        with self.manager.session(channel) as conn:
            for job in host.jobs:
                self.delete_job(job, conn)
