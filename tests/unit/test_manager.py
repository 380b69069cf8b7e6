"""Tests for ScheduleManager — add / update / delete of one job schedule."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from minicron.crontab.errors import NotFoundError
from minicron.models import Job
from minicron.schedules.manager import ScheduleManager


@pytest.fixture()
def manager() -> ScheduleManager:
    return ScheduleManager()


class TestAddSchedule:
    def test_empty_crontab(self, manager, fake_channel) -> None:
        manager.add_schedule(Job("backup.sh"), "0 3 * * *", fake_channel)

        assert fake_channel.crontab.splitlines()[-1] == (
            "0 3 * * * root minicron run 'backup.sh'"
        )
        assert fake_channel.crontab == "0 3 * * * root minicron run 'backup.sh'\n"

    def test_escapes_command(self, manager, fake_channel) -> None:
        manager.add_schedule(Job("echo 'hi'"), "@hourly", fake_channel)
        assert fake_channel.crontab == "@hourly root minicron run 'echo \\'hi\\''\n"


class TestUpdateSchedule:
    def test_end_to_end(self, manager, make_channel) -> None:
        channel = make_channel("* * * * * root minicron run 'echo hi'")

        manager.update_schedule(Job("echo hi"), "* * * * *", "0 * * * *", channel)

        assert channel.crontab == "0 * * * * root minicron run 'echo hi'\n"

    def test_missing_schedule(self, manager, make_channel) -> None:
        channel = make_channel("* * * * * root minicron run 'echo hi'")

        with pytest.raises(NotFoundError):
            manager.update_schedule(Job("echo hi"), "5 * * * *", "0 * * * *", channel)

    def test_other_jobs_untouched(self, manager, make_channel) -> None:
        channel = make_channel(
            "* * * * * root minicron run 'echo hi'",
            "* * * * * root minicron run 'echo bye'",
        )

        manager.update_schedule(Job("echo bye"), "* * * * *", "0 0 * * *", channel)

        assert channel.crontab.splitlines() == [
            "* * * * * root minicron run 'echo hi'",
            "0 0 * * * root minicron run 'echo bye'",
        ]


class TestDeleteSchedule:
    def test_removes_line(self, manager, make_channel) -> None:
        channel = make_channel(
            "SHELL=/bin/sh",
            "0 3 * * * root minicron run 'backup.sh'",
        )

        manager.delete_schedule(Job("backup.sh"), "0 3 * * *", channel)

        assert "backup.sh" not in channel.crontab
        assert channel.crontab.startswith("SHELL=/bin/sh\n")


class TestSession:
    def test_opens_and_closes_channel_when_none_given(self, make_channel) -> None:
        channel = make_channel()
        transport = MagicMock()
        transport.open.return_value = channel
        manager = ScheduleManager(transport)

        manager.add_schedule(Job("backup.sh"), "0 3 * * *")

        transport.open.assert_called_once()
        assert channel.closed is True
        assert channel.crontab == "0 3 * * * root minicron run 'backup.sh'\n"

    def test_closes_channel_on_error(self, make_channel) -> None:
        channel = make_channel()
        transport = MagicMock()
        transport.open.return_value = channel
        manager = ScheduleManager(transport)

        with pytest.raises(NotFoundError):
            manager.delete_schedule(Job("backup.sh"), "0 3 * * *")

        assert channel.closed is True

    def test_given_channel_is_not_closed(self, make_channel) -> None:
        channel = make_channel()
        transport = MagicMock()
        manager = ScheduleManager(transport)

        manager.add_schedule(Job("backup.sh"), "0 3 * * *", channel)

        transport.open.assert_not_called()
        assert channel.closed is False

    def test_no_channel_and_no_transport(self, manager) -> None:
        with pytest.raises(ValueError, match="no transport"):
            manager.add_schedule(Job("backup.sh"), "0 3 * * *")

    def test_appender_follows_mutator_path(self) -> None:
        from minicron.crontab.mutator import CrontabMutator

        manager = ScheduleManager(mutator=CrontabMutator("/etc/cron.d/jobs"))
        assert manager.appender.crontab_path == "/etc/cron.d/jobs"


class TestLogging:
    @patch("minicron.schedules.manager.logger")
    def test_each_operation_is_logged(self, mock_logger: MagicMock, manager, make_channel) -> None:
        channel = make_channel()
        job = Job("backup.sh")

        manager.add_schedule(job, "0 3 * * *", channel)
        manager.update_schedule(job, "0 3 * * *", "0 4 * * *", channel)
        manager.delete_schedule(job, "0 4 * * *", channel)

        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert messages == [
            "Adding schedule '%s' for '%s'",
            "Moving '%s' from '%s' to '%s'",
            "Deleting schedule '%s' for '%s'",
        ]
