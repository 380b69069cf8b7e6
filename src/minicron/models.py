"""Shapes of the Job, Schedule and Host records owned by the application.

The crontab layer only reads attributes, so any object with the right
attributes works (ORM rows included). The dataclasses are plain carriers
for the CLI and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence


class ScheduleRecord(Protocol):
    @property
    def formatted(self) -> str: ...


class JobRecord(Protocol):
    @property
    def command(self) -> str: ...

    @property
    def schedules(self) -> Sequence[ScheduleRecord]: ...


class HostRecord(Protocol):
    @property
    def jobs(self) -> Sequence[JobRecord]: ...


@dataclass(frozen=True)
class Schedule:
    formatted: str


@dataclass(frozen=True)
class Job:
    command: str
    schedules: tuple[Schedule, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Host:
    name: str
    jobs: tuple[Job, ...] = field(default_factory=tuple)
