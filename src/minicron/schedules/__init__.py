"""Schedules package — per-schedule operations and cascading deletes."""

from minicron.schedules.cascade import CascadeDeleter
from minicron.schedules.manager import ScheduleManager

__all__ = ["CascadeDeleter", "ScheduleManager"]
