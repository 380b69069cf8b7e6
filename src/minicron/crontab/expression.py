"""Validate cron schedule expressions before they reach a remote host.

Line construction never validates schedules; this is the operator-side
check used by the CLI so a typo is rejected locally instead of landing in
a live crontab. Parsing is delegated to APScheduler's ``CronTrigger``.
"""

from __future__ import annotations

import logging

from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)

_CRON_FIELDS = ("minute", "hour", "day", "month", "day_of_week")

# Vixie cron shorthands, passed through unchanged.
CRON_MACROS: frozenset[str] = frozenset(
    {
        "@reboot",
        "@yearly",
        "@annually",
        "@monthly",
        "@weekly",
        "@daily",
        "@midnight",
        "@hourly",
    }
)


def parse_cron(cron_expr: str) -> dict[str, str]:
    """Split a 5-field cron expression into ``CronTrigger`` keyword arguments.

    Format: "minute hour day month day_of_week"
    Example: "30 2 * * *" -> {"minute": "30", "hour": "2", ...}

    Raises:
        ValueError: If expression doesn't have exactly 5 fields.
    """
    parts = cron_expr.strip().split()
    if len(parts) != 5:
        msg = f"Cron expression must have 5 fields, got {len(parts)}: '{cron_expr}'"
        raise ValueError(msg)
    return dict(zip(_CRON_FIELDS, parts))


def _day_of_week_for_trigger(field: str) -> str:
    """Rewrite crontab's Sunday-as-7 into the 0-6 range ``CronTrigger`` accepts.

    A lone ``7`` becomes ``0``; a range ending in ``7`` is capped at ``6``,
    which keeps it a valid range for the purpose of validation. Step values
    are left alone.
    """
    items = []
    for item in field.split(","):
        base, sep, step = item.partition("/")
        if base == "7":
            base = "0"
        elif "-" in base:
            base = "-".join(
                "6" if bound == "7" else bound for bound in base.split("-", 1)
            )
        items.append(base + sep + step)
    return ",".join(items)


def validate_schedule(cron_expr: str) -> str:
    """Return the normalised schedule if it is a valid crontab time spec.

    Accepts 5-field expressions and the ``@daily``-style macros. Fields are
    re-joined with single spaces so the built line matches what was validated.

    Raises:
        ValueError: If the expression is malformed or a field is out of range.
    """
    stripped = cron_expr.strip()
    if stripped.startswith("@"):
        if stripped not in CRON_MACROS:
            msg = f"Unknown cron macro: '{stripped}'"
            raise ValueError(msg)
        return stripped

    fields = parse_cron(stripped)
    try:
        trigger_fields = {
            **fields,
            "day_of_week": _day_of_week_for_trigger(fields["day_of_week"]),
        }
        CronTrigger.from_crontab(" ".join(trigger_fields.values()), timezone="UTC")
    except ValueError as exc:
        msg = f"Invalid cron expression '{cron_expr}': {exc}"
        raise ValueError(msg) from exc

    logger.debug("Validated schedule '%s'", stripped)
    return " ".join(fields.values())
