"""CLI entry point — ``python -m minicron add|update|delete|delete-job|check``."""

from __future__ import annotations

import argparse
import logging
import sys

from minicron.config import get_settings

logger = logging.getLogger("minicron")

EXIT_OK = 0
EXIT_MUTATION_FAILED = 1
EXIT_INVALID_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minicron",
        description="Edit a remote host's /etc/crontab over SSH.",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Target host (defaults to SSH_HOST).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Append the line for a job schedule.")
    p.add_argument("job_command", help="Shell command the job runs.")
    p.add_argument("schedule", help="Cron expression, e.g. '0 3 * * *'.")

    p = sub.add_parser("update", help="Move a job from one schedule to another.")
    p.add_argument("job_command", help="Shell command the job runs.")
    p.add_argument("old_schedule", help="Schedule currently in the crontab.")
    p.add_argument("new_schedule", help="Schedule to replace it with.")

    p = sub.add_parser("delete", help="Remove the line for a job schedule.")
    p.add_argument("job_command", help="Shell command the job runs.")
    p.add_argument("schedule", help="Schedule to remove.")

    p = sub.add_parser("delete-job", help="Remove every listed schedule of a job.")
    p.add_argument("job_command", help="Shell command the job runs.")
    p.add_argument("schedules", nargs="+", help="Schedules to remove, in order.")

    sub.add_parser("check", help="Verify the crontab can be read and rewritten.")

    return parser


def _validated(schedules: list[str]) -> list[str]:
    from minicron.crontab.expression import validate_schedule

    return [validate_schedule(s) for s in schedules]


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args and run one crontab operation against the target host."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # pydantic's ValidationError is a ValueError
    try:
        settings = get_settings()
    except ValueError as exc:
        logging.basicConfig(level=logging.INFO, format=log_format, datefmt=date_format)
        logger.error("Invalid configuration: %s", exc)
        return EXIT_INVALID_INPUT

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
    )

    from minicron.crontab.errors import MutationError
    from minicron.crontab.mutator import CrontabMutator
    from minicron.models import Job, Schedule
    from minicron.schedules import CascadeDeleter, ScheduleManager
    from minicron.transport import create_transport

    try:
        if args.command == "add":
            (schedule,) = _validated([args.schedule])
        elif args.command == "update":
            old_schedule, new_schedule = _validated(
                [args.old_schedule, args.new_schedule]
            )
        elif args.command == "delete":
            (schedule,) = _validated([args.schedule])
        elif args.command == "delete-job":
            schedules = _validated(args.schedules)
        transport = create_transport(settings, host=args.host)
    except ValueError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_INPUT

    manager = ScheduleManager(
        transport, mutator=CrontabMutator(settings.crontab_path)
    )

    try:
        with manager.session() as channel:
            if args.command == "check":
                manager.mutator.check_access(channel)
                logger.info("%s is readable and writable", settings.crontab_path)
            elif args.command == "add":
                manager.add_schedule(Job(args.job_command), schedule, channel)
            elif args.command == "update":
                manager.update_schedule(
                    Job(args.job_command), old_schedule, new_schedule, channel
                )
            elif args.command == "delete":
                manager.delete_schedule(Job(args.job_command), schedule, channel)
            elif args.command == "delete-job":
                job = Job(
                    args.job_command,
                    tuple(Schedule(s) for s in schedules),
                )
                CascadeDeleter(manager).delete_job(job, channel)
    except MutationError as exc:
        state = "unchanged" if exc.recoverable else "possibly modified, inspect it"
        logger.error("%s (crontab %s)", exc, state)
        return EXIT_MUTATION_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
