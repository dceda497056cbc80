import argparse
from contextlib import contextmanager
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.orm import Session

from . import __version__
from .actions import JobActions, ResourceActions, TimePeriodActions
from .config import load_settings
from .database import get_session, init_database
from .logger import get_logger
from .models import ApplicationStatus, Job, JobType, TimePeriod
from .responders import Responder, Response
from .result import Result

# argparse dest -> Job attribute
JOB_OPTIONS = {
    "company": "company_name",
    "source": "source",
    "title": "title",
    "status": "application_status",
    "job_type": "job_type",
    "notes": "notes",
    "recruiter_name": "recruiter_name",
    "recruiter_agency": "recruiter_agency",
    "period": "time_period_id",
}


@contextmanager
def open_session(args: argparse.Namespace) -> Iterator[Session]:
    db_path = Path(args.db)
    init_database(db_path)
    session = get_session(db_path)
    try:
        yield session
    finally:
        session.close()


def format_job(job: Job) -> List[str]:
    period = job.time_period.label if job.time_period is not None else "-"
    return [
        f"ID: {job.id}",
        f"  Company: {job.company_name}",
        f"  Title: {job.title or '-'}",
        f"  Status: {job.application_status}",
        f"  Type: {job.job_type or '-'}",
        f"  Source: {job.source}",
        f"  Period: {period}",
        f"  Recruiter: {job.recruiter_name or '-'} ({job.recruiter_agency or '-'})",
        f"  Notes: {job.notes or '-'}",
    ]


def format_time_period(period: TimePeriod) -> List[str]:
    return [f"ID: {period.id}  {period.label}"]


def respond(actions: ResourceActions, result: Result, action: str) -> Response:
    """Print the outcome of an action; exits non-zero on failure."""
    status = HTTPStatus.CREATED if action == "create" else None
    response = Responder(actions.resource).call(result, action=action, status=status)

    if response.error is not None:
        print(f"Error: {response.error['message']}")
        logger = get_logger()
        logger.debug("Action failed", action=action, status=int(response.status), error=response.error)
        raise SystemExit(1 if response.status < HTTPStatus.INTERNAL_SERVER_ERROR else 2)

    return response


def _print_records(records: List[Any], formatter, empty_message: str) -> None:
    if not records:
        print(empty_message)
        return
    for record in records:
        print("\n".join(formatter(record)))


def job_attributes(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        attribute: getattr(args, option)
        for option, attribute in JOB_OPTIONS.items()
        if getattr(args, option, None) is not None
    }


def cmd_init(args: argparse.Namespace) -> None:
    init_database(Path(args.db))
    print(f"Initialized database: {args.db}")


def cmd_periods_list(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = TimePeriodActions(session)
        response = respond(actions, actions.index(), "index")
        _print_records(response.data["time_periods"], format_time_period, "No time periods.")


def cmd_periods_add(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = TimePeriodActions(session)
        result = actions.create({"year": args.year, "month": args.month})
        response = respond(actions, result, "create")
        period = response.data["time_period"]
        print(f"Created time period {period.label} (ID: {period.id})")


def cmd_periods_delete(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = TimePeriodActions(session)
        response = respond(actions, actions.destroy(args.id), "destroy")
        print(f"Deleted time period {response.data['time_period'].label}")


def cmd_jobs_list(args: argparse.Namespace) -> None:
    where = {"application_status": args.status} if args.status else None
    with open_session(args) as session:
        actions = JobActions(session)
        response = respond(actions, actions.index(order=args.order, where=where), "index")
        jobs = response.data["jobs"]
        if jobs:
            print(f"Found {len(jobs)} jobs:\n")
        _print_records(jobs, lambda job: format_job(job) + [""], "No jobs.")


def cmd_jobs_show(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = JobActions(session)
        response = respond(actions, actions.show(args.id), "show")
        print("\n".join(format_job(response.data["job"])))


def cmd_jobs_add(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        attributes = job_attributes(args)
        if "time_period_id" not in attributes:
            active = TimePeriod.active(session)
            if active is not None:
                attributes["time_period_id"] = active.id

        actions = JobActions(session)
        response = respond(actions, actions.create(attributes), "create")
        print(f"Created job {response.data['job'].id} ({response.location})")


def cmd_jobs_update(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = JobActions(session)
        response = respond(actions, actions.update(args.id, job_attributes(args)), "update")
        print("\n".join(format_job(response.data["job"])))


def cmd_jobs_delete(args: argparse.Namespace) -> None:
    with open_session(args) as session:
        actions = JobActions(session)
        response = respond(actions, actions.destroy(args.id), "destroy")
        print(f"Deleted job {response.data['job'].id}")


def _add_job_options(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--company", required=required, help="Company name")
    parser.add_argument("--source", required=required, help="Where the listing was found")
    parser.add_argument("--title", help="Job title")
    parser.add_argument("--status", choices=[s.value for s in ApplicationStatus], help="Application status")
    parser.add_argument("--job-type", dest="job_type", choices=[t.value for t in JobType], help="Job type")
    parser.add_argument("--notes", help="Free-form notes")
    parser.add_argument("--recruiter-name", dest="recruiter_name", help="Recruiter name")
    parser.add_argument("--recruiter-agency", dest="recruiter_agency", help="Recruiter agency")
    parser.add_argument("--period", type=int, help="Time period ID (default: the latest period)")


def build_parser(default_db: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobtracker", description="Job application tracker")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", default=default_db or "data/jobs.db", help="Path to SQLite database")
    parser.add_argument("--verbose", action="store_true", help="Log operation metrics when done")

    subparsers = parser.add_subparsers(dest="command")

    init = subparsers.add_parser("init", help="Create the database tables")
    init.set_defaults(func=cmd_init)

    periods = subparsers.add_parser("periods", help="Manage time periods")
    period_commands = periods.add_subparsers(dest="periods_command")

    plist = period_commands.add_parser("list", help="List time periods, latest first")
    plist.set_defaults(func=cmd_periods_list)

    padd = period_commands.add_parser("add", help="Add a time period")
    padd.add_argument("--year", type=int, required=True, help="Year, e.g. 2024")
    padd.add_argument("--month", type=int, required=True, help="Month (1-12)")
    padd.set_defaults(func=cmd_periods_add)

    pdel = period_commands.add_parser("delete", help="Delete a time period")
    pdel.add_argument("id", type=int, help="Time period ID")
    pdel.set_defaults(func=cmd_periods_delete)

    jobs = subparsers.add_parser("jobs", help="Manage jobs")
    job_commands = jobs.add_subparsers(dest="jobs_command")

    jlist = job_commands.add_parser("list", help="List jobs")
    jlist.add_argument("--order", help="Sort order, e.g. \"company_name:asc::created_at:desc\"")
    jlist.add_argument("--status", choices=[s.value for s in ApplicationStatus], help="Only jobs with this status")
    jlist.set_defaults(func=cmd_jobs_list)

    jshow = job_commands.add_parser("show", help="Show one job")
    jshow.add_argument("id", type=int, help="Job ID")
    jshow.set_defaults(func=cmd_jobs_show)

    jadd = job_commands.add_parser("add", help="Add a job")
    _add_job_options(jadd, required=True)
    jadd.set_defaults(func=cmd_jobs_add)

    jupd = job_commands.add_parser("update", help="Update a job")
    jupd.add_argument("id", type=int, help="Job ID")
    _add_job_options(jupd, required=False)
    jupd.set_defaults(func=cmd_jobs_update)

    jdel = job_commands.add_parser("delete", help="Delete a job")
    jdel.add_argument("id", type=int, help="Job ID")
    jdel.set_defaults(func=cmd_jobs_delete)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    settings = load_settings()
    parser = build_parser(default_db=str(settings.database_path))
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    finally:
        if args.verbose:
            get_logger().log_metrics_summary()


if __name__ == "__main__":
    main()
