"""Main CLI entry point."""

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from student_hub.client.base import ApiClient
from student_hub.config import ENV_PREFIX, PortalSettings
from student_hub.controllers.resource import Result
from student_hub.session import Session


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="student-hub", description="Student hub portal client")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Settings YAML (default: ${ENV_PREFIX}CONFIG)",
    )
    parser.add_argument(
        "--email",
        type=str,
        default=None,
        help=f"Signed-in user's email (default: ${ENV_PREFIX}EMAIL)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # deadlines
    deadlines_parser = subparsers.add_parser("deadlines", help="Course exams and assignments")
    deadlines_parser.add_argument(
        "action",
        choices=["list", "add", "delete"],
        help="List, add or delete deadlines",
    )
    deadlines_parser.add_argument("--course", type=str, default="all", help="Course code filter or value")
    deadlines_parser.add_argument(
        "--when",
        type=str,
        default="all",
        choices=["all", "today", "tomorrow", "this_week", "overdue"],
        help="Quick date filter (for list)",
    )
    deadlines_parser.add_argument(
        "--group",
        action="store_true",
        help="Group by course into exams and assignments (for list)",
    )
    deadlines_parser.add_argument("--category", type=str, default="select", help="exam or assignment (for add)")
    deadlines_parser.add_argument("--name", type=str, default="", help="Deadline name (for add)")
    deadlines_parser.add_argument("--due", type=str, default="", help="Due date YYYY-MM-DDTHH:MM (for add)")
    deadlines_parser.add_argument("--room", type=str, default="", help="Exam room (for add)")
    deadlines_parser.add_argument("--mode", type=str, default="", help="online, offline or both (for add)")
    deadlines_parser.add_argument("--link", type=str, default="", help="Submission link (for add)")
    deadlines_parser.add_argument("--id", type=str, default=None, help="Deadline id (for delete)")
    deadlines_parser.add_argument("--yes", action="store_true", help="Skip delete confirmation")

    # events
    events_parser = subparsers.add_parser("events", help="University calendar events")
    events_parser.add_argument("action", choices=["list"], help="List events")
    events_parser.add_argument("--upcoming", action="store_true", help="Only events that have not ended")
    events_parser.add_argument("--limit", type=int, default=None, help="Max events to show")

    # jobs
    jobs_parser = subparsers.add_parser("jobs", help="Job listings")
    jobs_parser.add_argument("action", choices=["list"], help="List jobs")
    jobs_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    jobs_parser.add_argument("--type", dest="job_type", type=str, default=None, help="Job type filter")
    jobs_parser.add_argument("--search", type=str, default="", help="Keyword search within the page")
    jobs_parser.add_argument("--open", action="store_true", help="Hide listings past their deadline")

    # budget
    budget_parser = subparsers.add_parser("budget", help="Budget tracker")
    budget_parser.add_argument(
        "action",
        choices=["summary", "calendar"],
        help="Totals and category breakdown, or a month calendar",
    )
    budget_parser.add_argument(
        "--month",
        type=str,
        default=None,
        help="Month YYYY-MM (default: current month)",
    )

    args = parser.parse_args(argv)

    settings = PortalSettings.from_env(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    api = _build_api(settings, _build_session(args))
    try:
        if args.command == "deadlines":
            _run_deadlines(api, args)
        elif args.command == "events":
            _run_events(api, args)
        elif args.command == "jobs":
            _run_jobs(api, args)
        elif args.command == "budget":
            _run_budget(api, args)
        else:
            parser.print_help()
    finally:
        api.close()


def _build_session(args: argparse.Namespace) -> Session:
    email = args.email or os.environ.get(f"{ENV_PREFIX}EMAIL")
    return Session(email=email, user_id=os.environ.get(f"{ENV_PREFIX}USER_ID"))


def _build_api(settings: PortalSettings, session: Session) -> ApiClient:
    return ApiClient(settings=settings, session=session)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _check(result: Result) -> None:
    """Failed results end the command with the user-facing message."""
    if result.ok or result.cancelled:
        return
    if result.field_errors:
        details = "; ".join(f"{k}: {v}" for k, v in result.field_errors.items())
        raise SystemExit(f"{result.message or 'Invalid input'} ({details})")
    raise SystemExit(result.message or "Request failed")


def _parse_month(value: Optional[str]) -> tuple[int, int]:
    if not value:
        today = date.today()
        return today.year, today.month
    try:
        year, month = (int(part) for part in value.split("-", 1))
    except ValueError:
        raise SystemExit("Invalid --month format. Use YYYY-MM.")
    if not 1 <= month <= 12:
        raise SystemExit("Invalid --month format. Use YYYY-MM.")
    return year, month


def _run_deadlines(api: ApiClient, args: argparse.Namespace) -> None:
    """Run deadlines command."""
    from student_hub.client.registry import ResourceRegistry
    from student_hub.controllers.resource import RemoteResourceController
    from student_hub.forms.definitions import DeadlineForm
    from student_hub.views.filters import filter_deadlines
    from student_hub.views.grouping import group_deadlines_by_course

    controller = RemoteResourceController(api, ResourceRegistry.get("deadlines"))

    if args.action == "list":
        _check(controller.load())
        deadlines = filter_deadlines(controller.state.items, course=args.course, quick=args.when)
        if args.group:
            output = {
                course: {kind: [d.model_dump(mode="json") for d in entries] for kind, entries in groups.items()}
                for course, groups in group_deadlines_by_course(deadlines).items()
            }
        else:
            output = [d.model_dump(mode="json") for d in deadlines]
        _print_json(output)
    elif args.action == "add":
        form = DeadlineForm(controller)
        form.set_fields(
            course_code="" if args.course == "all" else args.course,
            category=args.category,
            name=args.name,
            due_date=args.due,
            room=args.room,
            mode=args.mode,
            submission_link=args.link,
        )
        result = form.submit()
        _check(result)
        print(f"Added {args.category} \"{args.name}\" for {args.course.upper()}")
    elif args.action == "delete":
        if not args.id:
            raise SystemExit("deadlines delete requires --id")
        confirm = None if args.yes else _confirm_delete
        result = controller.remove(args.id, confirm=confirm)
        _check(result)
        print("Cancelled" if result.cancelled else f"Deleted {args.id}")


def _confirm_delete(record_id: str) -> bool:
    answer = input(f"Delete {record_id}? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def _run_events(api: ApiClient, args: argparse.Namespace) -> None:
    """Run events command."""
    from student_hub.client.registry import ResourceRegistry
    from student_hub.controllers.resource import RemoteResourceController
    from student_hub.views.filters import upcoming_events

    controller = RemoteResourceController(api, ResourceRegistry.get("events"))
    _check(controller.load())
    events = controller.state.items
    if args.upcoming:
        events = upcoming_events(events, limit=args.limit)
    elif args.limit is not None:
        events = events[: args.limit]
    _print_json([e.model_dump(mode="json") for e in events])


def _run_jobs(api: ApiClient, args: argparse.Namespace) -> None:
    """Run jobs command."""
    from student_hub.client.registry import ResourceRegistry
    from student_hub.controllers.paginated import PaginatedResourceController
    from student_hub.views.buckets import deadline_label
    from student_hub.views.filters import open_opportunities, search_opportunities

    controller = PaginatedResourceController(api, ResourceRegistry.get("jobs"))
    _check(controller.load_page(args.page, filters={"jobType": args.job_type}))
    jobs = controller.state.items
    if args.open:
        jobs = open_opportunities(jobs)
    if args.search:
        jobs = search_opportunities(jobs, args.search)
    _print_json(
        {
            "pagination": controller.pagination.model_dump(),
            "jobs": [
                {**j.model_dump(mode="json"), "deadlineLabel": deadline_label(j.deadline)}
                for j in jobs
            ],
        }
    )


def _run_budget(api: ApiClient, args: argparse.Namespace) -> None:
    """Run budget command."""
    from student_hub.client.registry import ResourceRegistry
    from student_hub.controllers.resource import RemoteResourceController
    from student_hub.views.budget import category_breakdown, month_calendar, summarize

    year, month = _parse_month(args.month)
    controller = RemoteResourceController(api, ResourceRegistry.get("transactions"))
    _check(controller.load({"month": f"{year:04d}-{month:02d}"}))
    transactions = [t for t in controller.state.items if (t.date.year, t.date.month) == (year, month)]

    if args.action == "summary":
        summary = summarize(transactions)
        _print_json(
            {
                "month": f"{year:04d}-{month:02d}",
                "totalIncome": summary.total_income,
                "totalExpense": summary.total_expense,
                "balance": summary.balance,
                "transactions": summary.transaction_count,
                "expenseByCategory": [
                    {"category": s.label, "total": s.total, "percent": s.percent}
                    for s in category_breakdown(transactions)
                ],
            }
        )
    elif args.action == "calendar":
        weeks = month_calendar(transactions, year, month)
        print(f"{year:04d}-{month:02d}")
        print("   Sun    Mon    Tue    Wed    Thu    Fri    Sat")
        for week in weeks:
            cells = []
            for cell in week:
                if cell is None:
                    cells.append("      ")
                elif cell.count:
                    cells.append(f"{cell.day.day:2d}{cell.balance:+4.0f}")
                else:
                    cells.append(f"{cell.day.day:2d}    ")
            print(" ".join(cells))


if __name__ == "__main__":
    main(sys.argv[1:])
