"""
CLI (Command Line Interface).

Quick terminal commands on top of a JSON snapshot, e.g.:

    courseaccess check S1 L1 "2025-05-15 10:00:00"
    courseaccess check S1 L1 2025-05-15T09:59:00+02:00 --explain
    courseaccess periods S1 --course BIO101

Exit codes for `check`: 0 = allowed, 1 = denied, 2 = bad input / data error.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from courseaccess.availability import is_available, released_at
from courseaccess.catalog import check_access
from courseaccess.config import LOG_LEVELS, default_snapshot_path, log_level
from courseaccess.course_window import course_window_denial
from courseaccess.enrolment import enrolment_denial, merged_coverage
from courseaccess.errors import ConfigurationError, CourseAccessError
from courseaccess.instants import to_instant
from courseaccess.model import Content, Learner
from courseaccess.storage import load_snapshot

logger = logging.getLogger(__name__)

console = Console()


def _fmt(dt: Optional[datetime]) -> str:
    return "-" if dt is None else dt.isoformat(sep=" ")


def _explain_table(learner: Learner, content: Content, at: datetime) -> Table:
    """
    One row per check, in evaluation order. Later checks are still shown
    after a failure, marked as skipped.
    """
    course = content.course
    title = f"{escape(learner.learner_id)} -> {escape(content.content_id)} at {_fmt(at)}"
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Check", no_wrap=True)
    table.add_column("Window")
    table.add_column("Result", no_wrap=True)

    window = f"{_fmt(course.start)} .. {_fmt(course.end) if course.end else 'open'}"
    periods = learner.periods_for(course)
    period_text = ", ".join(f"{_fmt(p.start)} .. {_fmt(p.end)}" for p in periods) or "(none)"
    release = released_at(content)

    failed = False
    reasons = [
        ("course window", window, course_window_denial(course, at)),
        ("enrolment", period_text, enrolment_denial(learner, course, at)),
    ]
    for name, text, reason in reasons:
        if failed:
            table.add_row(name, text, "[dim]skipped[/]")
            continue
        if reason is None:
            table.add_row(name, text, "[green]ok[/]")
        else:
            failed = True
            table.add_row(name, text, f"[red]{reason.value}[/]")

    release_text = _fmt(release) if release else f"({content.kind.value}: no release time)"
    if failed:
        table.add_row("availability", release_text, "[dim]skipped[/]")
    elif not is_available(content, at):
        table.add_row("availability", release_text, "[red]content_not_yet_released[/]")
    else:
        table.add_row("availability", release_text, "[green]ok[/]")
    return table


def _cmd_check(args: argparse.Namespace) -> int:
    """
    Evaluate one access request and print ALLOW / DENY <reason>.
    """
    try:
        at = to_instant(args.at)
        snapshot = load_snapshot(args.snapshot)
        learner = snapshot.directory.get_learner(args.learner_id)
        content = snapshot.catalog.get_content(args.content_id)
        decision = check_access(snapshot.directory, snapshot.catalog, args.learner_id, args.content_id, at)
    except CourseAccessError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 2

    if args.explain:
        console.print(_explain_table(learner, content, at))

    if decision.allowed:
        console.print("[green]ALLOW[/]")
        return 0
    console.print(f"[red]DENY[/] {decision.reason.value}")
    return 1


def _cmd_periods(args: argparse.Namespace) -> int:
    """
    List the enrolment periods of a learner, plus merged coverage per course.
    """
    try:
        snapshot = load_snapshot(args.snapshot)
        learner = snapshot.directory.get_learner(args.learner_id)
    except CourseAccessError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 2

    course_ids = [args.course] if args.course else learner.enrolled_course_ids()
    if not course_ids:
        console.print(f"No enrolments for {learner.learner_id}.")
        return 0

    table = Table(title=f"Enrolments of {escape(learner.learner_id)}", box=box.SIMPLE)
    table.add_column("Course")
    table.add_column("Start", no_wrap=True)
    table.add_column("End", no_wrap=True)
    table.add_column("Merged coverage")

    for cid in course_ids:
        periods = learner.periods_for(cid)
        coverage = "; ".join(f"{_fmt(s)} .. {_fmt(e)}" for s, e in merged_coverage(periods))
        if not periods:
            table.add_row(cid, "-", "-", "(not enrolled)")
            continue
        for i, p in enumerate(periods):
            table.add_row(cid if i == 0 else "", _fmt(p.start), _fmt(p.end), coverage if i == 0 else "")

    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseaccess", description="Course content access checks")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default from config)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Can a learner view a content item at a given time?")
    p_check.add_argument("learner_id", type=str, help="Learner ID")
    p_check.add_argument("content_id", type=str, help="Content ID")
    p_check.add_argument("at", type=str, help="Timestamp, e.g. '2025-05-15 10:00:00' or ISO 8601")
    p_check.add_argument("--snapshot", type=Path, default=None, help="Snapshot JSON file")
    p_check.add_argument("--explain", action="store_true", help="Show each check")

    p_periods = sub.add_parser("periods", help="Show enrolment periods of a learner")
    p_periods.add_argument("learner_id", type=str, help="Learner ID")
    p_periods.add_argument("--course", type=str, default=None, help="Only this course")
    p_periods.add_argument("--snapshot", type=Path, default=None, help="Snapshot JSON file")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = args.log_level or log_level()
    except ConfigurationError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        raise SystemExit(2)
    logging.basicConfig(level=level)

    if getattr(args, "snapshot", None) is None:
        args.snapshot = default_snapshot_path()
    logger.debug("cli_command", extra={"command": args.command, "snapshot": str(args.snapshot)})

    if args.command == "check":
        raise SystemExit(_cmd_check(args))
    if args.command == "periods":
        raise SystemExit(_cmd_periods(args))

    raise SystemExit(2)
