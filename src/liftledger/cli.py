#!/usr/bin/env python3
"""
LiftLedger CLI.

Workout analytics over exported day or workout documents.

Usage:
    liftledger summary days.json --period month
    liftledger prs days.json --exercise bench-press squat
    liftledger leaderboard friends.json --metric volume --period 7days
    liftledger history days.json bench-press --modality strength --fetch
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .analytics import (
    filter_records_by_period,
    find_all_prs,
    get_analytics_summary,
    get_leaderboard,
    summarize_prs,
)
from .config import get_settings
from .exceptions import InsightServiceError
from .insights import (
    InsightService,
    extract_exercise_history,
    is_new_pr,
    should_fetch_insight,
)
from .logging_config import configure_logging
from .models import LeaderboardMetric, LeaderboardTimePeriod, Modality, TimePeriod, TrainingRecord
from .normalization import normalize_records

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class InputError(Exception):
    """Raised when an input file cannot be read."""


def _parse_today(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e.strerror or e}")
    except ValueError as e:
        raise InputError(f"Invalid JSON in {path}: {e}")


def load_records(path: str, kind: str = "day") -> List[TrainingRecord]:
    """Load and normalize a JSON list of stored documents."""
    data = _read_json(path)
    if not isinstance(data, list):
        raise InputError(f"{path} must contain a JSON list of {kind} documents")
    return normalize_records(data, kind)


def load_records_by_user(path: str, kind: str = "day") -> Dict[str, List[TrainingRecord]]:
    """Load a JSON object mapping user ids to document lists."""
    data = _read_json(path)
    if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
        raise InputError(f"{path} must contain a JSON object of user id -> {kind} documents")
    return {user_id: normalize_records(docs, kind) for user_id, docs in data.items()}


def _header(title: str) -> None:
    print()
    print(f"{Colors.BOLD}{title}{Colors.RESET}")
    print("=" * 40)


def _number(value: float) -> str:
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


def cmd_summary(args) -> int:
    """Show the analytics summary."""
    records = load_records(args.file, args.kind)
    today = args.today or date.today()
    scoped = filter_records_by_period(records, args.period, today=today)
    summary = get_analytics_summary(scoped, today=today)

    _header(f"LiftLedger Summary ({args.period})")
    print(f"  Workouts:           {summary.total_workouts}")
    print(f"  Current streak:     {Colors.GREEN}{summary.current_streak} day(s){Colors.RESET}")
    print(f"  Longest streak:     {summary.longest_streak} day(s)")
    print(f"  Favorite exercise:  {summary.favorite_exercise or '-'}")
    print(f"  Total volume:       {_number(summary.total_volume)}")
    print(f"  Cardio distance:    {_number(summary.total_cardio_distance)}")
    print(f"  Cardio duration:    {_number(summary.total_cardio_duration)}s")
    print(f"  Calisthenics reps:  {summary.total_calisthenics_reps}")
    print()
    return 0


def cmd_prs(args) -> int:
    """List personal records."""
    records = load_records(args.file, args.kind)
    prs = find_all_prs(records, args.exercise)
    summary = summarize_prs(prs, today=args.today)

    _header("Personal Records")
    if not prs:
        print("  No personal records yet.")
        print()
        return 0

    for pr in prs:
        print(
            f"  {Colors.CYAN}{pr.exercise_name:<24}{Colors.RESET}"
            f" {pr.pr_type.value:<12} {_number(pr.value):>10}  {pr.date}"
        )
    print()
    print(f"  Total: {summary.total_prs}  Recent: {summary.recent_prs}")
    print()
    return 0


def cmd_leaderboard(args) -> int:
    """Rank users from a {userId: [documents]} file."""
    records_by_user = load_records_by_user(args.file, args.kind)
    entries = get_leaderboard(records_by_user, args.metric, args.period, today=args.today)

    _header(f"Leaderboard: {args.metric} ({args.period})")
    for entry in entries:
        color = Colors.GREEN if entry.rank == 1 else ""
        reset = Colors.RESET if color else ""
        print(f"  {color}#{entry.rank:<3} {entry.user_id:<24} {_number(entry.value):>10}{reset}")
    print()
    return 0


def cmd_history(args) -> int:
    """Show an exercise's progress history and insight eligibility."""
    records = load_records(args.file, args.kind)
    settings = get_settings()
    history = extract_exercise_history(records, args.exercise, args.modality)
    eligible = should_fetch_insight(
        history,
        settings.insights_min_sessions,
        settings.insights_min_duration_days,
    )

    _header(f"History: {args.exercise} ({args.modality})")
    for point in history:
        print(f"  {point.date}  {_number(point.value):>10}")
    print()
    print(f"  Sessions: {len(history)}")
    if is_new_pr(history):
        print(f"  {Colors.GREEN}Latest session is a new PR{Colors.RESET}")
    status = f"{Colors.GREEN}yes{Colors.RESET}" if eligible else f"{Colors.YELLOW}not yet{Colors.RESET}"
    print(f"  Insight eligible: {status}")

    if args.fetch and eligible:
        insight = asyncio.run(_fetch_insight(records, args.exercise, args.modality))
        if insight is not None:
            print()
            print(f"  {Colors.BOLD}{insight.insight_text}{Colors.RESET}")
            print(f"  Change: {insight.delta:+.2f} ({insight.percent_change:+.1f}%)")
    print()
    return 0


async def _fetch_insight(records, exercise: str, modality: str):
    service = InsightService.from_settings()
    try:
        return await service.get_progress_insight(records, exercise, modality)
    finally:
        await service.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liftledger",
        description="LiftLedger - workout analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  liftledger summary days.json --period month
  liftledger prs days.json --exercise bench-press
  liftledger leaderboard friends.json --metric consistency --period 30days
  liftledger history days.json bench-press --fetch
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LIFTLEDGER_LOG_LEVEL or INFO)",
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="JSON file of exported documents")
    common.add_argument(
        "--kind",
        choices=["day", "workout"],
        default="day",
        help="Document kind in the file",
    )
    common.add_argument(
        "--today",
        type=_parse_today,
        default=None,
        help="Reference date (YYYY-MM-DD), defaults to the current date",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Summary command
    summary_p = subparsers.add_parser("summary", parents=[common], help="Show analytics summary")
    summary_p.add_argument(
        "--period",
        choices=[p.value for p in TimePeriod],
        default=TimePeriod.ALL.value,
        help="Time window to summarize",
    )
    summary_p.set_defaults(func=cmd_summary)

    # PRs command
    prs_p = subparsers.add_parser("prs", parents=[common], help="List personal records")
    prs_p.add_argument("--exercise", nargs="+", default=None, help="Only these exercise ids")
    prs_p.set_defaults(func=cmd_prs)

    # Leaderboard command
    leaderboard_p = subparsers.add_parser(
        "leaderboard", parents=[common], help="Rank users from a {userId: [documents]} file"
    )
    leaderboard_p.add_argument(
        "--metric",
        choices=[m.value for m in LeaderboardMetric],
        default=LeaderboardMetric.VOLUME.value,
    )
    leaderboard_p.add_argument(
        "--period",
        choices=[p.value for p in LeaderboardTimePeriod],
        default=LeaderboardTimePeriod.ALL.value,
    )
    leaderboard_p.set_defaults(func=cmd_leaderboard)

    # History command
    history_p = subparsers.add_parser(
        "history", parents=[common], help="Show progress history for one exercise"
    )
    history_p.add_argument("exercise", help="Exercise id or name")
    history_p.add_argument(
        "--modality",
        choices=[m.value for m in Modality],
        default=Modality.STRENGTH.value,
    )
    history_p.add_argument(
        "--fetch",
        action="store_true",
        help="Request an insight from the insight service when eligible",
    )
    history_p.set_defaults(func=cmd_history)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    configure_logging(args.log_level or get_settings().log_level)

    try:
        return args.func(args)
    except InputError as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1
    except InsightServiceError as e:
        print(f"{Colors.RED}Insight request failed: {e.message}{Colors.RESET}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
