"""
Command line interface for jobpay.

Subcommands cover each salary task: importing and exporting job rows,
backfilling salary columns from descriptions, filling missing
hourly/annual conversions, formatting a pay string, extracting a salary
from a single description and printing salary statistics.  The CLI only
parses arguments and prints results; the work happens in the `salary`,
`store` and `backfill` packages.

The backfill commands are dry runs unless ``--save`` is given.  The
process exits 0 once a batch completes, even when individual jobs
failed to save, and 1 on fatal errors such as an unreadable config or
job store.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from .backfill.runner import run_backfill, run_equivalents_backfill
from .config import AppConfig, load_config
from .errors import JobpayError
from .salary.extract import extract_salary
from .salary.format import format_amount, format_pay, format_range
from .salary.rules import ANNUAL, HOURLY
from .salary.stats import calculate_salary_stats
from .store.csv_io import load_jobs_csv, write_jobs_csv
from .store.db import JobStore

logger = logging.getLogger("jobpay.cli")

NO_PAY_DATA = "No pay data"


def _store(config: AppConfig) -> JobStore:
    store = JobStore(config.db_path)
    store.init_db()
    return store


def cmd_import(args: argparse.Namespace) -> None:
    """Load jobs from CSV into the store."""
    jobs = load_jobs_csv(args.csv)
    count = _store(args.app).upsert_jobs(jobs)
    logger.info("Imported %d jobs into %s", count, args.app.db_path)


def cmd_export(args: argparse.Namespace) -> None:
    """Write stored jobs to CSV."""
    jobs = _store(args.app).iter_jobs(args.employer)
    count = write_jobs_csv(jobs, args.out)
    logger.info("Exported %d jobs to %s", count, args.out)


def cmd_backfill(args: argparse.Namespace) -> None:
    """Extract salaries from descriptions of jobs missing salary data."""
    print("Salary backfill from formatted descriptions")
    print(f"Mode: {'SAVE (will update the job store)' if args.save else 'DRY RUN (no changes)'}")
    print(f"Employer: {args.employer or 'ALL'}\n")
    report = run_backfill(_store(args.app), employer=args.employer, save=args.save, rules=args.app.rules)
    print("--- Summary ---")
    print("\n".join(report.summary_lines()))
    if not args.save and report.extracted:
        print("\nRun with --save to update the job store")


def cmd_backfill_equivalents(args: argparse.Namespace) -> None:
    """Fill missing hourly/annual columns."""
    report = run_equivalents_backfill(
        _store(args.app), employer=args.employer, save=args.save, rules=args.app.rules
    )
    print("--- Results ---")
    print("\n".join(report.summary_lines("To update", "No change")))
    if not args.save and report.extracted:
        print("\nRun with --save to apply changes")


def cmd_format(args: argparse.Namespace) -> None:
    """Print the display string for a set of salary fields."""
    print(format_pay(args.min, args.max, args.type) or NO_PAY_DATA)


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract a salary from one description file."""
    if args.file == "-":
        text = sys.stdin.read()
    else:
        with open(args.file, "r", encoding="utf-8") as f:
            text = f.read()
    estimate = extract_salary(text, args.app.rules)
    if estimate is None:
        print("No salary found")
        return
    print(json.dumps(estimate.as_update(), indent=2))


def cmd_stats(args: argparse.Namespace) -> None:
    """Print salary statistics for active jobs."""
    jobs = list(_store(args.app).iter_jobs(args.employer, active_only=True))
    stats = calculate_salary_stats(jobs)
    print(f"Jobs with salary data: {stats.job_count}")
    for unit, unit_stats in ((HOURLY, stats.hourly), (ANNUAL, stats.annual)):
        if unit_stats is None:
            continue
        print(
            f"  {unit.capitalize()}: average {format_amount(unit_stats.average, unit)}, "
            f"range {format_range(unit_stats.min, unit_stats.max, unit)} "
            f"({unit_stats.job_count} jobs)"
        )
    for title, groups in (("By specialty", stats.by_specialty), ("By employer", stats.by_employer)):
        if not groups:
            continue
        print(f"\n{title}:")
        for group in groups:
            average = format_amount(group.hourly.average, HOURLY) if group.hourly else "n/a"
            print(f"  {group.name or group.key} ({group.job_count} jobs): {average}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobpay", description="Salary extraction and backfill tools")
    parser.add_argument("--config", help="YAML config file (default: $JOBPAY_CONFIG)")
    parser.add_argument("--db", help="Path to the SQLite job store (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Load jobs from a CSV file")
    import_cmd.add_argument("--csv", required=True, help="CSV file with job rows")
    import_cmd.set_defaults(func=cmd_import)

    export_cmd = subparsers.add_parser("export", help="Write stored jobs to a CSV file")
    export_cmd.add_argument("--out", default="jobs.csv", help="Output CSV path")
    export_cmd.add_argument("--employer", help="Only export this employer slug")
    export_cmd.set_defaults(func=cmd_export)

    for name, func, help_text in (
        ("backfill", cmd_backfill, "Extract salary columns from job descriptions"),
        ("backfill-equivalents", cmd_backfill_equivalents, "Fill missing hourly/annual columns"),
    ):
        cmd = subparsers.add_parser(name, help=help_text)
        cmd.add_argument("--save", action="store_true", help="Write results (default: dry run)")
        cmd.add_argument("--employer", help="Limit the run to one employer slug (default: all)")
        cmd.set_defaults(func=func)

    format_cmd = subparsers.add_parser("format", help="Format salary fields as a pay string")
    format_cmd.add_argument("--min", type=float, help="Minimum salary")
    format_cmd.add_argument("--max", type=float, help="Maximum salary")
    format_cmd.add_argument("--type", help="Salary type: hourly or annual")
    format_cmd.set_defaults(func=cmd_format)

    extract_cmd = subparsers.add_parser("extract", help="Extract a salary from a description file")
    extract_cmd.add_argument("--file", required=True, help="Description text file, or - for stdin")
    extract_cmd.set_defaults(func=cmd_extract)

    stats_cmd = subparsers.add_parser("stats", help="Print salary statistics")
    stats_cmd.add_argument("--employer", help="Only include this employer slug")
    stats_cmd.set_defaults(func=cmd_stats)
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except JobpayError as exc:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        logger.error("%s", exc)
        return 1
    if args.db:
        config = AppConfig(db_path=args.db, log_level=config.log_level, rules=config.rules)
    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    args.app = config
    try:
        args.func(args)
    except (JobpayError, OSError) as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
