"""
Salary backfill runners.

Jobs classified before salary extraction existed carry a generated pay
line in their description but no structured salary columns.
`run_backfill` recovers those columns with the extractor; no external
service is called.  `run_equivalents_backfill` fills the derived
hourly/annual columns for jobs that already have raw salary figures.

Both runners default to a dry run that only reports what would change.
With ``save=True`` each job's salary columns are written in a single
transaction.  A failed write is logged and counted; the batch carries
on with the remaining jobs and nothing is retried.
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tqdm import tqdm

from ..errors import StoreError
from ..salary.equivalents import fill_missing_equivalents
from ..salary.extract import extract_salary
from ..salary.rules import DEFAULT_RULES, SalaryRules
from ..store.db import JobStore
from ..store.schema import JobRecord

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYER = "unknown"

# Travel contracts quote weekly pay in this band; converting it as hourly
# or annual would be wrong.
WEEKLY_RANGE = (1500, 5000)


@dataclass
class BackfillReport:
    """Counts collected over one backfill run.

    `by_employer` counts jobs with a result; `skipped_by_employer` and
    `failed_by_employer` count jobs with no result and failed writes.
    """

    employer: Optional[str]
    save: bool
    scanned: int = 0
    extracted: int = 0
    skipped: int = 0
    failed: int = 0
    saved: int = 0
    by_employer: Counter = field(default_factory=Counter)
    skipped_by_employer: Counter = field(default_factory=Counter)
    failed_by_employer: Counter = field(default_factory=Counter)

    def employer_counts(self, counts: Optional[Counter] = None) -> List[tuple]:
        counts = self.by_employer if counts is None else counts
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def summary_lines(self, found_label: str = "Salary extracted",
                      skipped_label: str = "No salary found") -> List[str]:
        lines = [
            f"Total scanned:    {self.scanned}",
            f"{found_label + ':':<18}{self.extracted}",
            f"{skipped_label + ':':<18}{self.skipped}",
            f"Write failures:   {self.failed}",
        ]
        sections = (
            ("By employer:", self.by_employer),
            (f"{skipped_label} by employer:", self.skipped_by_employer),
            ("Write failures by employer:", self.failed_by_employer),
        )
        for title, counts in sections:
            if counts:
                lines.append("")
                lines.append(title)
                lines.extend(f"  {slug}: {count}" for slug, count in self.employer_counts(counts))
        return lines


def _progress(jobs: List[JobRecord], desc: str):
    return tqdm(jobs, desc=desc, unit="job", file=sys.stderr, disable=not sys.stderr.isatty())


def _employer(job: JobRecord) -> str:
    return job.employer_slug or UNKNOWN_EMPLOYER


def _write(store: JobStore, job: JobRecord, values: Dict[str, object], report: BackfillReport) -> None:
    try:
        store.update_salary(job.job_id, values)
    except StoreError:
        logger.exception("Failed to save salary for job %s", job.job_id)
        report.failed += 1
        report.failed_by_employer[_employer(job)] += 1
    else:
        report.saved += 1


def run_backfill(
    store: JobStore,
    *,
    employer: Optional[str] = None,
    save: bool = False,
    rules: SalaryRules = DEFAULT_RULES,
) -> BackfillReport:
    """Extract salaries from descriptions of jobs with no salary columns.

    Args:
        store: Job store to read candidates from and write results to.
        employer: Restrict the run to one employer slug; ``None`` for all.
        save: Write results.  When false nothing is written.
        rules: Extraction thresholds.

    Returns:
        A `BackfillReport` with per‑employer success, skip and failure
        counts.
    """
    jobs = store.find_backfill_candidates(employer)
    report = BackfillReport(employer=employer, save=save, scanned=len(jobs))
    logger.info(
        "Found %d classified jobs without salary data (employer=%s, mode=%s)",
        len(jobs), employer or "ALL", "save" if save else "dry run",
    )
    for job in _progress(jobs, "backfill"):
        estimate = extract_salary(job.description, rules)
        slug = _employer(job)
        if estimate is None:
            report.skipped += 1
            report.skipped_by_employer[slug] += 1
            logger.debug("No salary found for %s", job.job_id)
            continue
        report.extracted += 1
        report.by_employer[slug] += 1
        logger.info(
            "%s: $%s-$%s/%s (%s)",
            job.title, estimate.salary_min, estimate.salary_max, estimate.salary_type, slug,
        )
        if save:
            _write(store, job, estimate.as_update(), report)
    logger.info(
        "Backfill finished: scanned=%d extracted=%d skipped=%d failed=%d",
        report.scanned, report.extracted, report.skipped, report.failed,
    )
    return report


def _is_weekly_travel(job: JobRecord) -> bool:
    low, high = WEEKLY_RANGE
    return "travel" in (job.title or "").lower() and low <= (job.salary_min or 0) <= high


def run_equivalents_backfill(
    store: JobStore,
    *,
    employer: Optional[str] = None,
    save: bool = False,
    rules: SalaryRules = DEFAULT_RULES,
) -> BackfillReport:
    """Fill missing hourly/annual columns for jobs with raw salary figures."""
    jobs = store.find_missing_equivalents(employer)
    report = BackfillReport(employer=employer, save=save, scanned=len(jobs))
    logger.info("Found %d jobs needing hourly conversion", len(jobs))
    for job in _progress(jobs, "equivalents"):
        slug = _employer(job)
        if _is_weekly_travel(job):
            logger.info("Skipping travel job with weekly pay: %s", job.title[:40])
            report.skipped += 1
            report.skipped_by_employer[slug] += 1
            continue
        update = fill_missing_equivalents(job, rules)
        if update is None:
            report.skipped += 1
            report.skipped_by_employer[slug] += 1
            continue
        report.extracted += 1
        report.by_employer[slug] += 1
        logger.debug("Would update %s: %s", job.job_id, update)
        if save:
            _write(store, job, update, report)
    return report
