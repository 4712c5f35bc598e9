"""
Salary statistics for salary pages.

Summaries are built from the derived hourly/annual columns.  Each job
contributes the midpoint of its range (or its single bound).  Travel
positions quote weekly rates and are left out so they do not skew the
averages.  Breakdowns by specialty and employer only include groups
with at least two jobs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .rules import ANNUAL, HOURLY

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2


@dataclass
class UnitStats:
    average: float
    min: Optional[float]
    max: Optional[float]
    job_count: int


@dataclass
class GroupStats:
    key: str
    name: Optional[str]
    job_count: int
    hourly: Optional[UnitStats] = None
    annual: Optional[UnitStats] = None


@dataclass
class SalaryStats:
    job_count: int = 0
    hourly: Optional[UnitStats] = None
    annual: Optional[UnitStats] = None
    by_specialty: List[GroupStats] = field(default_factory=list)
    by_employer: List[GroupStats] = field(default_factory=list)


def _columns(unit: str) -> tuple[str, str]:
    if unit == HOURLY:
        return "salary_min_hourly", "salary_max_hourly"
    if unit == ANNUAL:
        return "salary_min_annual", "salary_max_annual"
    raise ValueError(f"Unknown salary unit {unit!r}")


def is_travel_job(job) -> bool:
    return (job.job_type or "").lower() == "travel"


def job_midpoint(job, unit: str = HOURLY) -> Optional[float]:
    """Midpoint of a job's range in `unit`, or its only bound."""
    low_col, high_col = _columns(unit)
    low = getattr(job, low_col)
    high = getattr(job, high_col)
    if low is not None and high is not None:
        return (low + high) / 2
    if low is not None:
        return low
    return high


def _has_unit(job, unit: str) -> bool:
    low_col, high_col = _columns(unit)
    return getattr(job, low_col) is not None or getattr(job, high_col) is not None


def _unit_stats(jobs: List, unit: str) -> Optional[UnitStats]:
    midpoints = [m for m in (job_midpoint(job, unit) for job in jobs) if m is not None]
    if not midpoints:
        return None
    low_col, high_col = _columns(unit)
    lows = [getattr(job, low_col) for job in jobs if getattr(job, low_col) is not None]
    highs = [getattr(job, high_col) for job in jobs if getattr(job, high_col) is not None]
    return UnitStats(
        average=sum(midpoints) / len(midpoints),
        min=min(lows) if lows else None,
        max=max(highs) if highs else None,
        job_count=len(midpoints),
    )


def _group(jobs: Iterable, key_attr: str, name_attr: str) -> List[GroupStats]:
    groups: Dict[str, List] = {}
    names: Dict[str, Optional[str]] = {}
    for job in jobs:
        key = getattr(job, key_attr)
        if not key:
            continue
        groups.setdefault(key, []).append(job)
        names.setdefault(key, getattr(job, name_attr))
    results: List[GroupStats] = []
    for key, members in groups.items():
        if len(members) < MIN_GROUP_SIZE:
            continue
        hourly = _unit_stats(members, HOURLY)
        annual = _unit_stats(members, ANNUAL)
        if hourly is None and annual is None:
            continue
        results.append(GroupStats(key, names[key], len(members), hourly, annual))
    results.sort(key=lambda g: g.job_count, reverse=True)
    return results


def calculate_salary_stats(jobs: Iterable) -> SalaryStats:
    """Aggregate pay across jobs.

    Args:
        jobs: `JobRecord` objects (or anything with the same attributes).

    Returns:
        A `SalaryStats`; empty input gives zero counts and no unit stats.
    """
    jobs = [job for job in jobs if not is_travel_job(job)]
    with_hourly = [job for job in jobs if _has_unit(job, HOURLY)]
    with_annual = [job for job in jobs if _has_unit(job, ANNUAL)]
    stats = SalaryStats(
        job_count=max(len(with_hourly), len(with_annual)),
        hourly=_unit_stats(with_hourly, HOURLY),
        annual=_unit_stats(with_annual, ANNUAL),
        # Breakdowns are keyed off jobs that carry hourly data.
        by_specialty=_group(with_hourly, "specialty", "specialty"),
        by_employer=_group(with_hourly, "employer_slug", "employer_name"),
    )
    logger.debug("Computed salary stats over %d jobs", stats.job_count)
    return stats
