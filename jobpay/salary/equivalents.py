"""
Hourly/annual conversion.

Stored jobs carry their pay in one unit (`salary_type`) and four
pre‑computed cross‑unit columns.  This module derives those columns
from the raw figures using `SalaryRules.hours_per_year`.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

from .rules import ANNUAL, DEFAULT_RULES, HOURLY, SalaryRules

Equivalents = Tuple[int, int, int, int]

EQUIVALENT_FIELDS = (
    "salary_min_hourly",
    "salary_max_hourly",
    "salary_min_annual",
    "salary_max_annual",
)


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves going up."""
    return int(math.floor(value + 0.5))


def compute_equivalents(
    salary_min: float,
    salary_max: float,
    salary_type: str,
    rules: SalaryRules = DEFAULT_RULES,
) -> Equivalents:
    """Return `(min_hourly, max_hourly, min_annual, max_annual)`.

    Raises:
        ValueError: if `salary_type` is not hourly or annual.
    """
    hours = rules.hours_per_year
    if salary_type == HOURLY:
        return (
            round_half_up(salary_min),
            round_half_up(salary_max),
            round_half_up(salary_min * hours),
            round_half_up(salary_max * hours),
        )
    if salary_type == ANNUAL:
        return (
            round_half_up(salary_min / hours),
            round_half_up(salary_max / hours),
            round_half_up(salary_min),
            round_half_up(salary_max),
        )
    raise ValueError(f"Cannot convert salary type {salary_type!r}")


def infer_salary_type(amount: float, rules: SalaryRules = DEFAULT_RULES) -> str:
    """Guess the unit of an untagged amount from its magnitude.

    An amount equal to `annual_threshold` is annual here, unlike the
    Highlights fallback in `extract`, which reads it as hourly.
    """
    return HOURLY if amount < rules.annual_threshold else ANNUAL


def fill_missing_equivalents(job, rules: SalaryRules = DEFAULT_RULES) -> Optional[Dict[str, object]]:
    """Compute the derived columns a job is missing.

    Only absent columns are filled; columns that already hold a value are
    kept.  A job without `salary_type` gets one inferred from the size of
    `salary_min`.  Types other than hourly and annual are left untouched.

    Args:
        job: A `JobRecord` (or anything with the same salary attributes).
        rules: Conversion constants.

    Returns:
        A dict of column updates, or ``None`` when nothing would change.
    """
    if job.salary_min is None:
        return None
    salary_type = job.salary_type or infer_salary_type(job.salary_min, rules)
    if salary_type not in (HOURLY, ANNUAL):
        return None

    min_hourly = job.salary_min_hourly
    max_hourly = job.salary_max_hourly
    min_annual = job.salary_min_annual
    max_annual = job.salary_max_annual
    hours = rules.hours_per_year

    if salary_type == HOURLY:
        if min_hourly is None:
            min_hourly = job.salary_min
        if max_hourly is None and job.salary_max is not None:
            max_hourly = job.salary_max
        if min_annual is None and min_hourly is not None:
            min_annual = round_half_up(min_hourly * hours)
        if max_annual is None and max_hourly is not None:
            max_annual = round_half_up(max_hourly * hours)
    else:
        if min_annual is None:
            min_annual = job.salary_min
        if max_annual is None and job.salary_max is not None:
            max_annual = job.salary_max
        if min_hourly is None and min_annual is not None:
            min_hourly = round_half_up(min_annual / hours)
        if max_hourly is None and max_annual is not None:
            max_hourly = round_half_up(max_annual / hours)

    update = {
        "salary_type": salary_type,
        "salary_min_hourly": min_hourly,
        "salary_max_hourly": max_hourly,
        "salary_min_annual": min_annual,
        "salary_max_annual": max_annual,
    }
    current = {key: getattr(job, key) for key in update}
    if update == current:
        return None
    return update
