"""
Pay strings for job cards and detail pages.

All functions here are pure: they read already‑normalized salary
fields and return a display string, or ``None`` when there is nothing
to show.  Callers omit the pay line entirely on ``None``.  Unknown or
missing salary types are never guessed.
"""

from __future__ import annotations

from typing import Optional

from .equivalents import round_half_up
from .rules import ANNUAL, HOURLY

Number = Optional[float]

_UNITS = {HOURLY: "hour", ANNUAL: "year"}


def _money(value: float) -> str:
    """``70000 -> "70,000"``, ``35.5 -> "35.50"``."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_pay(salary_min: Number, salary_max: Number, salary_type: Optional[str]) -> Optional[str]:
    """Render the stored salary fields of a job.

    Args:
        salary_min: Lower bound in the unit given by `salary_type`.
        salary_max: Upper bound in the same unit.
        salary_type: ``"hourly"`` or ``"annual"``.

    Returns:
        ``"$35 - $42/hour"``, ``"$45/hour"``, ``"From $60,000/year"``,
        ``"Up to $50/hour"`` or ``None`` when there is no usable pay data.
    """
    if salary_min is None and salary_max is None:
        return None
    unit = _UNITS.get(salary_type) if isinstance(salary_type, str) else None
    if unit is None:
        return None
    if salary_min is not None and salary_max is not None:
        if salary_min == salary_max:
            return f"${_money(salary_min)}/{unit}"
        return f"${_money(salary_min)} - ${_money(salary_max)}/{unit}"
    if salary_min is not None:
        return f"From ${_money(salary_min)}/{unit}"
    return f"Up to ${_money(salary_max)}/{unit}"


def format_job_pay(job) -> Optional[str]:
    """`format_pay` over a `JobRecord`."""
    return format_pay(job.salary_min, job.salary_max, job.salary_type)


def _hourly_card(low: float, high: float) -> str:
    if low == high:
        return f"${low:.2f}/hr"
    return f"${low:.2f} - ${high:.2f}/hr"


def _annual_card(low: float, high: float) -> str:
    if low == high:
        return f"${round_half_up(low / 1000)}k/yr"
    return f"${round_half_up(low / 1000)}k - ${round_half_up(high / 1000)}k/yr"


def format_pay_compact(
    min_hourly: Number,
    max_hourly: Number,
    min_annual: Number,
    max_annual: Number,
    salary_type: Optional[str],
) -> Optional[str]:
    """Short card label built from the derived hourly/annual columns.

    The unit named by `salary_type` wins when both of its bounds are
    present.  Otherwise whichever unit has both bounds is used, hourly
    first.
    """
    has_hourly = bool(min_hourly) and bool(max_hourly)
    has_annual = bool(min_annual) and bool(max_annual)
    if salary_type == HOURLY and has_hourly:
        return _hourly_card(min_hourly, max_hourly)
    if salary_type == ANNUAL and has_annual:
        return _annual_card(min_annual, max_annual)
    if has_hourly:
        return _hourly_card(min_hourly, max_hourly)
    if has_annual:
        return _annual_card(min_annual, max_annual)
    return None


def format_amount(amount: Number, salary_type: str = HOURLY) -> Optional[str]:
    """Single statistic, e.g. an average: ``"$41.25/hour"`` or ``"$85,800/year"``."""
    if amount is None:
        return None
    if salary_type == HOURLY:
        return f"${amount:.2f}/hour"
    if salary_type == ANNUAL:
        return f"${round_half_up(amount):,}/year"
    return None


def format_range(low: Number, high: Number, salary_type: str = HOURLY) -> Optional[str]:
    """Statistic range, e.g. ``"$30.00 - $55.00/hour"``."""
    if low is None or high is None:
        return None
    if salary_type == HOURLY:
        return f"${low:.2f} - ${high:.2f}/hour"
    if salary_type == ANNUAL:
        return f"${round_half_up(low):,} - ${round_half_up(high):,}/year"
    return None
