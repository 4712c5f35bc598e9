"""Tests for pay display strings."""

from __future__ import annotations

import itertools

import pytest  # type: ignore

from jobpay.salary.format import (
    format_amount,
    format_job_pay,
    format_pay,
    format_pay_compact,
    format_range,
)
from jobpay.store.schema import JobRecord


@pytest.mark.parametrize(
    "salary_min, salary_max, salary_type, expected",
    [
        (35, 42, "hourly", "$35 - $42/hour"),
        (35.0, 42.0, "hourly", "$35 - $42/hour"),
        (70000, 85000, "annual", "$70,000 - $85,000/year"),
        (60000, None, "annual", "From $60,000/year"),
        (None, 50, "hourly", "Up to $50/hour"),
        (45, 45, "hourly", "$45/hour"),
        (35.5, 42, "hourly", "$35.50 - $42/hour"),
        (40, 50, None, None),
        (40, 50, "weekly", None),
        (40, 50, "Hourly", None),
        (None, None, "hourly", None),
    ],
)
def test_format_pay(salary_min, salary_max, salary_type, expected) -> None:
    assert format_pay(salary_min, salary_max, salary_type) == expected


def test_format_pay_is_total() -> None:
    bounds = [None, 40, 55]
    types = [None, "", "hourly", "annual", "weekly", 7]
    for low, high, salary_type in itertools.product(bounds, bounds, types):
        result = format_pay(low, high, salary_type)
        if (low is not None or high is not None) and salary_type in ("hourly", "annual"):
            assert result
            assert result == format_pay(low, high, salary_type)
        else:
            assert result is None


def test_equal_bounds_render_one_figure() -> None:
    for value in (20, 45.25, 120000):
        for salary_type in ("hourly", "annual"):
            text = format_pay(value, value, salary_type)
            assert text.count("$") == 1
            assert " - " not in text


def test_format_job_pay() -> None:
    job = JobRecord(job_id="j1", title="RN", salary_min=60000, salary_type="annual")
    assert format_job_pay(job) == "From $60,000/year"


def test_format_pay_compact() -> None:
    assert format_pay_compact(35, 42, 72800, 87360, "hourly") == "$35.00 - $42.00/hr"
    assert format_pay_compact(36, 43, 75000, 90000, "annual") == "$75k - $90k/yr"
    assert format_pay_compact(None, None, 75000, 75000, "annual") == "$75k/yr"
    assert format_pay_compact(40, 40, None, None, None) == "$40.00/hr"
    # Falls back to the unit that has both bounds.
    assert format_pay_compact(None, None, 80000, 95000, "hourly") == "$80k - $95k/yr"
    assert format_pay_compact(None, None, None, None, "hourly") is None


def test_statistic_formatters() -> None:
    assert format_amount(41.25, "hourly") == "$41.25/hour"
    assert format_amount(85800.4, "annual") == "$85,800/year"
    assert format_amount(None) is None
    assert format_range(30, 55, "hourly") == "$30.00 - $55.00/hour"
    assert format_range(62400, 104000, "annual") == "$62,400 - $104,000/year"
    assert format_range(30, None) is None
