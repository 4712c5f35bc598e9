"""Tests for salary extraction from job descriptions.

Each matcher tier is exercised on text shaped like the classifier's
output: labelled ``Pay:`` lines, bare ranges with units and the
Highlights block fallback.  Sanity bounds must discard implausible
figures rather than return them.
"""

from __future__ import annotations

from dataclasses import replace

import pytest  # type: ignore

from jobpay.salary.equivalents import round_half_up
from jobpay.salary.extract import (
    MATCHERS,
    RawMatch,
    extract_salary,
    highlights_section,
    is_plausible,
    match_salary,
)
from jobpay.salary.rules import ANNUAL, DEFAULT_RULES, HOURLY

MATCHER_BY_NAME = {matcher.__name__: matcher for matcher in MATCHERS}


def test_bold_pay_hourly_range() -> None:
    estimate = extract_salary("## Role\n**Pay:** $35.00 - $42.00/hour\n")
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max, estimate.salary_type) == (35, 42, HOURLY)
    assert estimate.salary_min_hourly == 35
    assert estimate.salary_max_hourly == 42
    assert estimate.salary_min_annual == 72800
    assert estimate.salary_max_annual == 87360


def test_salary_range_annual() -> None:
    estimate = extract_salary("Salary Range: $70,000 - $85,000 annual")
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max, estimate.salary_type) == (70000, 85000, ANNUAL)
    assert estimate.salary_min_annual == 70000
    assert estimate.salary_max_annual == 85000
    assert estimate.salary_min_hourly == 34
    assert estimate.salary_max_hourly == 41


def test_single_amount_sets_min_and_max() -> None:
    estimate = extract_salary("Pay: $48.50 per hour, nights")
    assert estimate is not None
    assert estimate.salary_min == estimate.salary_max == 48.5
    assert estimate.as_update()["salary_min"] == 49


@pytest.mark.parametrize(
    "text",
    [
        "$38 to $45 per hour",
        "**Pay:** $38–$45/hr",
        "Pay Range: $38 - $45 hourly",
    ],
)
def test_hourly_separators_and_units(text: str) -> None:
    estimate = extract_salary(text)
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max, estimate.salary_type) == (38, 45, HOURLY)


def test_hourly_patterns_take_priority_over_annual() -> None:
    text = "Salary Range: $80,000 - $90,000 annual\nPay: $40/hour for per diem shifts"
    estimate = extract_salary(text)
    assert estimate is not None
    assert estimate.salary_type == HOURLY
    assert estimate.salary_min == 40


def test_salary_word_proximity_matcher_in_isolation() -> None:
    matcher = MATCHER_BY_NAME["annual_near_salary"]
    found = matcher("The salary for this role is $65,000 - $80,000 DOE", DEFAULT_RULES)
    assert found == RawMatch(65000, 80000, ANNUAL, "annual_near_salary")
    assert MATCHER_BY_NAME["hourly_range"]("no pay here", DEFAULT_RULES) is None


def test_highlights_range_classified_as_annual() -> None:
    text = (
        "Registered Nurse - Med/Surg\n\n"
        "## 📋 Highlights\n"
        "- 🏥 Level I trauma center\n"
        "- 💰 $70,000 - $90,000 depending on experience\n"
    )
    estimate = extract_salary(text)
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max, estimate.salary_type) == (70000, 90000, ANNUAL)
    assert match_salary(text).matcher == "highlights_range"


def test_highlights_single_classified_as_hourly() -> None:
    text = "## Highlights\n💰 Starting at $52 with shift differentials\n"
    estimate = extract_salary(text)
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max, estimate.salary_type) == (52, 52, HOURLY)


def test_pay_marker_outside_highlights_is_ignored() -> None:
    assert extract_salary("💰 $52 with shift differentials") is None


def test_day_rate_above_threshold_is_misread_and_rejected() -> None:
    # $600/day reads as annual and then fails the annual floor.
    assert match_salary("## Highlights\n💰 $600 per day").salary_type == ANNUAL
    assert extract_salary("## Highlights\n💰 $600 per day") is None


@pytest.mark.parametrize(
    "text",
    [
        "Pay: $15/hour",
        "**Pay:** $30,000/year",
        "Pay: $35 - $650/hour",
        "Join our ICU team. Great benefits and tuition support.",
        "",
    ],
)
def test_rejects_missing_or_implausible_pay(text: str) -> None:
    assert extract_salary(text) is None


def test_none_text() -> None:
    assert extract_salary(None) is None


def test_extraction_is_idempotent() -> None:
    text = "**Pay:** $35.00 - $42.00/hour"
    assert extract_salary(text) == extract_salary(text)


@pytest.mark.parametrize(
    "text",
    [
        "**Pay:** $35.00 - $42.00/hour",
        "Pay: $48.50 per hour",
        "Salary Range: $70,000 - $85,000 annual",
        "## Highlights\n💰 $95,000",
    ],
)
def test_equivalents_follow_hours_per_year(text: str) -> None:
    estimate = extract_salary(text)
    assert estimate is not None
    hours = DEFAULT_RULES.hours_per_year
    if estimate.salary_type == HOURLY:
        assert estimate.salary_min_annual == round_half_up(estimate.salary_min * hours)
        assert estimate.salary_max_annual == round_half_up(estimate.salary_max * hours)
    else:
        assert estimate.salary_min_hourly == round_half_up(estimate.salary_min / hours)
        assert estimate.salary_max_hourly == round_half_up(estimate.salary_max / hours)


def test_custom_rules() -> None:
    relaxed = replace(DEFAULT_RULES, hourly_floor=10)
    estimate = extract_salary("Pay: $15/hour", relaxed)
    assert estimate is not None and estimate.salary_min == 15

    marked = replace(DEFAULT_RULES, pay_marker="[PAY]")
    estimate = extract_salary("## Highlights\n[PAY] $45 plus benefits", marked)
    assert estimate is not None and estimate.salary_type == HOURLY


def test_is_plausible_bounds() -> None:
    assert is_plausible(20, 500, HOURLY)
    assert not is_plausible(19.99, 40, HOURLY)
    assert is_plausible(40000, 40000, ANNUAL)
    assert not is_plausible(39999, 90000, ANNUAL)
    assert not is_plausible(40, 50, "weekly")


def test_highlights_section() -> None:
    assert highlights_section("no heading") is None
    assert highlights_section("intro\n## Highlights\n- one").strip() == "- one"


@pytest.mark.parametrize(
    "text",
    [
        "**Pay:** $" + "9" * 400 + "/year",
        "## Highlights\n💰 $" + "9" * 400,
    ],
)
def test_digit_run_too_long_for_a_float_is_ignored(text: str) -> None:
    assert match_salary(text) is None
    assert extract_salary(text) is None


def test_reversed_range_is_ordered() -> None:
    estimate = extract_salary("Pay: $50 - $30/hour")
    assert estimate is not None
    assert (estimate.salary_min, estimate.salary_max) == (30, 50)
    assert (estimate.salary_min_annual, estimate.salary_max_annual) == (62400, 104000)

    found = match_salary("## Highlights\n💰 $85,000 - $70,000")
    assert (found.salary_min, found.salary_max, found.salary_type) == (70000, 85000, ANNUAL)


def test_highlights_amount_at_threshold_is_hourly() -> None:
    found = match_salary("## Highlights\n💰 $500")
    assert found is not None
    assert found.salary_type == HOURLY
    assert match_salary("## Highlights\n💰 $501").salary_type == ANNUAL
