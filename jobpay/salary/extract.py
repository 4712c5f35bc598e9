"""
Salary extraction from free‑text job descriptions.

Descriptions that went through the classifier contain a generated pay
line such as ``**Pay:** $35.00 - $42.00/hour`` and often a
``## Highlights`` block whose pay bullet is led by a money marker.  The
extractor tries a prioritised list of small matchers, each of which
either returns a raw `(min, max, type)` match or ``None``:

1. hourly matchers (labelled ``Pay:`` fields, then bare amounts with an
   hour unit);
2. annual matchers (labelled ``Pay:`` / ``Salary Range:`` fields, bare
   ranges with a year unit, then any range following the word
   "salary");
3. Highlights matchers, which only look at the marked pay line and
   classify the amount by magnitude.

The first matcher to succeed decides the result.  The match is then
checked against the sanity bounds in `SalaryRules`; implausible values
are discarded rather than stored.  No I/O happens here.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Optional, Pattern, Tuple

from .equivalents import compute_equivalents, round_half_up
from .rules import ANNUAL, DEFAULT_RULES, HOURLY, SalaryRules

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE

# Range separators: hyphen, en dash, em dash and the word "to".
_SEP = r"[-–—to]+"
_HOUR_UNIT = r"(?:hour|hr|hourly)"
_YEAR_UNIT = r"(?:year|annual|annually|yr)"
_PER = r"\s*/?\s*(?:per\s+)?"

# Hourly amounts keep their cents; annual amounts tolerate a ".00" tail.
_HOURLY_AMOUNT = r"\$([\d,.]+)"
_HOURLY_UPPER = r"\$?([\d,.]+)"
_ANNUAL_AMOUNT = r"\$([\d,]+)(?:\.00)?"
_ANNUAL_UPPER = r"\$?([\d,]+)(?:\.00)?"

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True)
class RawMatch:
    """A pay figure found in text, before sanity checks."""

    salary_min: float
    salary_max: float
    salary_type: str
    matcher: str


@dataclass(frozen=True)
class SalaryEstimate:
    """An accepted salary with its derived hourly and annual columns."""

    salary_min: float
    salary_max: float
    salary_type: str
    salary_min_hourly: int
    salary_max_hourly: int
    salary_min_annual: int
    salary_max_annual: int

    def as_update(self) -> Dict[str, object]:
        """Column values written back to the job store.

        The raw bounds are stored as whole units, like the rest of the
        salary columns.
        """
        update = asdict(self)
        update["salary_min"] = round_half_up(self.salary_min)
        update["salary_max"] = round_half_up(self.salary_max)
        return update


Matcher = Callable[[str, SalaryRules], Optional[RawMatch]]


def _parse_amount(raw: Optional[str]) -> Optional[float]:
    """Parse ``"70,000"`` or ``"35.50"``; ``None`` if no usable number is present."""
    if not raw:
        return None
    match = _NUMBER_RE.match(raw.replace(",", ""))
    if not match:
        return None
    value = float(match.group(0))
    # Digit runs too long for a float come back as inf.
    if not math.isfinite(value):
        return None
    return value


def _pattern_matcher(name: str, pattern: str, salary_type: str) -> Matcher:
    """Build a matcher from a regex whose groups are the min and (maybe empty) max."""
    compiled: Pattern[str] = re.compile(pattern, _FLAGS)

    def matcher(text: str, rules: SalaryRules) -> Optional[RawMatch]:
        match = compiled.search(text)
        if not match:
            return None
        low = _parse_amount(match.group(1))
        if not low:
            return None
        high = _parse_amount(match.group(2)) or low
        low, high = sorted((low, high))
        return RawMatch(low, high, salary_type, name)

    matcher.__name__ = name
    return matcher


HOURLY_MATCHERS: Tuple[Matcher, ...] = (
    _pattern_matcher(
        "hourly_bold_pay",
        rf"\*\*Pay:\*\*\s*{_HOURLY_AMOUNT}\s*(?:{_SEP}\s*{_HOURLY_UPPER})?{_PER}{_HOUR_UNIT}",
        HOURLY,
    ),
    _pattern_matcher(
        "hourly_pay",
        rf"Pay:\s*{_HOURLY_AMOUNT}\s*(?:{_SEP}\s*{_HOURLY_UPPER})?{_PER}{_HOUR_UNIT}",
        HOURLY,
    ),
    _pattern_matcher(
        "hourly_pay_range",
        rf"Pay Range:\s*{_HOURLY_AMOUNT}\s*{_SEP}\s*{_HOURLY_UPPER}\s*(?:per\s+)?{_HOUR_UNIT}",
        HOURLY,
    ),
    _pattern_matcher(
        "hourly_range",
        rf"{_HOURLY_AMOUNT}\s*{_SEP}\s*{_HOURLY_UPPER}\s*(?:per\s+)?{_HOUR_UNIT}",
        HOURLY,
    ),
    _pattern_matcher(
        "hourly_single",
        rf"{_HOURLY_AMOUNT}(){_PER}{_HOUR_UNIT}",
        HOURLY,
    ),
)

ANNUAL_MATCHERS: Tuple[Matcher, ...] = (
    _pattern_matcher(
        "annual_bold_pay",
        rf"\*\*Pay:\*\*\s*{_ANNUAL_AMOUNT}\s*(?:{_SEP}\s*{_ANNUAL_UPPER})?{_PER}{_YEAR_UNIT}",
        ANNUAL,
    ),
    _pattern_matcher(
        "annual_pay",
        rf"Pay:\s*{_ANNUAL_AMOUNT}\s*(?:{_SEP}\s*{_ANNUAL_UPPER})?{_PER}{_YEAR_UNIT}",
        ANNUAL,
    ),
    _pattern_matcher(
        "annual_salary_range",
        rf"(?:Salary|Pay) Range:\s*{_ANNUAL_AMOUNT}\s*(?:{_SEP}\s*{_ANNUAL_UPPER})?{_PER}{_YEAR_UNIT}",
        ANNUAL,
    ),
    _pattern_matcher(
        "annual_range",
        rf"{_ANNUAL_AMOUNT}\s*{_SEP}\s*{_ANNUAL_UPPER}{_PER}{_YEAR_UNIT}",
        ANNUAL,
    ),
    _pattern_matcher(
        "annual_near_salary",
        rf"salary.*?{_ANNUAL_AMOUNT}\s*{_SEP}\s*{_ANNUAL_UPPER}",
        ANNUAL,
    ),
)


def highlights_section(text: str, rules: SalaryRules = DEFAULT_RULES) -> Optional[str]:
    """Return the text after the Highlights heading, or ``None``."""
    match = re.search(rules.highlights_marker, text, re.IGNORECASE | re.MULTILINE)
    if not match:
        return None
    return text[match.end():]


def _classify_by_size(amount: float, rules: SalaryRules) -> str:
    # Known limitation: day or shift rates above the threshold read as annual.
    # The threshold itself counts as hourly here; infer_salary_type reads it
    # as annual.
    return ANNUAL if amount > rules.annual_threshold else HOURLY


def highlights_range(text: str, rules: SalaryRules) -> Optional[RawMatch]:
    section = highlights_section(text, rules)
    if section is None:
        return None
    pattern = rf"{re.escape(rules.pay_marker)}.*?{_HOURLY_AMOUNT}\s*{_SEP}\s*{_HOURLY_UPPER}"
    match = re.search(pattern, section, _FLAGS)
    if not match:
        return None
    low = _parse_amount(match.group(1))
    high = _parse_amount(match.group(2))
    if not low or not high:
        return None
    low, high = sorted((low, high))
    return RawMatch(low, high, _classify_by_size(low, rules), "highlights_range")


def highlights_single(text: str, rules: SalaryRules) -> Optional[RawMatch]:
    section = highlights_section(text, rules)
    if section is None:
        return None
    match = re.search(rf"{re.escape(rules.pay_marker)}.*?{_HOURLY_AMOUNT}", section, _FLAGS)
    if not match:
        return None
    value = _parse_amount(match.group(1))
    if not value:
        return None
    return RawMatch(value, value, _classify_by_size(value, rules), "highlights_single")


HIGHLIGHTS_MATCHERS: Tuple[Matcher, ...] = (highlights_range, highlights_single)

MATCHERS: Tuple[Matcher, ...] = HOURLY_MATCHERS + ANNUAL_MATCHERS + HIGHLIGHTS_MATCHERS


def match_salary(text: Optional[str], rules: SalaryRules = DEFAULT_RULES) -> Optional[RawMatch]:
    """Run the matchers in priority order and return the first hit."""
    if not text:
        return None
    for matcher in MATCHERS:
        found = matcher(text, rules)
        if found is not None:
            return found
    return None


def is_plausible(salary_min: float, salary_max: float, salary_type: str,
                 rules: SalaryRules = DEFAULT_RULES) -> bool:
    """Check a figure against the hourly window or the annual floor."""
    if salary_type == HOURLY:
        return all(rules.hourly_floor <= value <= rules.hourly_ceiling
                   for value in (salary_min, salary_max))
    if salary_type == ANNUAL:
        return salary_min >= rules.annual_floor and salary_max >= rules.annual_floor
    return False


def extract_salary(text: Optional[str], rules: SalaryRules = DEFAULT_RULES) -> Optional[SalaryEstimate]:
    """Extract a normalized salary from a job description.

    Args:
        text: Description text, possibly containing a Highlights block.
        rules: Thresholds and markers to use.

    Returns:
        A `SalaryEstimate`, or ``None`` when no pay figure is found or the
        figure fails the sanity bounds.
    """
    found = match_salary(text, rules)
    if found is None:
        return None
    if not is_plausible(found.salary_min, found.salary_max, found.salary_type, rules):
        logger.debug(
            "Discarding implausible %s pay %s-%s from %s",
            found.salary_type, found.salary_min, found.salary_max, found.matcher,
        )
        return None
    equivalents = compute_equivalents(found.salary_min, found.salary_max, found.salary_type, rules)
    return SalaryEstimate(found.salary_min, found.salary_max, found.salary_type, *equivalents)
