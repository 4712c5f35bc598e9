"""
Salary subsystem.

`extract` turns description text into a `SalaryEstimate`, `format`
turns stored fields into display strings, `equivalents` converts
between hourly and annual pay and `stats` aggregates pay across jobs.
Thresholds live in `rules`.
"""

from .rules import ANNUAL, DEFAULT_RULES, HOURLY, SalaryRules  # noqa: F401
from .extract import SalaryEstimate, extract_salary  # noqa: F401
from .equivalents import compute_equivalents, fill_missing_equivalents  # noqa: F401
from .format import format_pay, format_pay_compact  # noqa: F401
from .stats import calculate_salary_stats  # noqa: F401
