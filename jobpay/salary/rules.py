"""
Tunable salary constants.

Every threshold used by the extractor and the converters lives on
`SalaryRules` so that a deployment can adjust them from the YAML
config without touching the parsing code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

from ..errors import ConfigError

HOURLY = "hourly"
ANNUAL = "annual"
SALARY_TYPES = (HOURLY, ANNUAL)


@dataclass(frozen=True)
class SalaryRules:
    hours_per_year: float = 2080
    hourly_floor: float = 20
    hourly_ceiling: float = 500
    annual_floor: float = 40000
    # A lone Highlights amount above this is read as annual pay.
    annual_threshold: float = 500
    highlights_marker: str = r"^##[ \t]*(?:\U0001F4CB[ \t]*)?Highlights\b"
    pay_marker: str = "\U0001F4B0"


DEFAULT_RULES = SalaryRules()

_NUMERIC_FIELDS = {
    "hours_per_year",
    "hourly_floor",
    "hourly_ceiling",
    "annual_floor",
    "annual_threshold",
}


def rules_from_mapping(raw: Dict[str, Any] | None, base: SalaryRules = DEFAULT_RULES) -> SalaryRules:
    """Build rules from a config mapping, keeping defaults for absent keys.

    Raises:
        ConfigError: on unknown keys, non‑numeric bounds, an empty
            hourly window, an invalid Highlights pattern or an empty pay
            marker.
    """
    if not raw:
        return base
    known = {f.name for f in fields(SalaryRules)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown salary settings: {', '.join(unknown)}")
    overrides: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in _NUMERIC_FIELDS:
            try:
                value = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"salary.{key} must be a number, got {value!r}") from exc
            if value <= 0:
                raise ConfigError(f"salary.{key} must be positive")
        else:
            value = "" if value is None else str(value)
            if not value:
                raise ConfigError(f"salary.{key} cannot be empty")
            if key == "highlights_marker":
                try:
                    re.compile(value)
                except re.error as exc:
                    raise ConfigError(f"salary.highlights_marker is not a valid pattern: {exc}") from exc
        overrides[key] = value
    rules = replace(base, **overrides)
    if rules.hourly_floor > rules.hourly_ceiling:
        raise ConfigError("salary.hourly_floor cannot exceed salary.hourly_ceiling")
    return rules
