# store/schema.py
from dataclasses import dataclass, asdict, fields
from typing import Dict, Optional

JOB_HEADERS = [
    "job_id", "title", "employer_slug", "employer_name", "specialty",
    "job_type", "description", "classified_at", "is_active",
    "salary_min", "salary_max", "salary_type",
    "salary_min_hourly", "salary_max_hourly",
    "salary_min_annual", "salary_max_annual",
]

SALARY_COLUMNS = JOB_HEADERS[9:]


@dataclass
class JobRecord:
    job_id: str
    title: str
    employer_slug: Optional[str] = None
    employer_name: Optional[str] = None
    specialty: Optional[str] = None
    job_type: Optional[str] = None         # 'full-time' | 'travel' | ...
    description: str = ""                  # may embed a "## Highlights" block
    classified_at: Optional[str] = None    # ISO8601
    is_active: bool = True
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_type: Optional[str] = None      # 'hourly' | 'annual'
    salary_min_hourly: Optional[float] = None
    salary_max_hourly: Optional[float] = None
    salary_min_annual: Optional[float] = None
    salary_max_annual: Optional[float] = None

    def to_csv_row(self) -> list:
        d = asdict(self)
        d["is_active"] = "True" if self.is_active else "False"
        return ["" if d[h] is None else d[h] for h in JOB_HEADERS]

    @classmethod
    def from_mapping(cls, row: Dict[str, object]) -> "JobRecord":
        """Build a record from a dict keyed by `JOB_HEADERS`, ignoring extras."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})

