"""
Job storage for the salary tools.

`JobStore` keeps job rows in SQLite; `load_jobs_csv` and
`write_jobs_csv` move them in and out of CSV files.  The row layout is
defined by the `JobRecord` dataclass in `schema.py`.
"""

from .schema import JOB_HEADERS, JobRecord  # noqa: F401
from .db import JobStore  # noqa: F401
from .csv_io import load_jobs_csv, write_jobs_csv  # noqa: F401
