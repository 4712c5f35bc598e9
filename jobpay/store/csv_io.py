"""
CSV import and export for job records.

Exports use the column order in `JOB_HEADERS`.  Imports accept the same
headers; empty cells become ``None`` and numeric salary columns are
parsed as floats.  Descriptions that arrive as HTML are reduced to
plain text with BeautifulSoup so the salary patterns see the same text
a reader would.
"""

from __future__ import annotations

import csv
import logging
import re
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from ..errors import StoreError
from .schema import JOB_HEADERS, SALARY_COLUMNS, JobRecord

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<(?:[a-zA-Z][a-zA-Z0-9]*|/[a-zA-Z][a-zA-Z0-9]*)[^>]*>")


def html_to_text(description: str) -> str:
    """Return `description` as plain text, leaving non‑HTML input alone."""
    if not description or not _TAG_RE.search(description):
        return description
    soup = BeautifulSoup(description, "html.parser")
    lines = [line.strip() for line in soup.get_text("\n").splitlines()]
    return "\n".join(line for line in lines if line)


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    return float(raw.replace(",", ""))


def _row_to_job(row: Dict[str, str]) -> JobRecord:
    data: Dict[str, object] = {key: (value if value != "" else None) for key, value in row.items()}
    for column in SALARY_COLUMNS:
        if column == "salary_type":
            continue
        data[column] = _optional_float(row.get(column))
    data["is_active"] = (row.get("is_active") or "True").strip().lower() in {"1", "true", "yes"}
    data["description"] = html_to_text(row.get("description") or "")
    data["title"] = row.get("title") or ""
    return JobRecord.from_mapping(data)


def load_jobs_csv(path: str) -> List[JobRecord]:
    """Read job records from a CSV file.

    Raises:
        StoreError: if the file is missing `job_id` or a row has an
            unparseable salary value.
    """
    jobs: List[JobRecord] = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames or "job_id" not in reader.fieldnames:
            raise StoreError(f"{path} has no job_id column")
        for line_no, row in enumerate(reader, start=2):
            try:
                jobs.append(_row_to_job(row))
            except ValueError as exc:
                raise StoreError(f"{path}:{line_no}: {exc}") from exc
    logger.info("Loaded %d jobs from %s", len(jobs), path)
    return jobs


def write_jobs_csv(jobs: Iterable[JobRecord], path: str) -> int:
    """Write job records to a CSV file, overwriting it.

    Returns:
        The number of rows written.
    """
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(JOB_HEADERS)
        for job in jobs:
            writer.writerow(job.to_csv_row())
            count += 1
    return count
