from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from ..errors import StoreError
from .schema import JOB_HEADERS, SALARY_COLUMNS, JobRecord

logger = logging.getLogger(__name__)

_SELECT = f"SELECT {', '.join(JOB_HEADERS)} FROM jobs"


def _row_to_job(row: sqlite3.Row) -> JobRecord:
    data = dict(row)
    data["is_active"] = bool(data["is_active"])
    return JobRecord(**data)


def _job_params(job: JobRecord) -> tuple:
    values = []
    for header in JOB_HEADERS:
        value = getattr(job, header)
        if header == "is_active":
            value = 1 if value else 0
        values.append(value)
    return tuple(values)


class JobStore:
    """SQLite table holding the job columns the salary tools use.

    Every public method opens its own connection.  A write is one
    transaction: it either lands completely or not at all.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open job store {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS jobs (
                        job_id TEXT PRIMARY KEY,
                        title TEXT NOT NULL,
                        employer_slug TEXT,
                        employer_name TEXT,
                        specialty TEXT,
                        job_type TEXT,
                        description TEXT NOT NULL DEFAULT '',
                        classified_at TEXT,
                        is_active INTEGER NOT NULL DEFAULT 1,
                        salary_min REAL,
                        salary_max REAL,
                        salary_type TEXT,
                        salary_min_hourly REAL,
                        salary_max_hourly REAL,
                        salary_min_annual REAL,
                        salary_max_annual REAL
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_jobs_employer_slug
                    ON jobs (employer_slug)
                    """
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot initialise job store: {exc}") from exc
        finally:
            conn.close()

    def upsert_jobs(self, jobs: Iterable[JobRecord]) -> int:
        """Insert or replace jobs by `job_id`; returns the number written."""
        placeholders = ", ".join("?" for _ in JOB_HEADERS)
        rows = [_job_params(job) for job in jobs]
        conn = self._connect()
        try:
            with conn:
                conn.executemany(
                    f"INSERT OR REPLACE INTO jobs ({', '.join(JOB_HEADERS)}) VALUES ({placeholders})",
                    rows,
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to write jobs: {exc}") from exc
        finally:
            conn.close()
        logger.debug("Upserted %d jobs into %s", len(rows), self.db_path)
        return len(rows)

    def _query(self, where: List[str], params: List[object]) -> List[JobRecord]:
        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY employer_slug, job_id"
        conn = self._connect()
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Job query failed: {exc}") from exc
        finally:
            conn.close()
        return [_row_to_job(row) for row in rows]

    def get_job(self, job_id: str) -> Optional[JobRecord]:
        jobs = self._query(["job_id = ?"], [job_id])
        return jobs[0] if jobs else None

    def iter_jobs(self, employer: Optional[str] = None, *, active_only: bool = False) -> Iterator[JobRecord]:
        where: List[str] = []
        params: List[object] = []
        if employer:
            where.append("employer_slug = ?")
            params.append(employer)
        if active_only:
            where.append("is_active = 1")
        yield from self._query(where, params)

    def find_backfill_candidates(self, employer: Optional[str] = None) -> List[JobRecord]:
        """Classified jobs that have no salary bounds yet."""
        where = ["salary_min IS NULL", "salary_max IS NULL", "classified_at IS NOT NULL"]
        params: List[object] = []
        if employer:
            where.append("employer_slug = ?")
            params.append(employer)
        return self._query(where, params)

    def find_missing_equivalents(self, employer: Optional[str] = None) -> List[JobRecord]:
        """Active jobs with a raw salary but no hourly conversion."""
        where = [
            "is_active = 1",
            "salary_min IS NOT NULL",
            "(salary_type IS NULL OR salary_type != 'weekly')",
            "(salary_min_hourly IS NULL OR salary_max_hourly IS NULL)",
        ]
        params: List[object] = []
        if employer:
            where.append("employer_slug = ?")
            params.append(employer)
        return self._query(where, params)

    def update_salary(self, job_id: str, values: Dict[str, object]) -> None:
        """Write salary columns for one job in a single transaction.

        Raises:
            StoreError: on unknown columns, a missing job, a value too
                large for an SQLite integer or a database failure.  Nothing
                is written in any of these cases.
        """
        unknown = sorted(set(values) - set(SALARY_COLUMNS))
        if unknown:
            raise StoreError(f"Not salary columns: {', '.join(unknown)}")
        if not values:
            return
        columns = list(values)
        assignments = ", ".join(f"{col} = ?" for col in columns)
        params = [values[col] for col in columns] + [job_id]
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(f"UPDATE jobs SET {assignments} WHERE job_id = ?", params)
                if cursor.rowcount != 1:
                    raise StoreError(f"Job {job_id} not found")
        except (sqlite3.Error, OverflowError) as exc:
            raise StoreError(f"Failed to update salary for {job_id}: {exc}") from exc
        finally:
            conn.close()
