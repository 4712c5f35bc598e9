"""
Unittest suite for the SQLite job store and CSV import/export.

Each test works against a fresh database in a temporary directory.  The
tests check the candidate queries used by the backfill runners, that
salary updates are all-or-nothing, and that CSV imports reduce HTML
descriptions to text.
"""

from __future__ import annotations

import csv
import tempfile
import unittest
from pathlib import Path

from jobpay.errors import StoreError
from jobpay.store.csv_io import html_to_text, load_jobs_csv, write_jobs_csv
from jobpay.store.db import JobStore
from jobpay.store.schema import JOB_HEADERS, JobRecord


class TestJobStore(unittest.TestCase):
    """Test cases for `JobStore`."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.store = JobStore(Path(self.temp_dir.name) / "db" / "jobs.db")
        self.store.init_db()
        self.store.upsert_jobs(
            [
                JobRecord(job_id="c1", title="ICU RN", employer_slug="acme",
                          classified_at="2025-01-01T00:00:00", description="**Pay:** $40/hour"),
                JobRecord(job_id="c2", title="ER RN", employer_slug="beta",
                          classified_at="2025-01-01T00:00:00", description="no pay"),
                JobRecord(job_id="u1", title="OR RN", employer_slug="acme",
                          description="**Pay:** $40/hour"),
                JobRecord(job_id="s1", title="PACU RN", employer_slug="acme",
                          classified_at="2025-01-01T00:00:00", salary_min=38, salary_max=44,
                          salary_type="hourly"),
                JobRecord(job_id="w1", title="Travel RN", employer_slug="beta",
                          salary_min=2500, salary_type="weekly"),
                JobRecord(job_id="i1", title="NICU RN", employer_slug="beta", is_active=False,
                          salary_min=41, salary_type="hourly"),
            ]
        )

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_get_job_round_trips_fields(self) -> None:
        job = self.store.get_job("s1")
        self.assertEqual(job.salary_type, "hourly")
        self.assertEqual(job.salary_min, 38)
        self.assertTrue(job.is_active)
        self.assertFalse(self.store.get_job("i1").is_active)
        self.assertIsNone(self.store.get_job("missing"))

    def test_backfill_candidates(self) -> None:
        ids = [job.job_id for job in self.store.find_backfill_candidates()]
        self.assertEqual(ids, ["c1", "c2"])
        scoped = [job.job_id for job in self.store.find_backfill_candidates("beta")]
        self.assertEqual(scoped, ["c2"])

    def test_missing_equivalents_candidates(self) -> None:
        ids = [job.job_id for job in self.store.find_missing_equivalents()]
        self.assertEqual(ids, ["s1"])

    def test_iter_jobs_filters(self) -> None:
        self.assertEqual(len(list(self.store.iter_jobs())), 6)
        self.assertEqual(len(list(self.store.iter_jobs("acme"))), 3)
        active_beta = [job.job_id for job in self.store.iter_jobs("beta", active_only=True)]
        self.assertEqual(active_beta, ["c2", "w1"])

    def test_update_salary(self) -> None:
        self.store.update_salary("c1", {"salary_min": 40, "salary_max": 40, "salary_type": "hourly"})
        job = self.store.get_job("c1")
        self.assertEqual((job.salary_min, job.salary_max, job.salary_type), (40, 40, "hourly"))

    def test_update_salary_rejects_unknown_columns(self) -> None:
        with self.assertRaises(StoreError):
            self.store.update_salary("c1", {"salary_min": 40, "title": "changed"})
        job = self.store.get_job("c1")
        self.assertIsNone(job.salary_min)
        self.assertEqual(job.title, "ICU RN")

    def test_update_salary_missing_job(self) -> None:
        with self.assertRaises(StoreError):
            self.store.update_salary("nope", {"salary_min": 40})

    def test_unreachable_store(self) -> None:
        # A directory cannot be opened as a database file.
        store = JobStore(self.temp_dir.name)
        with self.assertRaises(StoreError):
            store.init_db()


class TestCsvIO(unittest.TestCase):
    """Test cases for CSV import and export."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "jobs.csv"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_import_parses_types_and_html(self) -> None:
        with open(self.path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["job_id", "title", "description", "is_active",
                                                   "salary_min", "salary_type", "extra"])
            writer.writeheader()
            writer.writerow({
                "job_id": "h1",
                "title": "ICU RN",
                "description": "<p>**Pay:** $40/hour</p><ul><li>Nights</li></ul>",
                "is_active": "False",
                "salary_min": "",
                "salary_type": "",
                "extra": "ignored",
            })
            writer.writerow({
                "job_id": "h2",
                "title": "Nurse Manager",
                "description": "Salary Range: $90,000 - $110,000 annual",
                "is_active": "True",
                "salary_min": "90,000",
                "salary_type": "annual",
                "extra": "",
            })
        jobs = load_jobs_csv(str(self.path))
        self.assertEqual(len(jobs), 2)
        self.assertEqual(jobs[0].description, "**Pay:** $40/hour\nNights")
        self.assertFalse(jobs[0].is_active)
        self.assertIsNone(jobs[0].salary_min)
        self.assertIsNone(jobs[0].salary_type)
        self.assertEqual(jobs[1].salary_min, 90000.0)
        self.assertEqual(jobs[1].description, "Salary Range: $90,000 - $110,000 annual")

    def test_import_requires_job_id(self) -> None:
        self.path.write_text("title\nICU RN\n", encoding="utf-8")
        with self.assertRaises(StoreError):
            load_jobs_csv(str(self.path))

    def test_export_header(self) -> None:
        count = write_jobs_csv([JobRecord(job_id="e1", title="RN", salary_min=40)], str(self.path))
        self.assertEqual(count, 1)
        with open(self.path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[0], JOB_HEADERS)
        self.assertEqual(rows[1][0], "e1")
        self.assertEqual(rows[1][JOB_HEADERS.index("is_active")], "True")

    def test_html_to_text_leaves_plain_text(self) -> None:
        self.assertEqual(html_to_text("Pay: $40 < $50"), "Pay: $40 < $50")


if __name__ == "__main__":
    unittest.main()
