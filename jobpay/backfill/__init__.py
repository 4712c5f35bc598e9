"""
Batch backfill of salary columns.

See `runner.py`.  Both runners are dry runs unless called with
``save=True``.
"""

from .runner import BackfillReport, run_backfill, run_equivalents_backfill  # noqa: F401
