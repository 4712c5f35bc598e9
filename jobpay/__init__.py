"""
Jobpay package: salary extraction, display and backfill for job listings.

The package is split into three cooperating parts:

1. **salary** – Pure functions.  `extract` recovers a pay figure from
   free‑text job descriptions (including the machine‑generated
   "Highlights" block), `equivalents` converts between hourly and
   annual figures, `format` renders stored fields for job cards and
   detail pages and `stats` summarises pay across many jobs.
2. **store** – A small SQLite job store plus CSV import/export.  The
   host application owns the real database; this store mirrors the
   columns the salary tools read and write.
3. **backfill** – Batch drivers that apply the extractor to stored jobs
   and write the derived salary columns.  Dry run is the default.

`cli` wires these together behind the `jobpay` command.
"""
