# Resolution report support for sourcedirs.
# This module owns the optional CSV record of a resolution run.
#
# The report is overwritten per run and flushed per row, so a run that fails
# midway still leaves the rows written so far.

from __future__ import annotations

import csv
from pathlib import Path

from sourcedirs.models import ResolvedDir

REPORT_HEADER = ["path", "origin"]


class ReportWriter:
    # CSV writer for resolved directories, one row per entry in result order.
    def __init__(self, path: Path):
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._fh)
        self._writer.writerow(REPORT_HEADER)

    def write(self, entry: ResolvedDir) -> None:
        self._writer.writerow([entry.path, entry.origin.value])
        self._fh.flush()

    def close(self) -> None:
        self._fh.close()

