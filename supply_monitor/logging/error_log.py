from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from supply_monitor.models.error_record import ErrorRecord
from supply_monitor.models.row_outcome import DiscoveryResult

"""Skipped-row log.

Rows dropped during discovery are kept as ErrorRecords and appended as JSON
Lines to `logs/skipped-YYYYMMDD-HHMMSS.log` (UTC) on flush. Nothing is written
for a run where every row produced a record.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Skipped rows of one discovery run, flushed to a single log file."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir or LOGS_DIR

    @classmethod
    def from_result(
        cls, result: DiscoveryResult, sheet_id: str, tab: str, logs_dir: Path | None = None
    ) -> ErrorLogBuffer:
        """Buffer holding one record per skipped row, in sheet row order."""
        buffer = cls(logs_dir)
        for skip in result.skipped:
            buffer.append(ErrorRecord.from_skip(sheet_id, tab, skip))
        return buffer

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"skipped-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def counts_by_type(self) -> dict[str, int]:
        """Buffered records per error_type, e.g. {"MISSING_FIELDS": 2}."""
        return dict(Counter(r.error_type for r in self._records))

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records; returns the file written, or None if empty."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return fp
