from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .row_outcome import RowSkip

"""ErrorRecord model for the skipped-row log.

Each record is written as one JSON Lines entry with a fixed key set. row=-1 is
allowed for sheet-level problems where no row applies.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        sheet_id: Database spreadsheet id
        tab: Tab name within the spreadsheet
        row: Row number (1-based). -1 when unknown
        error_type: UPPER_SNAKE_CASE classification
        message: Human readable reason
    """
    timestamp: str
    sheet_id: str
    tab: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(sheet_id: str, tab: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            sheet_id=sheet_id,
            tab=tab,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_skip(sheet_id: str, tab: str, skip: RowSkip) -> ErrorRecord:
        return ErrorRecord.create(
            sheet_id=sheet_id,
            tab=tab,
            row=skip.row_number,
            error_type=skip.error_type,
            message=skip.reason,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
